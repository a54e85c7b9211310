"""Color space conversion and chroma resampling."""

import numpy as np
import cv2
from typing import Tuple

from models.codec_config import ChromaMode


def _require_tri_channel(image: np.ndarray) -> None:
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected a 3-channel image, got shape {image.shape}")


def bgr_to_ycrcb(bgr: np.ndarray) -> np.ndarray:
    """BGR to Y/Cr/Cb. Exact, no clamping."""
    _require_tri_channel(bgr)
    bgr = np.asarray(bgr, dtype=np.float64)
    B, G, R = bgr[:, :, 0], bgr[:, :, 1], bgr[:, :, 2]
    Y = 0.299 * R + 0.587 * G + 0.114 * B
    Cr = (R - Y) * 0.713 + 128.0
    Cb = (B - Y) * 0.564 + 128.0
    return np.stack([Y, Cr, Cb], axis=-1)


def ycrcb_to_bgr(ycrcb: np.ndarray) -> np.ndarray:
    """Y/Cr/Cb to BGR, clamped to [0, 255]."""
    _require_tri_channel(ycrcb)
    ycrcb = np.asarray(ycrcb, dtype=np.float64)
    Y, Cr, Cb = ycrcb[:, :, 0], ycrcb[:, :, 1], ycrcb[:, :, 2]
    R = Y + 1.402 * (Cr - 128.0)
    G = Y - 0.344136 * (Cb - 128.0) - 0.714136 * (Cr - 128.0)
    B = Y + 1.772 * (Cb - 128.0)
    bgr = np.stack([B, G, R], axis=-1)
    return np.clip(bgr, 0, 255)


def downsampled_shape(shape: Tuple[int, int], mode: ChromaMode) -> Tuple[int, int]:
    """Ceiling-divided (height, width) of a subsampled plane."""
    sx, sy = mode.scale
    h, w = shape
    return (h + sy - 1) // sy, (w + sx - 1) // sx


def downsample_plane(
    plane: np.ndarray,
    mode: ChromaMode,
    use_prefilter: bool = False
) -> np.ndarray:
    """Block-average a chroma plane; edge cells average only existing samples."""
    mode = ChromaMode.parse(mode)
    plane = np.asarray(plane, dtype=np.float64)
    if mode is ChromaMode.CS_444:
        return plane.copy()
    
    # Anti-alias blur before downsampling
    if use_prefilter:
        plane = cv2.GaussianBlur(plane, (3, 3), sigmaX=0.75)
    
    sx, sy = mode.scale
    h, w = plane.shape
    out_h, out_w = downsampled_shape((h, w), mode)
    pad = ((0, out_h * sy - h), (0, out_w * sx - w))
    sums = np.pad(plane, pad).reshape(out_h, sy, out_w, sx).sum(axis=(1, 3))
    counts = np.pad(np.ones_like(plane), pad).reshape(out_h, sy, out_w, sx).sum(axis=(1, 3))
    return sums / counts


def upsample_plane(
    plane: np.ndarray,
    target_shape: Tuple[int, int],
    mode: ChromaMode
) -> np.ndarray:
    """Nearest-neighbour expansion: out[y, x] = in[y // sy, x // sx]."""
    mode = ChromaMode.parse(mode)
    plane = np.asarray(plane, dtype=np.float64)
    if mode is ChromaMode.CS_444:
        return plane.copy()
    sx, sy = mode.scale
    h, w = target_shape
    rows = np.arange(h) // sy
    cols = np.arange(w) // sx
    if rows[-1] >= plane.shape[0] or cols[-1] >= plane.shape[1]:
        raise ValueError(
            f"Plane {plane.shape} too small to upsample to {target_shape} for {mode.label}"
        )
    return plane[np.ix_(rows, cols)]


def subsample_chroma(
    cr: np.ndarray,
    cb: np.ndarray,
    mode: ChromaMode,
    use_prefilter: bool = False
) -> Tuple[np.ndarray, np.ndarray]:
    """Subsample both chroma planes according to mode."""
    return (downsample_plane(cr, mode, use_prefilter),
            downsample_plane(cb, mode, use_prefilter))


def upsample_chroma(
    cr_sub: np.ndarray,
    cb_sub: np.ndarray,
    target_shape: Tuple[int, int],
    mode: ChromaMode
) -> Tuple[np.ndarray, np.ndarray]:
    """Upsample both chroma planes to target resolution."""
    return (upsample_plane(cr_sub, target_shape, mode),
            upsample_plane(cb_sub, target_shape, mode))
