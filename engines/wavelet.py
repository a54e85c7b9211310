"""Orthonormal Haar wavelet transforms: 8x8 blocks and whole planes."""

import numpy as np
from typing import List, Optional, Tuple

from utils.constants import BLOCK_SIZE, BLOCK_DWT_LEVELS, MAX_DWT_LEVELS

INV_SQRT2 = 0.70710678118654752440


def haar_forward_1d(data: np.ndarray, axis: int = -1) -> np.ndarray:
    """One Haar step along `axis`: averages in the first half, details in the second.

    avg[k] = (x[2k] + x[2k+1]) / sqrt(2)
    det[k] = (x[2k] - x[2k+1]) / sqrt(2)
    """
    moved = np.moveaxis(np.asarray(data, dtype=np.float64), axis, -1)
    if moved.shape[-1] % 2:
        raise ValueError(f"Haar step needs an even length, got {moved.shape[-1]}")
    even, odd = moved[..., 0::2], moved[..., 1::2]
    out = np.concatenate([(even + odd) * INV_SQRT2, (even - odd) * INV_SQRT2], axis=-1)
    return np.moveaxis(out, -1, axis)


def haar_inverse_1d(data: np.ndarray, axis: int = -1) -> np.ndarray:
    """Undo haar_forward_1d along `axis`."""
    moved = np.moveaxis(np.asarray(data, dtype=np.float64), axis, -1)
    n = moved.shape[-1]
    if n % 2:
        raise ValueError(f"Haar step needs an even length, got {n}")
    half = n // 2
    avg, det = moved[..., :half], moved[..., half:]
    out = np.empty_like(moved)
    out[..., 0::2] = (avg + det) * INV_SQRT2
    out[..., 1::2] = (avg - det) * INV_SQRT2
    return np.moveaxis(out, -1, axis)


def calc_dwt_levels(width: int, height: int) -> int:
    """Times both dimensions can be halved while staying >= 2, capped at 6."""
    levels = 0
    w, h = width, height
    while w >= 2 and h >= 2:
        levels += 1
        w >>= 1
        h >>= 1
    return min(levels, MAX_DWT_LEVELS)


def level_extents(width: int, height: int, levels: int) -> List[Tuple[int, int]]:
    """(wt, ht) of the region transformed at each level, finest first.

    Dimensions are rounded down to even; an odd trailing row or column
    stays untransformed at that level.
    """
    if levels < 0:
        raise ValueError(f"Levels must be non-negative, got {levels}")
    extents = []
    w, h = width, height
    for _ in range(levels):
        if w < 2 or h < 2:
            break
        wt, ht = w & ~1, h & ~1
        extents.append((wt, ht))
        w, h = wt // 2, ht // 2
    return extents


def dwt_image(plane: np.ndarray, levels: Optional[int] = None) -> np.ndarray:
    """Multi-level 2D Haar on a plane of any size (rows, then columns)."""
    out = np.array(plane, dtype=np.float64)
    if out.ndim != 2:
        raise ValueError(f"Expected a 2D plane, got shape {out.shape}")
    h, w = out.shape
    if levels is None:
        levels = calc_dwt_levels(w, h)
    for wt, ht in level_extents(w, h, levels):
        region = haar_forward_1d(out[:ht, :wt], axis=1)
        out[:ht, :wt] = haar_forward_1d(region, axis=0)
    return out


def idwt_image(coeffs: np.ndarray, levels: Optional[int] = None) -> np.ndarray:
    """Inverse of dwt_image: coarsest level first, columns then rows."""
    out = np.array(coeffs, dtype=np.float64)
    if out.ndim != 2:
        raise ValueError(f"Expected a 2D plane, got shape {out.shape}")
    h, w = out.shape
    if levels is None:
        levels = calc_dwt_levels(w, h)
    for wt, ht in reversed(level_extents(w, h, levels)):
        region = haar_inverse_1d(out[:ht, :wt], axis=0)
        out[:ht, :wt] = haar_inverse_1d(region, axis=1)
    return out


def _require_block(block: np.ndarray) -> np.ndarray:
    block = np.asarray(block, dtype=np.float64)
    if block.shape != (BLOCK_SIZE, BLOCK_SIZE):
        raise ValueError(f"Expected a {BLOCK_SIZE}x{BLOCK_SIZE} block, got {block.shape}")
    return block


def haar_block_forward(block: np.ndarray) -> np.ndarray:
    """3-level Haar on an 8x8 block. [0, 0] holds the block DC (8 * mean)."""
    return dwt_image(_require_block(block), BLOCK_DWT_LEVELS)


def haar_block_inverse(coeffs: np.ndarray) -> np.ndarray:
    """Exact inverse of haar_block_forward."""
    return idwt_image(_require_block(coeffs), BLOCK_DWT_LEVELS)


def dwt_quant_step(x: int, y: int, width: int, height: int, levels: int, base_step: float) -> float:
    """Quantization step of coefficient (x, y) in a `levels`-deep decomposition.

    Detail band of level `lev` (0 = finest) gets base_step / 2**lev; the LL
    approximation gets the smallest step, base_step / 2**levels. Never below 1.
    """
    extents = level_extents(width, height, levels)
    for lev in range(len(extents) - 1, -1, -1):
        tw, th = extents[lev]
        in_block = x < tw and y < th
        in_ll = x < tw // 2 and y < th // 2
        if in_block and not in_ll:
            return max(1.0, base_step / 2.0 ** lev)
    return max(1.0, base_step / 2.0 ** levels)


def dwt_step_map(width: int, height: int, levels: int, base_step: float) -> np.ndarray:
    """dwt_quant_step evaluated for every coefficient of a (height, width) plane."""
    steps = np.full((height, width), max(1.0, base_step / 2.0 ** levels), dtype=np.float64)
    for lev, (tw, th) in enumerate(level_extents(width, height, levels)):
        band = np.zeros((height, width), dtype=bool)
        band[:th, :tw] = True
        band[:th // 2, :tw // 2] = False
        steps[band] = max(1.0, base_step / 2.0 ** lev)
    return steps
