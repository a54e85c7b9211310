"""Image buffers: (height, width, channels) float64, interleaved row-major."""

import numpy as np
from typing import List, Sequence, Tuple


def new_image(width: int, height: int, channels: int) -> np.ndarray:
    """Zero-filled image."""
    if width <= 0 or height <= 0 or channels <= 0:
        raise ValueError(f"Invalid image dimensions: {width}x{height}x{channels}")
    return np.zeros((height, width, channels), dtype=np.float64)


def as_image(array) -> np.ndarray:
    """Validated float64 copy; 2D input becomes a single-channel image."""
    image = np.array(array, dtype=np.float64)
    if image.ndim == 2:
        image = image[:, :, np.newaxis]
    if image.ndim != 3:
        raise ValueError(f"Expected a 2D or 3D array, got shape {image.shape}")
    if min(image.shape) <= 0:
        raise ValueError(f"Invalid image dimensions: {image.shape}")
    return image


def image_dims(image: np.ndarray) -> Tuple[int, int, int]:
    """(width, height, channels)."""
    if image.ndim == 2:
        return image.shape[1], image.shape[0], 1
    return image.shape[1], image.shape[0], image.shape[2]


def sample_index(width: int, channels: int, row: int, col: int, channel: int) -> int:
    """Flat offset of a sample in the interleaved buffer."""
    return (row * width + col) * channels + channel


def split_planes(image: np.ndarray) -> List[np.ndarray]:
    """Copy each channel out as a 2D plane."""
    return [image[:, :, c].copy() for c in range(image.shape[2])]


def merge_planes(planes: Sequence[np.ndarray]) -> np.ndarray:
    """Stack equally sized 2D planes into one image."""
    if not planes:
        raise ValueError("No planes to merge")
    shape = planes[0].shape
    for plane in planes:
        if plane.shape != shape:
            raise ValueError(f"Plane shape mismatch: {plane.shape} vs {shape}")
    return np.stack([np.asarray(p, dtype=np.float64) for p in planes], axis=-1)


def to_interleaved(image: np.ndarray) -> np.ndarray:
    """Flat copy in (row * width + col) * channels + channel order."""
    return np.ascontiguousarray(image, dtype=np.float64).ravel().copy()


def from_interleaved(buffer, width: int, height: int, channels: int) -> np.ndarray:
    """Inverse of to_interleaved. Raw bytes are read as one octet per sample."""
    if isinstance(buffer, (bytes, bytearray, memoryview)):
        buffer = np.frombuffer(buffer, dtype=np.uint8)
    data = np.asarray(buffer, dtype=np.float64).ravel()
    expected = width * height * channels
    if width <= 0 or height <= 0 or channels <= 0:
        raise ValueError(f"Invalid image dimensions: {width}x{height}x{channels}")
    if data.size != expected:
        raise ValueError(f"Buffer holds {data.size} samples, expected {expected}")
    return data.reshape(height, width, channels).copy()


def from_rgba(buffer, width: int, height: int) -> np.ndarray:
    """Canvas RGBA bytes to a BGR image."""
    rgba = from_interleaved(buffer, width, height, 4)
    return rgba[:, :, 2::-1].copy()


def to_rgba(image: np.ndarray) -> np.ndarray:
    """BGR or single-channel image to opaque RGBA uint8."""
    clipped = np.clip(image, 0, 255)
    if clipped.ndim == 2:
        clipped = clipped[:, :, np.newaxis]
    h, w = clipped.shape[:2]
    rgba = np.empty((h, w, 4), dtype=np.uint8)
    if clipped.shape[2] == 1:
        rgba[:, :, :3] = clipped.astype(np.uint8)
    else:
        rgba[:, :, :3] = clipped[:, :, 2::-1].astype(np.uint8)
    rgba[:, :, 3] = 255
    return rgba
