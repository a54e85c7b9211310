"""Synthetic BGR test images for codec demos."""

import numpy as np
from typing import Optional


def generate_ramp(width: int = 64, height: int = 64) -> np.ndarray:
    """B = x, G = y, R = x + y (each mod 256). Smooth, every channel differs."""
    y, x = np.mgrid[0:height, 0:width]
    img = np.stack([x % 256, y % 256, (x + y) % 256], axis=-1)
    return img.astype(np.float64)


def generate_gradient(size: int = 512) -> np.ndarray:
    """Smooth diagonal gradient - reveals banding from quantization."""
    i, j = np.mgrid[0:size, 0:size]
    t = (i + j) / max(2 * size - 2, 1)
    img = np.stack([
        120 + t * 100,   # B
        60 + t * 140,    # G
        40 + t * 180,    # R
    ], axis=-1)
    return np.clip(img, 0, 255)


def generate_colored_checkerboard(size: int = 512, block_size: int = 32) -> np.ndarray:
    """High-contrast checkerboard - shows blocking and chroma aliasing."""
    i, j = np.mgrid[0:size, 0:size]
    dark = ((i // block_size + j // block_size) % 2) == 0
    img = np.where(dark[:, :, np.newaxis], 30.0, 220.0)
    return np.repeat(img, 3, axis=2)


def generate_thin_stripes(size: int = 512, stripe_width: int = 4) -> np.ndarray:
    """Fine vertical stripes - shows aliasing from subsampling."""
    img = np.zeros((size, size, 3), dtype=np.float64)
    first = (np.arange(size) // stripe_width) % 2 == 0
    img[:, first] = [60, 60, 200]
    img[:, ~first] = [200, 180, 60]
    return img


def generate_text_edges(size: int = 512) -> np.ndarray:
    """Sharp geometric shapes - shows ringing and edge artifacts."""
    img = np.full((size, size, 3), 245.0)
    
    margin = size // 10
    bar_height = max(size // 16, 8)
    
    # Horizontal bars of varying thickness
    y = margin
    for thickness in [bar_height, bar_height // 2, bar_height // 4, 2]:
        img[y:y + thickness, margin:size - margin] = 25.0
        y += thickness + margin // 2
    
    # Vertical bars
    x = margin
    for thickness in [bar_height, bar_height // 2, bar_height // 4, 2]:
        img[size // 2 + margin:size - margin, x:x + thickness] = 25.0
        x += thickness + margin // 2
    
    return img


def generate_chroma_stripes(size: int = 512) -> np.ndarray:
    """Saturated color bars - shows chroma bleeding and subsampling effects."""
    img = np.zeros((size, size, 3), dtype=np.float64)
    
    colors = [
        [40, 40, 180],    # Red
        [40, 160, 40],    # Green
        [180, 80, 40],    # Blue
        [40, 180, 180],   # Yellow
        [180, 40, 180],   # Magenta
        [180, 180, 40],   # Cyan
        [40, 120, 200],   # Orange
        [180, 40, 120],   # Purple
    ]
    
    stripe_width = size // len(colors)
    
    for i, color in enumerate(colors):
        x_start = i * stripe_width
        x_end = (i + 1) * stripe_width if i < len(colors) - 1 else size
        img[:, x_start:x_end] = color
    
    return img


DEMO_IMAGES = {
    "ramp": lambda size: generate_ramp(size, size),
    "gradient": generate_gradient,
    "checkerboard": generate_colored_checkerboard,
    "stripes": generate_thin_stripes,
    "text_edges": generate_text_edges,
    "chroma_stripes": generate_chroma_stripes,
}


def generate_demo_image(key: str, size: int = 256) -> Optional[np.ndarray]:
    """Generate demo image by key."""
    generator = DEMO_IMAGES.get(key)
    if generator is None:
        return None
    return generator(size)
