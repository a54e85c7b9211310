"""DCT/IDCT operations with level shift."""

import numpy as np
from scipy.fft import dctn, idctn

from utils.constants import BLOCK_SIZE, LEVEL_SHIFT


def dct2(block: np.ndarray) -> np.ndarray:
    """2D DCT-II with orthonormal normalization."""
    return dctn(np.asarray(block, dtype=np.float64), type=2, norm='ortho')


def idct2(coeffs: np.ndarray) -> np.ndarray:
    """2D inverse DCT (Type-III)."""
    return idctn(np.asarray(coeffs, dtype=np.float64), type=2, norm='ortho')


def encode_block(block: np.ndarray) -> np.ndarray:
    """Level shift (-128) then DCT."""
    shifted = np.asarray(block, dtype=np.float64) - LEVEL_SHIFT
    return dct2(shifted)


def decode_block(coeffs: np.ndarray) -> np.ndarray:
    """IDCT then reverse level shift (+128). Unclamped."""
    return idct2(coeffs) + LEVEL_SHIFT


def dct_basis(u: int, v: int, size: int = BLOCK_SIZE) -> np.ndarray:
    """Spatial pattern of coefficient (u, v): idct2 of a unit impulse."""
    if not (0 <= u < size and 0 <= v < size):
        raise ValueError(f"Basis index ({u}, {v}) outside {size}x{size}")
    impulse = np.zeros((size, size), dtype=np.float64)
    impulse[u, v] = 1.0
    return idct2(impulse)
