"""Block processing: iteration, extraction, block-wise plane mapping."""

import numpy as np
from typing import Callable, Iterator, Tuple

from utils.constants import BLOCK_SIZE


def iter_full_blocks(shape: Tuple[int, int], block_size: int = BLOCK_SIZE) -> Iterator[Tuple[int, int]]:
    """Top-left (row, col) of every complete block; partial edge blocks are skipped."""
    h, w = shape
    for i in range(0, h - block_size + 1, block_size):
        for j in range(0, w - block_size + 1, block_size):
            yield i, j


def extract_block(plane: np.ndarray, block_x: int, block_y: int, block_size: int = BLOCK_SIZE) -> np.ndarray:
    """Copy block (block_x, block_y), zero-padded where it runs past the plane edge."""
    h, w = plane.shape
    i, j = block_y * block_size, block_x * block_size
    if block_x < 0 or block_y < 0 or i >= h or j >= w:
        raise ValueError(f"Block ({block_x}, {block_y}) lies outside a {w}x{h} plane")
    block = plane[i:i+block_size, j:j+block_size]
    if block.shape[0] < block_size or block.shape[1] < block_size:
        padded_block = np.zeros((block_size, block_size), dtype=np.float64)
        padded_block[:block.shape[0], :block.shape[1]] = block
        block = padded_block
    return np.array(block, dtype=np.float64)


def map_blocks(
    plane: np.ndarray,
    block_fn: Callable[[np.ndarray], Tuple[np.ndarray, np.ndarray]],
    block_size: int = BLOCK_SIZE
) -> Tuple[np.ndarray, np.ndarray]:
    """Apply block_fn to each complete block.

    block_fn returns (reconstructed, coefficients) for one block. Partial
    boundary blocks are copied untouched into both outputs.
    """
    plane = np.asarray(plane, dtype=np.float64)
    result = plane.copy()
    coeffs = plane.copy()
    for (i, j) in iter_full_blocks(plane.shape, block_size):
        recon_block, coeff_block = block_fn(plane[i:i+block_size, j:j+block_size])
        result[i:i+block_size, j:j+block_size] = recon_block
        coeffs[i:i+block_size, j:j+block_size] = coeff_block
    return result, coeffs
