"""Quantization operations."""

import numpy as np
from typing import Tuple

from utils.constants import JPEG_LUMA_Q50, JPEG_CHROMA_Q50, DWT_BASE_STEP


def round_half_away(values) -> np.ndarray:
    """Round to nearest integer, halves away from zero."""
    values = np.asarray(values, dtype=np.float64)
    return np.sign(values) * np.floor(np.abs(values) + 0.5)


def quality_scale(quality: float) -> float:
    """JPEG quality scaling as a multiplier of the base tables."""
    if quality <= 0:
        raise ValueError(f"Quality must be positive, got {quality}")
    
    # JPEG scaling formula
    if quality < 50:
        scale = 5000.0 / quality
    else:
        scale = 200.0 - 2.0 * quality
    
    return scale / 100.0


def scale_quant_matrix(base_matrix: np.ndarray, quality: float) -> np.ndarray:
    """Scale quantization matrix by quality factor; entries never below 1."""
    Q = round_half_away(np.asarray(base_matrix, dtype=np.float64) * quality_scale(quality))
    return np.maximum(Q, 1.0)


def make_quant_tables(quality: float) -> Tuple[np.ndarray, np.ndarray]:
    """(luma, chroma) tables for the DCT path."""
    return (scale_quant_matrix(JPEG_LUMA_Q50, quality),
            scale_quant_matrix(JPEG_CHROMA_Q50, quality))


def dwt_base_step(quality: float) -> float:
    """Finest-detail step for the wavelet paths."""
    return DWT_BASE_STEP * quality_scale(quality)


def quantize(coeffs: np.ndarray, steps: np.ndarray) -> np.ndarray:
    """Quantize coefficients to integer-valued indices."""
    return round_half_away(np.asarray(coeffs, dtype=np.float64) / steps)


def dequantize(indices: np.ndarray, steps: np.ndarray) -> np.ndarray:
    """Dequantize indices."""
    return np.asarray(indices, dtype=np.float64) * steps
