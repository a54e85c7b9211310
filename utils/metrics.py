"""Metrics: PSNR, SSIM, heuristic rate estimation, timing."""

import logging
import time
import numpy as np
from scipy.ndimage import uniform_filter
from skimage.metrics import mean_squared_error, structural_similarity
from typing import Dict, Sequence, Tuple

from utils.constants import (
    PSNR_CEILING_DB, PSNR_MSE_FLOOR, SSIM_C1, SSIM_C2, SSIM_WINDOW, SSIM_STRIDE,
    ZERO_COEFF_BITS, NONZERO_OVERHEAD_BITS, HEADER_BITS,
)

logger = logging.getLogger(__name__)


def _same_shape(a: np.ndarray, b: np.ndarray, what: str) -> bool:
    if a.shape != b.shape:
        logger.warning("%s: shape mismatch %s vs %s", what, a.shape, b.shape)
        return False
    return True


def compute_psnr(a: np.ndarray, b: np.ndarray) -> float:
    """PSNR in dB for 8-bit range. 100 dB when MSE <= 1e-10, 0.0 on shape mismatch."""
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if not _same_shape(a, b, "PSNR") or a.size == 0:
        return 0.0
    mse = mean_squared_error(a, b)
    if mse <= PSNR_MSE_FLOOR:
        return PSNR_CEILING_DB
    return float(10.0 * np.log10((255.0 * 255.0) / mse))


def _plane_ssim(x: np.ndarray, y: np.ndarray) -> float:
    # Uniform window of +-SSIM_WINDOW/2 samples around each centre, clipped at
    # the plane border; centres on a SSIM_STRIDE grid.
    taps = 2 * (SSIM_WINDOW // 2) + 1
    counts = uniform_filter(np.ones_like(x), size=taps, mode='constant', cval=0.0)

    def local_mean(values):
        return uniform_filter(values, size=taps, mode='constant', cval=0.0) / counts

    ux = local_mean(x)
    uy = local_mean(y)
    sigx2 = local_mean(x * x) - ux * ux
    sigy2 = local_mean(y * y) - uy * uy
    sigxy = local_mean(x * y) - ux * uy

    num = (2 * ux * uy + SSIM_C1) * (2 * sigxy + SSIM_C2)
    den = (ux * ux + uy * uy + SSIM_C1) * (sigx2 + sigy2 + SSIM_C2)
    index = num / den
    return float(np.mean(index[::SSIM_STRIDE, ::SSIM_STRIDE]))


def compute_ssim(a: np.ndarray, b: np.ndarray) -> float:
    """Windowed SSIM with a uniform 8x8-class window and stride 4.

    An approximation of the Gaussian-weighted index; see compute_gaussian_ssim.
    Multi-channel inputs average the per-channel scores. 0.0 on shape mismatch.
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if not _same_shape(a, b, "SSIM") or a.size == 0:
        return 0.0
    if a.ndim == 2:
        return _plane_ssim(a, b)
    scores = [_plane_ssim(a[:, :, c], b[:, :, c]) for c in range(a.shape[2])]
    return float(np.mean(scores))


def compute_gaussian_ssim(a: np.ndarray, b: np.ndarray) -> float:
    """Reference SSIM (Gaussian window, sigma 1.5) on a plane.

    NaN when the plane is smaller than the 11x11 window.
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if not _same_shape(a, b, "Gaussian SSIM"):
        return 0.0
    if a.ndim != 2 or min(a.shape) < 11:
        return float('nan')
    return float(structural_similarity(
        a, b, data_range=255, gaussian_weights=True, sigma=1.5,
        use_sample_covariance=False,
    ))


class Timer:
    """Simple timer for codec/analysis runtime."""
    
    def __init__(self):
        self.process_time_ms = 0.0
        self.analysis_time_ms = 0.0
    
    def measure_process(self, func, *args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        self.process_time_ms += (time.perf_counter() - start) * 1000.0
        return result
    
    def measure_analysis(self, func, *args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        self.analysis_time_ms += (time.perf_counter() - start) * 1000.0
        return result


def estimate_bits(values: np.ndarray) -> float:
    """Rough bit cost of quantized coefficients.

    0.5 bit per near-zero value (|v| < 0.5), log2|v| + 3 otherwise (magnitude,
    sign and overhead), plus a fixed header. A relative rate proxy only.
    """
    magnitudes = np.abs(np.asarray(values, dtype=np.float64)).ravel()
    small = magnitudes < 0.5
    bits = ZERO_COEFF_BITS * np.count_nonzero(small)
    bits += np.sum(np.log2(magnitudes[~small]) + NONZERO_OVERHEAD_BITS)
    return float(bits + HEADER_BITS)


def estimate_bitrate(
    coeff_planes: Sequence[np.ndarray],
    original_shape: Tuple[int, int]
) -> Dict:
    """
    Estimate compressed size WITHOUT entropy coding.
    
    Applies estimate_bits to every coefficient plane and relates the total to
    the 24 bpp of the uncompressed image.
    """
    h, w = original_shape
    num_pixels = h * w
    original_bits = num_pixels * 3 * 8
    
    if coeff_planes:
        flat = np.concatenate([np.asarray(p, dtype=np.float64).ravel() for p in coeff_planes])
    else:
        flat = np.array([], dtype=np.float64)
    estimated_bits = estimate_bits(flat)
    
    return {
        'estimated_bits': estimated_bits,
        'bpp': float(estimated_bits / num_pixels),
        'compression_ratio': float(original_bits / max(estimated_bits, 1.0)),
        'nonzero_count': int(np.count_nonzero(np.abs(flat) >= 0.5)),
        'total_coeffs': int(flat.size),
        'label': 'Estimated (no entropy coding)'
    }
