"""Fidelity analysis: per-plane metrics and diagnostic maps."""

import logging
import numpy as np

from models.codec_metrics import CodecMetrics
from engines.color_space import bgr_to_ycrcb
from utils.constants import ARTIFACT_GAIN, BLOCK_SIZE
from utils.metrics import compute_psnr, compute_ssim

logger = logging.getLogger(__name__)


def compute_artifact_map(
    original: np.ndarray,
    reconstructed: np.ndarray,
    gain: float = ARTIFACT_GAIN
) -> np.ndarray:
    """Amplified absolute difference, min(255, |a - b| * gain), same shape as inputs.

    On a shape mismatch the map is all zeros, shaped like `original`.
    """
    original = np.asarray(original, dtype=np.float64)
    reconstructed = np.asarray(reconstructed, dtype=np.float64)
    if original.shape != reconstructed.shape:
        logger.warning("Artifact map: shape mismatch %s vs %s", original.shape, reconstructed.shape)
        return np.zeros_like(original)
    return np.minimum(255.0, np.abs(original - reconstructed) * gain)


def _gradient_magnitude(plane: np.ndarray) -> np.ndarray:
    gx = plane[1:-1, 2:] - plane[1:-1, :-2]
    gy = plane[2:, 1:-1] - plane[:-2, 1:-1]
    return np.sqrt(gx * gx + gy * gy)


def compute_edge_distortion_map(original: np.ndarray, reconstructed: np.ndarray) -> np.ndarray:
    """Loss of edge strength or spurious edges between two planes.

    Central-difference gradient magnitudes are compared per interior pixel:
    min(255, 4 * |g_orig - g_recon|). The one-pixel border stays 0.
    """
    original = np.asarray(original, dtype=np.float64)
    reconstructed = np.asarray(reconstructed, dtype=np.float64)
    if original.ndim != 2 or original.shape != reconstructed.shape:
        raise ValueError(
            f"Edge distortion needs two equal planes, got {original.shape} and {reconstructed.shape}"
        )
    edge_map = np.zeros_like(original)
    if min(original.shape) < 3:
        return edge_map
    diff = np.abs(_gradient_magnitude(original) - _gradient_magnitude(reconstructed)) * 4.0
    edge_map[1:-1, 1:-1] = np.minimum(255.0, diff)
    return edge_map


def compute_blocking_map(reconstructed: np.ndarray, block_size: int = BLOCK_SIZE) -> np.ndarray:
    """Discontinuities across block-grid boundaries of a plane, scaled by 8."""
    plane = np.asarray(reconstructed, dtype=np.float64)
    if plane.ndim != 2:
        raise ValueError(f"Blocking map needs a plane, got shape {plane.shape}")
    score = np.zeros_like(plane)
    cols = np.arange(block_size, plane.shape[1], block_size)
    rows = np.arange(block_size, plane.shape[0], block_size)
    score[:, cols] += np.abs(plane[:, cols] - plane[:, cols - 1])
    score[rows, :] += np.abs(plane[rows, :] - plane[rows - 1, :])
    return np.minimum(255.0, score * 8.0)


def compute_metrics(original_bgr: np.ndarray, reconstructed_bgr: np.ndarray) -> CodecMetrics:
    """PSNR and SSIM per Y/Cr/Cb plane, plus the BGR artifact map."""
    original_bgr = np.asarray(original_bgr, dtype=np.float64)
    reconstructed_bgr = np.asarray(reconstructed_bgr, dtype=np.float64)
    if original_bgr.shape != reconstructed_bgr.shape:
        logger.warning("Metrics: shape mismatch %s vs %s", original_bgr.shape, reconstructed_bgr.shape)
        return CodecMetrics(artifact_map=np.zeros_like(original_bgr))

    original = bgr_to_ycrcb(original_bgr)
    recon = bgr_to_ycrcb(reconstructed_bgr)
    psnr = [compute_psnr(original[:, :, c], recon[:, :, c]) for c in range(3)]
    ssim = [compute_ssim(original[:, :, c], recon[:, :, c]) for c in range(3)]

    return CodecMetrics(
        psnr_y=psnr[0],
        psnr_cr=psnr[1],
        psnr_cb=psnr[2],
        ssim_y=ssim[0],
        ssim_cr=ssim[1],
        ssim_cb=ssim[2],
        artifact_map=compute_artifact_map(original_bgr, reconstructed_bgr),
    )
