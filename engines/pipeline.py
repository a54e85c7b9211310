"""Main compression/reconstruction pipeline."""

import logging
import numpy as np
from typing import Iterable, List, Tuple

from models.codec_config import CodecConfig
from models.compression_result import CompressionResult
from models.intermediate_data import IntermediateData
from engines.pixel_buffer import as_image
from engines.color_space import bgr_to_ycrcb
from engines.codec import ImageCodec
from engines.analysis import compute_metrics, compute_edge_distortion_map, compute_blocking_map
from utils.metrics import Timer, compute_gaussian_ssim, estimate_bitrate

logger = logging.getLogger(__name__)


def compress_reconstruct(
    image_bgr: np.ndarray,
    config: CodecConfig,
    selected_block_idx: Tuple[int, int] = (0, 0)
) -> Tuple[CompressionResult, IntermediateData]:
    """Run the codec on a BGR image and analyse what was lost.

    selected_block_idx is (block_row, block_col) of the luma block to snapshot.
    """
    timer = Timer()
    image = as_image(image_bgr)
    original_shape = image.shape[:2]
    codec = ImageCodec(config)
    
    # === CODEC ===
    reconstructed, coeff_planes = timer.measure_process(codec.encode_decode, image)
    
    # === METRICS ===
    metrics = timer.measure_analysis(compute_metrics, image, reconstructed)
    ycrcb = bgr_to_ycrcb(image)
    ycrcb_recon = bgr_to_ycrcb(reconstructed)
    Y_original, Y_recon = ycrcb[:, :, 0], ycrcb_recon[:, :, 0]
    ssim_y_gaussian = timer.measure_analysis(compute_gaussian_ssim, Y_original, Y_recon)
    bitrate_info = estimate_bitrate(coeff_planes, original_shape)
    
    logger.debug(
        "q=%.1f %s %s: PSNR_Y=%.2f dB, %.3f bpp",
        config.quality, config.transform.name, config.chroma_mode.label,
        metrics.psnr_y, bitrate_info['bpp'],
    )
    
    result = CompressionResult(
        config=config,
        original_image=image,
        reconstructed_image=reconstructed,
        metrics=metrics,
        ssim_y_gaussian=ssim_y_gaussian,
        estimated_bits=bitrate_info['estimated_bits'],
        bpp=bitrate_info['bpp'],
        compression_ratio=bitrate_info['compression_ratio'],
        nonzero_coeffs=bitrate_info['nonzero_count'],
        total_coeffs=bitrate_info['total_coeffs'],
        process_time_ms=timer.process_time_ms,
        analysis_time_ms=timer.analysis_time_ms,
        bitrate_label=bitrate_info['label']
    )
    
    # === INTERMEDIATE DATA ===
    all_coeffs_flat = np.concatenate([p.ravel() for p in coeff_planes])
    hist, _ = np.histogram(all_coeffs_flat, bins=50, range=(-100, 100))
    
    block_row, block_col = selected_block_idx
    try:
        selected_block = codec.inspect_block(Y_original, block_col, block_row, is_chroma=False)
    except ValueError:
        logger.debug("Selected block %s outside the image; no snapshot", selected_block_idx)
        selected_block = None
    
    intermediate = IntermediateData(
        selected_block_idx=selected_block_idx,
        selected_block=selected_block,
        error_map_y=np.abs(Y_original - Y_recon),
        artifact_map=metrics.artifact_map,
        edge_distortion_map=compute_edge_distortion_map(Y_original, Y_recon),
        blocking_map=compute_blocking_map(Y_recon),
        quantized_histogram=hist,
        all_quantized_coeffs=all_coeffs_flat
    )
    
    return result, intermediate


def quality_sweep(
    image_bgr: np.ndarray,
    base_config: CodecConfig,
    qualities: Iterable[float] = range(10, 91, 10)
) -> List[Tuple[float, CompressionResult]]:
    """compress_reconstruct at each quality, other settings held fixed."""
    results = []
    for quality in qualities:
        result, _ = compress_reconstruct(image_bgr, base_config.with_quality(quality))
        results.append((quality, result))
    return results
