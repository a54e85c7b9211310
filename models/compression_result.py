"""Compression result with metrics."""

from dataclasses import dataclass
import numpy as np

from .codec_config import CodecConfig
from .codec_metrics import CodecMetrics


@dataclass
class CompressionResult:
    """Results from compression/reconstruction pipeline."""
    
    config: CodecConfig
    original_image: np.ndarray
    reconstructed_image: np.ndarray
    
    # Quality metrics
    metrics: CodecMetrics
    ssim_y_gaussian: float
    
    # Rate proxy
    estimated_bits: float
    bpp: float
    compression_ratio: float
    nonzero_coeffs: int
    total_coeffs: int
    
    # Runtime
    process_time_ms: float
    analysis_time_ms: float
    
    bitrate_label: str = "Estimated (no entropy coding)"

    @property
    def psnr_y(self) -> float:
        return self.metrics.psnr_y

    @property
    def ssim_y(self) -> float:
        return self.metrics.ssim_y
