"""Per-plane fidelity metrics."""

from dataclasses import dataclass
from typing import Optional
import numpy as np


@dataclass(frozen=True, eq=False)
class CodecMetrics:
    """PSNR/SSIM for Y, Cr and Cb plus the amplified difference map."""

    psnr_y: float = 0.0
    psnr_cr: float = 0.0
    psnr_cb: float = 0.0
    ssim_y: float = 0.0
    ssim_cr: float = 0.0
    ssim_cb: float = 0.0
    artifact_map: Optional[np.ndarray] = None
