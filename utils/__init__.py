"""Shared utilities."""

from .constants import JPEG_LUMA_Q50, JPEG_CHROMA_Q50, BLOCK_SIZE
from .metrics import (
    compute_psnr, compute_ssim, compute_gaussian_ssim, Timer,
    estimate_bits, estimate_bitrate,
)
from .test_images import generate_gradient, generate_colored_checkerboard, generate_thin_stripes
from .image_io import load_image, save_image

__all__ = [
    'JPEG_LUMA_Q50',
    'JPEG_CHROMA_Q50',
    'BLOCK_SIZE',
    'compute_psnr',
    'compute_ssim',
    'compute_gaussian_ssim',
    'Timer',
    'estimate_bits',
    'estimate_bitrate',
    'generate_gradient',
    'generate_colored_checkerboard',
    'generate_thin_stripes',
    'load_image',
    'save_image',
]
