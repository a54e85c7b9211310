"""Quantization tables and codec constants."""

import numpy as np

BLOCK_SIZE = 8

# Standard JPEG base tables (Annex K), quality 50
JPEG_LUMA_Q50 = np.array([
    [16, 11, 10, 16, 24, 40, 51, 61],
    [12, 12, 14, 19, 26, 58, 60, 55],
    [14, 13, 16, 24, 40, 57, 69, 56],
    [14, 17, 22, 29, 51, 87, 80, 62],
    [18, 22, 37, 56, 68, 109, 103, 77],
    [24, 35, 55, 64, 81, 104, 113, 92],
    [49, 64, 78, 87, 103, 121, 120, 101],
    [72, 92, 95, 98, 112, 100, 103, 99],
], dtype=np.float64)

JPEG_CHROMA_Q50 = np.array([
    [17, 18, 24, 47, 99, 99, 99, 99],
    [18, 21, 26, 66, 99, 99, 99, 99],
    [24, 26, 56, 99, 99, 99, 99, 99],
    [47, 66, 99, 99, 99, 99, 99, 99],
    [99, 99, 99, 99, 99, 99, 99, 99],
    [99, 99, 99, 99, 99, 99, 99, 99],
    [99, 99, 99, 99, 99, 99, 99, 99],
    [99, 99, 99, 99, 99, 99, 99, 99],
], dtype=np.float64)

LEVEL_SHIFT = 128.0

# Full-image Haar step at quality 50, before perceptual scaling
DWT_BASE_STEP = 32.0
MAX_DWT_LEVELS = 6
BLOCK_DWT_LEVELS = 3

# Rate proxy
ZERO_COEFF_BITS = 0.5
NONZERO_OVERHEAD_BITS = 3.0
HEADER_BITS = 400.0

# Fidelity analysis
PSNR_CEILING_DB = 100.0
PSNR_MSE_FLOOR = 1e-10
SSIM_C1 = 6.5025   # (0.01 * 255)^2
SSIM_C2 = 58.5225  # (0.03 * 255)^2
SSIM_WINDOW = 8
SSIM_STRIDE = 4
ARTIFACT_GAIN = 5.0
