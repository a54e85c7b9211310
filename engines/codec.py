"""Image codec: color transform, per-plane transform/quantize/reconstruct."""

import logging
import numpy as np
from typing import List, Optional, Tuple

from models.codec_config import CodecConfig, TransformKind
from models.block_debug import BlockDebugData
from engines.pixel_buffer import as_image, split_planes, merge_planes
from engines.color_space import bgr_to_ycrcb, ycrcb_to_bgr, downsample_plane, upsample_plane
from engines.block_processor import extract_block, map_blocks
from engines.dct_engine import encode_block, decode_block
from engines.wavelet import (
    haar_block_forward, haar_block_inverse, calc_dwt_levels,
    dwt_image, idwt_image, dwt_step_map,
)
from engines.quantizer import make_quant_tables, dwt_base_step, quantize, dequantize
from utils.constants import BLOCK_SIZE, BLOCK_DWT_LEVELS, LEVEL_SHIFT

logger = logging.getLogger(__name__)


class ImageCodec:
    """Lossy transform codec over BGR images.

    Quantization tables are derived once from the configured quality; beyond
    that the codec holds no state, so a fresh instance per call is fine.
    Partial 8x8 blocks at the right/bottom edges are copied untouched by the
    block transforms.
    """

    def __init__(self, config: Optional[CodecConfig] = None, **kwargs):
        if config is None:
            config = CodecConfig(**kwargs)
        elif kwargs:
            raise TypeError("Pass either a CodecConfig or keyword settings, not both")
        self.config = config
        self.luma_table, self.chroma_table = make_quant_tables(config.quality)
        self.dwt_base_step = dwt_base_step(config.quality)
        self._block_dwt_steps = dwt_step_map(
            BLOCK_SIZE, BLOCK_SIZE, BLOCK_DWT_LEVELS, self.dwt_base_step
        )

    def __repr__(self):
        return f"ImageCodec({self.config!r})"

    def block_steps(self, is_chroma: bool) -> np.ndarray:
        """8x8 quantization steps used by the block transforms."""
        if self.config.transform is TransformKind.BLOCK_DWT:
            return self._block_dwt_steps
        return self.chroma_table if is_chroma else self.luma_table

    def _forward_block(self, block: np.ndarray) -> np.ndarray:
        if self.config.transform is TransformKind.BLOCK_DWT:
            return haar_block_forward(block - LEVEL_SHIFT)
        return encode_block(block)

    def _inverse_block(self, coeffs: np.ndarray) -> np.ndarray:
        if self.config.transform is TransformKind.BLOCK_DWT:
            return haar_block_inverse(coeffs) + LEVEL_SHIFT
        return decode_block(coeffs)

    def _quantize_roundtrip(self, coeffs: np.ndarray, steps: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """(indices, dequantized); a pass-through when quantization is off."""
        if not self.config.quantization:
            return coeffs, coeffs
        indices = quantize(coeffs, steps)
        return indices, dequantize(indices, steps)

    def _encode_decode_plane(self, plane: np.ndarray, is_chroma: bool) -> Tuple[np.ndarray, np.ndarray]:
        if self.config.transform is TransformKind.DWT:
            return self._encode_decode_dwt(plane)

        steps = self.block_steps(is_chroma)

        def code_block(block):
            indices, dequantized = self._quantize_roundtrip(self._forward_block(block), steps)
            return self._inverse_block(dequantized), indices

        return map_blocks(plane, code_block)

    def _encode_decode_dwt(self, plane: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        h, w = plane.shape
        levels = calc_dwt_levels(w, h)
        coeffs = dwt_image(plane - LEVEL_SHIFT, levels)
        steps = dwt_step_map(w, h, levels, self.dwt_base_step)
        indices, dequantized = self._quantize_roundtrip(coeffs, steps)
        return idwt_image(dequantized, levels) + LEVEL_SHIFT, indices

    def process_plane(self, plane: np.ndarray, is_chroma: bool = False) -> np.ndarray:
        """Transform, quantize and reconstruct one plane at its own resolution."""
        plane = np.asarray(plane, dtype=np.float64)
        if plane.ndim != 2 or min(plane.shape) <= 0:
            raise ValueError(f"Expected a non-empty 2D plane, got shape {plane.shape}")
        return self._encode_decode_plane(plane, is_chroma)[0]

    def encode_decode(self, image: np.ndarray) -> Tuple[np.ndarray, List[np.ndarray]]:
        """Reconstruct a BGR image.

        Returns the reconstruction and the Y, Cr, Cb coefficient planes
        (quantization indices, or raw coefficients when quantization is off).
        Chroma coefficient planes are at the subsampled resolution.
        """
        image = as_image(image)
        if image.shape[2] != 3:
            raise ValueError(f"Expected a 3-channel BGR image, got {image.shape[2]} channels")

        mode = self.config.chroma_mode
        logger.debug("Processing %dx%d image with %s", image.shape[1], image.shape[0], self.config)

        y, cr, cb = split_planes(bgr_to_ycrcb(image))
        y_recon, y_coeffs = self._encode_decode_plane(y, is_chroma=False)

        recon_planes = [y_recon]
        coeff_planes = [y_coeffs]
        for plane in (cr, cb):
            small = downsample_plane(plane, mode, self.config.use_prefilter)
            small_recon, small_coeffs = self._encode_decode_plane(small, is_chroma=True)
            recon_planes.append(upsample_plane(small_recon, plane.shape, mode))
            coeff_planes.append(small_coeffs)

        return ycrcb_to_bgr(merge_planes(recon_planes)), coeff_planes

    def process(self, image: np.ndarray) -> np.ndarray:
        """Full pipeline; output has the input's shape, clamped to [0, 255]."""
        return self.encode_decode(image)[0]

    def inspect_block(
        self,
        plane: np.ndarray,
        block_x: int,
        block_y: int,
        is_chroma: bool = False
    ) -> BlockDebugData:
        """Run one 8x8 block of `plane` through the configured block pipeline.

        The full-image wavelet has no block structure; it yields an all-zero
        snapshot rather than an error.
        """
        if not self.config.transform.is_block_based:
            logger.debug("Block inspection requested for full-image DWT; returning zeros")
            return BlockDebugData.zeros()

        plane = np.asarray(plane, dtype=np.float64)
        if plane.ndim == 3 and plane.shape[2] == 1:
            plane = plane[:, :, 0]
        if plane.ndim != 2:
            raise ValueError(f"Expected a single plane, got shape {plane.shape}")

        original = extract_block(plane, block_x, block_y)
        steps = self.block_steps(is_chroma)
        coefficients = self._forward_block(original)
        quantized, dequantized = self._quantize_roundtrip(coefficients, steps)
        return BlockDebugData(
            original=original,
            coefficients=coefficients,
            quant_table=steps.copy(),
            quantized=np.array(quantized),
            reconstructed=self._inverse_block(dequantized),
        )
