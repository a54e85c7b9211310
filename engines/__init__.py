"""DSP engines - pure computation, no GUI dependencies."""

from .pixel_buffer import new_image, as_image, split_planes, merge_planes
from .color_space import (
    bgr_to_ycrcb, ycrcb_to_bgr, downsample_plane, upsample_plane,
    subsample_chroma, upsample_chroma,
)
from .dct_engine import dct2, idct2, encode_block, decode_block, dct_basis
from .wavelet import (
    haar_block_forward, haar_block_inverse, calc_dwt_levels,
    dwt_image, idwt_image, dwt_quant_step, dwt_step_map,
)
from .quantizer import scale_quant_matrix, make_quant_tables, quantize, dequantize
from .codec import ImageCodec
from .analysis import (
    compute_artifact_map, compute_edge_distortion_map, compute_blocking_map,
    compute_metrics,
)
from .pipeline import compress_reconstruct, quality_sweep
from .session import CodecSession, ViewMode

__all__ = [
    'new_image',
    'as_image',
    'split_planes',
    'merge_planes',
    'bgr_to_ycrcb',
    'ycrcb_to_bgr',
    'downsample_plane',
    'upsample_plane',
    'subsample_chroma',
    'upsample_chroma',
    'dct2',
    'idct2',
    'encode_block',
    'decode_block',
    'dct_basis',
    'haar_block_forward',
    'haar_block_inverse',
    'calc_dwt_levels',
    'dwt_image',
    'idwt_image',
    'dwt_quant_step',
    'dwt_step_map',
    'scale_quant_matrix',
    'make_quant_tables',
    'quantize',
    'dequantize',
    'ImageCodec',
    'compute_artifact_map',
    'compute_edge_distortion_map',
    'compute_blocking_map',
    'compute_metrics',
    'compress_reconstruct',
    'quality_sweep',
    'CodecSession',
    'ViewMode',
]
