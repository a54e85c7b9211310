"""Data models for codec configuration, snapshots and results."""

from .codec_config import ChromaMode, TransformKind, CodecConfig
from .codec_metrics import CodecMetrics
from .block_debug import BlockDebugData
from .compression_result import CompressionResult
from .intermediate_data import IntermediateData

__all__ = [
    'ChromaMode',
    'TransformKind',
    'CodecConfig',
    'CodecMetrics',
    'BlockDebugData',
    'CompressionResult',
    'IntermediateData',
]
