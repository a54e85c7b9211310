"""Codec configuration."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Tuple


class ChromaMode(Enum):
    """Chroma subsampling mode, valued by its conventional number."""

    CS_444 = 444
    CS_422 = 422
    CS_420 = 420

    @property
    def scale(self) -> Tuple[int, int]:
        """(scale_x, scale_y) applied to the chroma planes."""
        return {
            ChromaMode.CS_444: (1, 1),
            ChromaMode.CS_422: (2, 1),
            ChromaMode.CS_420: (2, 2),
        }[self]

    @property
    def label(self) -> str:
        return {444: '4:4:4', 422: '4:2:2', 420: '4:2:0'}[self.value]

    @classmethod
    def parse(cls, value: Any) -> 'ChromaMode':
        """Accept a ChromaMode, 444/422/420 or '4:2:0'-style strings."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().replace(':', '')
        try:
            return cls(int(text))
        except ValueError:
            raise ValueError(f"Unknown chroma subsampling mode: {value!r}") from None


class TransformKind(Enum):
    """Transform applied to each plane."""

    DCT = 'dct'              # 8x8 block DCT-II
    DWT = 'dwt'              # full-image multi-level Haar
    BLOCK_DWT = 'block_dwt'  # 8x8 block Haar, 3 levels

    @property
    def is_block_based(self) -> bool:
        return self is not TransformKind.DWT

    @classmethod
    def parse(cls, value: Any) -> 'TransformKind':
        """Accept a TransformKind, its name/value, or 0 (DCT) / 1 (DWT)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            if value in (0, 1):
                return cls.DCT if value == 0 else cls.DWT
            raise ValueError(f"Unknown transform: {value!r}")
        text = str(value).strip().lower().replace('-', '_')
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f"Unknown transform: {value!r}") from None


@dataclass(frozen=True)
class CodecConfig:
    """Immutable per-codec settings."""

    quality: float = 50.0
    quantization: bool = True
    chroma_mode: ChromaMode = ChromaMode.CS_444
    transform: TransformKind = TransformKind.DCT
    use_prefilter: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'chroma_mode', ChromaMode.parse(self.chroma_mode))
        object.__setattr__(self, 'transform', TransformKind.parse(self.transform))
        object.__setattr__(self, 'quality', float(self.quality))
        if not self.quality > 0:
            raise ValueError(f"Quality must be positive, got {self.quality}")

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> 'CodecConfig':
        """Build from {quality, quantization, chromaMode, transform} style keys."""
        kwargs = {}
        if 'quality' in options:
            kwargs['quality'] = options['quality']
        if 'quantization' in options:
            kwargs['quantization'] = bool(options['quantization'])
        for key in ('chroma_mode', 'chromaMode'):
            if key in options:
                kwargs['chroma_mode'] = options[key]
        if 'transform' in options:
            kwargs['transform'] = options['transform']
        for key in ('use_prefilter', 'usePrefilter'):
            if key in options:
                kwargs['use_prefilter'] = bool(options[key])
        return cls(**kwargs)

    def with_quality(self, quality: float) -> 'CodecConfig':
        return CodecConfig(
            quality=quality,
            quantization=self.quantization,
            chroma_mode=self.chroma_mode,
            transform=self.transform,
            use_prefilter=self.use_prefilter,
        )
