"""Single-block inspection snapshot."""

from dataclasses import dataclass
import numpy as np

from utils.constants import BLOCK_SIZE


@dataclass(frozen=True, eq=False)
class BlockDebugData:
    """Five 8x8 grids describing one block's trip through the codec."""

    original: np.ndarray
    coefficients: np.ndarray
    quant_table: np.ndarray
    quantized: np.ndarray
    reconstructed: np.ndarray

    @classmethod
    def zeros(cls) -> 'BlockDebugData':
        """Snapshot returned when the transform has no block structure."""
        shape = (BLOCK_SIZE, BLOCK_SIZE)
        return cls(*(np.zeros(shape, dtype=np.float64) for _ in range(5)))

    def is_empty(self) -> bool:
        return not any(np.any(grid) for grid in self.as_tuple())

    def as_tuple(self):
        return (self.original, self.coefficients, self.quant_table,
                self.quantized, self.reconstructed)
