"""Intermediate data for visualization."""

from dataclasses import dataclass
from typing import Optional
import numpy as np

from .block_debug import BlockDebugData


@dataclass
class IntermediateData:
    """Diagnostic maps and block snapshot for plots and analysis."""
    
    selected_block_idx: tuple = (0, 0)
    selected_block: Optional[BlockDebugData] = None
    
    error_map_y: Optional[np.ndarray] = None
    artifact_map: Optional[np.ndarray] = None
    edge_distortion_map: Optional[np.ndarray] = None
    blocking_map: Optional[np.ndarray] = None
    quantized_histogram: Optional[np.ndarray] = None
    all_quantized_coeffs: Optional[np.ndarray] = None
