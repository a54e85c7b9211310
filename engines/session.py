"""Caller-owned codec session: cached original, processed planes and views."""

import logging
import numpy as np
from enum import IntEnum
from typing import Optional

from models.codec_config import CodecConfig, ChromaMode
from models.codec_metrics import CodecMetrics
from models.block_debug import BlockDebugData
from engines.pixel_buffer import as_image, from_rgba, to_rgba
from engines.color_space import bgr_to_ycrcb, ycrcb_to_bgr, downsample_plane
from engines.codec import ImageCodec
from engines.analysis import compute_metrics, compute_artifact_map, compute_edge_distortion_map, compute_blocking_map
from utils.constants import ARTIFACT_GAIN

logger = logging.getLogger(__name__)


class ViewMode(IntEnum):
    RGB = 0
    ARTIFACTS = 1
    Y = 2
    CR = 3
    CB = 4
    EDGE_DISTORTION = 5
    BLOCKING_MAP = 6


class CodecSession:
    """Holds one original image and the latest processed result.

    Lifecycle is explicit: create (or from_rgba), update with a config as
    often as needed, destroy when done. A fresh ImageCodec is built per
    update; only the planes are cached here.
    """

    def __init__(self, image_bgr: np.ndarray):
        image = as_image(image_bgr)
        if image.shape[2] != 3:
            raise ValueError(f"Session needs a 3-channel BGR image, got {image.shape[2]} channels")
        self._original = image
        self._original_ycrcb = bgr_to_ycrcb(image)
        self._processed_ycrcb: Optional[np.ndarray] = None
        self._metrics: Optional[CodecMetrics] = None
        self._artifact_gain = ARTIFACT_GAIN
        self.use_tint = True
        self._alive = True

    @classmethod
    def create(cls, image_bgr: np.ndarray) -> 'CodecSession':
        return cls(image_bgr)

    @classmethod
    def from_rgba(cls, buffer, width: int, height: int) -> 'CodecSession':
        """Session from canvas-style RGBA bytes."""
        return cls(from_rgba(buffer, width, height))

    def _check_alive(self):
        if not self._alive:
            raise RuntimeError("Codec session has been destroyed")

    @property
    def alive(self) -> bool:
        return self._alive

    @property
    def original(self) -> np.ndarray:
        self._check_alive()
        return self._original

    @property
    def metrics(self) -> Optional[CodecMetrics]:
        self._check_alive()
        return self._metrics

    @property
    def artifact_gain(self) -> float:
        return self._artifact_gain

    @artifact_gain.setter
    def artifact_gain(self, gain: float):
        if gain > 0.0:
            self._artifact_gain = float(gain)

    def update(self, config: CodecConfig) -> CodecMetrics:
        """Process the original with `config`; cache planes and metrics."""
        self._check_alive()
        processed = ImageCodec(config).process(self._original)
        self._metrics = compute_metrics(self._original, processed)
        self._processed_ycrcb = bgr_to_ycrcb(processed)
        logger.debug("Session updated: PSNR_Y=%.2f dB", self._metrics.psnr_y)
        return self._metrics

    def _processed_bgr(self) -> np.ndarray:
        if self._processed_ycrcb is None:
            raise RuntimeError("Session has no processed image; call update() first")
        return ycrcb_to_bgr(self._processed_ycrcb)

    def render(self, mode: ViewMode) -> np.ndarray:
        """View image: BGR for colour views, a plane for the diagnostic maps."""
        self._check_alive()
        mode = ViewMode(mode)
        processed = self._processed_bgr()

        if mode is ViewMode.RGB:
            return processed
        if mode is ViewMode.ARTIFACTS:
            return compute_artifact_map(self._original, processed, self._artifact_gain)
        if mode is ViewMode.EDGE_DISTORTION:
            return compute_edge_distortion_map(self._original_ycrcb[:, :, 0], self._processed_ycrcb[:, :, 0])
        if mode is ViewMode.BLOCKING_MAP:
            return compute_blocking_map(self._processed_ycrcb[:, :, 0])

        offset = {ViewMode.Y: 0, ViewMode.CR: 1, ViewMode.CB: 2}[mode]
        channel = self._processed_ycrcb[:, :, offset]
        view = np.repeat(channel[:, :, np.newaxis], 3, axis=2)
        if self.use_tint and mode is ViewMode.CR:
            view[:, :, 0] = 128.0
            view[:, :, 1] = 128.0
        elif self.use_tint and mode is ViewMode.CB:
            view[:, :, 1] = 128.0
            view[:, :, 2] = 128.0
        return view

    def render_rgba(self, mode: ViewMode) -> np.ndarray:
        """render() as opaque RGBA uint8 for a display surface."""
        return to_rgba(self.render(mode))

    def inspect_block(
        self,
        block_x: int,
        block_y: int,
        channel_index: int,
        config: CodecConfig
    ) -> BlockDebugData:
        """Inspect a block of the original Y (0), Cr (1) or Cb (2) plane.

        Block coordinates are in full-resolution block units; for subsampled
        chroma they are mapped into the smaller plane.
        """
        self._check_alive()
        if channel_index not in (0, 1, 2):
            raise ValueError(f"Channel index must be 0, 1 or 2, got {channel_index}")
        plane = self._original_ycrcb[:, :, channel_index]
        is_chroma = channel_index != 0

        if is_chroma and config.chroma_mode is not ChromaMode.CS_444:
            plane = downsample_plane(plane, config.chroma_mode, config.use_prefilter)
            scale_x, scale_y = config.chroma_mode.scale
            block_x //= scale_x
            block_y //= scale_y

        return ImageCodec(config).inspect_block(plane, block_x, block_y, is_chroma)

    def destroy(self):
        """Drop cached planes; the session is unusable afterwards."""
        self._original = None
        self._original_ycrcb = None
        self._processed_ycrcb = None
        self._metrics = None
        self._alive = False
