"""Camera-backed detection source."""

from __future__ import annotations

from typing import Any

import cv2
import numpy as np
from loguru import logger

from core.types import HandDetector, HandLandmarks


class CameraHandSource:
    """Read a frame from an OpenCV capture and run it through a detector.

    Satisfies :class:`core.types.DetectionSource`. The last frame and hands are
    kept for display overlays.

    Raises:
        RuntimeError: If the camera cannot be opened.
    """

    def __init__(
        self,
        detector: HandDetector,
        camera_index: int = 0,
        width: int = 1280,
        height: int = 720,
    ) -> None:
        self._detector = detector
        self._capture = cv2.VideoCapture(camera_index)
        if not self._capture.isOpened():
            raise RuntimeError(f"Cannot open camera {camera_index}")
        self._capture.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        self._capture.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
        self._last_frame: np.ndarray | None = None
        self._last_hands: list[HandLandmarks] = []
        logger.info(f"Camera {camera_index} opened ({width}x{height} requested)")

    @property
    def last_frame(self) -> np.ndarray | None:
        return self._last_frame

    @property
    def last_hands(self) -> list[HandLandmarks]:
        return self._last_hands

    def detect(self, timestamp_ms: float) -> list[HandLandmarks]:
        """Grab one frame and detect hands in it.

        Raises:
            RuntimeError: If the camera stops delivering frames.
        """
        ok, frame = self._capture.read()
        if not ok:
            raise RuntimeError("Camera returned no frame")
        self._last_frame = frame
        self._last_hands = self._detector.detect(frame, timestamp_ms)
        return self._last_hands

    def close(self) -> None:
        self._capture.release()
        self._detector.close()

    def __enter__(self) -> CameraHandSource:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
