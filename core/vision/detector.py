"""MediaPipe-based hand landmark detector.

Wraps the MediaPipe Tasks ``HandLandmarker`` in VIDEO mode behind the
:class:`core.types.HandDetector` protocol. Confidence filtering is configured
here, once, and never re-checked downstream.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any

import cv2
import mediapipe as mp
import numpy as np
from loguru import logger
from mediapipe.tasks import python as mp_tasks
from mediapipe.tasks.python import vision as mp_vision

from core.types import HandLandmarks
from core.vision.ingest import ingest_hands


class MediaPipeHandDetector:
    """Hand landmark detector using the MediaPipe Tasks API.

    Usage:
        >>> detector = MediaPipeHandDetector("models/hand_landmarker.task")
        >>> hands = detector.detect(bgr_frame, timestamp_ms=1234.0)
        >>> detector.close()
    """

    def __init__(
        self,
        model_path: str | Path,
        max_hands: int = 2,
        min_detection_confidence: float = 0.5,
        min_presence_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5,
    ) -> None:
        """Load the hand landmarker model.

        Raises:
            FileNotFoundError: If the model asset does not exist.
            RuntimeError: If MediaPipe fails to build the landmarker.
        """
        path = Path(model_path)
        if not path.exists():
            raise FileNotFoundError(f"Hand landmarker model not found: {path}")

        options = mp_vision.HandLandmarkerOptions(
            base_options=mp_tasks.BaseOptions(model_asset_path=str(path)),
            running_mode=mp_vision.RunningMode.VIDEO,
            num_hands=max_hands,
            min_hand_detection_confidence=min_detection_confidence,
            min_hand_presence_confidence=min_presence_confidence,
            min_tracking_confidence=min_tracking_confidence,
        )
        try:
            self._landmarker = mp_vision.HandLandmarker.create_from_options(options)
        except Exception as e:
            raise RuntimeError(f"Failed to create hand landmarker: {e}") from e

        self._last_timestamp_ms = -1
        self._last_inference_ms: float = 0.0
        self._closed = False
        logger.info(f"Hand landmarker loaded: {path.name} (max hands: {max_hands})")

    @property
    def last_inference_ms(self) -> float:
        return self._last_inference_ms

    def detect(self, frame: np.ndarray, timestamp_ms: float) -> list[HandLandmarks]:
        """Detect hand landmarks in a BGR frame.

        Args:
            frame: BGR image (H, W, 3), dtype uint8. Not mirrored.
            timestamp_ms: Frame timestamp; MediaPipe needs it strictly increasing.

        Returns:
            Well-formed hands, labelled from the camera's perspective.

        Raises:
            ValueError: If frame is not a valid BGR image.
        """
        if frame is None or frame.ndim != 3 or frame.shape[2] != 3:
            raise ValueError(
                f"Expected BGR frame with shape (H, W, 3), got "
                f"{'None' if frame is None else frame.shape}"
            )

        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb)

        ts = max(int(timestamp_ms), self._last_timestamp_ms + 1)
        self._last_timestamp_ms = ts

        t_start = time.perf_counter()
        result = self._landmarker.detect_for_video(image, ts)
        self._last_inference_ms = (time.perf_counter() - t_start) * 1000.0

        raw = []
        for idx, hand_lms in enumerate(result.hand_landmarks):
            label, score = None, 0.0
            if idx < len(result.handedness) and result.handedness[idx]:
                category = result.handedness[idx][0]
                label, score = category.category_name, category.score
            raw.append((hand_lms, label, score))
        return ingest_hands(raw)

    def close(self) -> None:
        """Release MediaPipe resources."""
        if not self._closed:
            self._landmarker.close()
            self._closed = True

    def __enter__(self) -> MediaPipeHandDetector:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

