"""Shared test fixtures for the Gesture Orrery."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
import pytest

from core.types import LANDMARK_DIMS, NUM_HAND_LANDMARKS, Handedness, HandLandmarks, Viewport

HandFactory = Callable[..., HandLandmarks]


def build_hand(
    handedness: Handedness = Handedness.LEFT,
    points: dict[int, tuple[float, float]] | None = None,
    fill: float = 0.5,
    confidence: float = 0.9,
) -> HandLandmarks:
    """A 21-point hand with every landmark at ``fill`` except those in ``points``."""
    landmarks = np.full((NUM_HAND_LANDMARKS, LANDMARK_DIMS), fill, dtype=np.float32)
    landmarks[:, 2] = 0.0
    for idx, (x, y) in (points or {}).items():
        landmarks[idx, 0] = x
        landmarks[idx, 1] = y
    return HandLandmarks(landmarks=landmarks, handedness=handedness, confidence=confidence)


@pytest.fixture
def make_hand() -> HandFactory:
    """Factory for synthetic hands with chosen landmark positions."""
    return build_hand


@pytest.fixture
def random_hand() -> HandLandmarks:
    """Random right hand."""
    rng = np.random.default_rng(42)
    return HandLandmarks(
        landmarks=rng.random((NUM_HAND_LANDMARKS, LANDMARK_DIMS)).astype(np.float32),
        handedness=Handedness.RIGHT,
        confidence=0.95,
    )


@pytest.fixture
def viewport() -> Viewport:
    return Viewport(1000, 500)


class FakeClock:
    """Manually advanced clock for deterministic timing."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
