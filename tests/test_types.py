"""Tests for core.types — data structures and handedness resolution."""

from __future__ import annotations

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from hypothesis.extra.numpy import arrays

from core.types import (
    LANDMARK_DIMS,
    NUM_HAND_LANDMARKS,
    CelestialBody,
    Handedness,
    HandLandmarks,
    InteractionState,
    Vec2,
)


class TestHandedness:
    """Tests for Handedness label resolution."""

    def test_exact_labels(self) -> None:
        assert Handedness.from_label("Left") is Handedness.LEFT
        assert Handedness.from_label("Right") is Handedness.RIGHT

    @pytest.mark.parametrize("label", ["left", "RIGHT", "", " Left", "Unknown", None])
    def test_other_labels_are_unknown(self, label: str | None) -> None:
        assert Handedness.from_label(label) is Handedness.UNKNOWN

    def test_all_variants(self) -> None:
        assert len(Handedness) == 3


class TestHandLandmarks:
    """Tests for HandLandmarks completeness checks."""

    def test_complete(self) -> None:
        hand = HandLandmarks(np.zeros((21, 3), dtype=np.float32), Handedness.LEFT, 0.9)
        assert hand.is_complete
        assert hand.handedness is Handedness.LEFT

    def test_too_few_landmarks(self) -> None:
        assert not HandLandmarks(np.zeros((10, 3), dtype=np.float32)).is_complete

    def test_missing_depth(self) -> None:
        assert not HandLandmarks(np.zeros((21, 2), dtype=np.float32)).is_complete

    def test_non_finite(self) -> None:
        lm = np.zeros((21, 3), dtype=np.float32)
        lm[4, 0] = np.nan
        assert not HandLandmarks(lm).is_complete

    def test_frozen(self) -> None:
        hand = HandLandmarks(np.zeros((21, 3), dtype=np.float32))
        with pytest.raises(AttributeError):
            hand.confidence = 0.5  # type: ignore[misc]

    @given(
        arrays(
            dtype=np.float32,
            shape=(NUM_HAND_LANDMARKS, LANDMARK_DIMS),
            elements=st.floats(-1.0, 2.0, allow_nan=False, allow_infinity=False, width=32),
        )
    )
    @settings(max_examples=50)
    def test_any_finite_landmarks_complete(self, landmarks: np.ndarray) -> None:
        assert HandLandmarks(landmarks=landmarks).is_complete


class TestInteractionState:
    """Tests for the shared interaction record."""

    def test_defaults(self) -> None:
        state = InteractionState()
        assert not state.left_hand_detected
        assert not state.right_hand_detected
        assert not state.is_pinching_left
        assert not state.is_pinching_right
        assert state.rotation == Vec2(0.0, 0.0)
        assert state.scale == 1.0
        assert state.drag_position == Vec2(0.0, 0.0)

    def test_snapshot_is_independent(self) -> None:
        state = InteractionState()
        state.rotation.x = 0.7
        snap = state.snapshot()
        state.rotation.x = -0.2
        state.drag_position.y = 300.0
        assert snap.rotation.x == 0.7
        assert snap.drag_position.y == 0.0
        assert snap is not state

    def test_is_dragging_needs_hand_and_pinch(self) -> None:
        state = InteractionState(is_pinching_right=True)
        assert not state.is_dragging
        state.right_hand_detected = True
        assert state.is_dragging
        state.is_pinching_right = False
        assert not state.is_dragging


class TestCelestialBody:
    def test_negative_distance_raises(self) -> None:
        with pytest.raises(ValueError, match=">= 0"):
            CelestialBody(name="BAD", distance=-1.0, size=1.0, speed=0.1)

    def test_metadata_defaults(self) -> None:
        body = CelestialBody(name="X", distance=2.0, size=1.0, speed=0.5)
        assert body.description == ""
        assert body.color.startswith("#")
