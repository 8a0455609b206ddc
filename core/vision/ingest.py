"""Turn raw detector output into typed hands.

Detector payloads arrive either as MediaPipe landmark objects (``.x/.y/.z``)
or as plain ``[x, y, z]`` lists (the API). Handedness is resolved here, once,
into the closed :class:`Handedness` enum. Hands that cannot be read as 21
finite 3D points are dropped so nothing downstream indexes a partial hand.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

import numpy as np
from loguru import logger

from core.types import LANDMARK_DIMS, NUM_HAND_LANDMARKS, Handedness, HandLandmarks


def _as_row(point: Any) -> Sequence[float]:
    if hasattr(point, "x"):
        return (point.x, point.y, getattr(point, "z", 0.0))
    return point


def ingest_hand(points: Iterable[Any], label: str | None, score: float = 0.0) -> HandLandmarks | None:
    """Build a HandLandmarks, or None if the points are malformed.

    Args:
        points: 21 landmarks, as objects with x/y/z or as 3-sequences.
        label: Detector handedness label ("Left" / "Right").
        score: Handedness confidence.
    """
    try:
        landmarks = np.asarray([_as_row(p) for p in points], dtype=np.float32)
    except (TypeError, ValueError) as e:
        logger.debug(f"Unreadable landmarks for {label!r} hand: {e}")
        return None

    hand = HandLandmarks(
        landmarks=landmarks,
        handedness=Handedness.from_label(label),
        confidence=float(score),
    )
    if not hand.is_complete:
        logger.debug(
            f"Malformed {label!r} hand: expected ({NUM_HAND_LANDMARKS}, {LANDMARK_DIMS}), "
            f"got {landmarks.shape}"
        )
        return None
    return hand


def ingest_hands(raw: Iterable[tuple[Iterable[Any], str | None, float]]) -> list[HandLandmarks]:
    """Ingest ``(points, label, score)`` triples, keeping only well-formed hands."""
    hands: list[HandLandmarks] = []
    for points, label, score in raw:
        hand = ingest_hand(points, label, score)
        if hand is not None:
            hands.append(hand)
    return hands
