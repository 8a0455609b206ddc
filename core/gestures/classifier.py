"""Pinch and distance tests on hand landmarks.

All functions are pure and work in normalized image-plane units.
Depth (z) is ignored: the detector's relative depth is too noisy to
gate a pinch on.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from core.types import INDEX_TIP, THUMB_TIP

if TYPE_CHECKING:
    from collections.abc import Sequence

    from core.types import HandLandmarks

PINCH_THRESHOLD = 0.05


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two landmarks in the x/y image plane."""
    return float(np.hypot(a[0] - b[0], a[1] - b[1]))


def is_pinch(a: Sequence[float], b: Sequence[float], threshold: float = PINCH_THRESHOLD) -> bool:
    """True when the two landmarks are strictly closer than ``threshold``."""
    return distance(a, b) < threshold


def thumb_index_distance(hand: HandLandmarks) -> float:
    """Distance between the thumb tip (4) and the index tip (8)."""
    lm = hand.landmarks
    return distance(lm[THUMB_TIP], lm[INDEX_TIP])
