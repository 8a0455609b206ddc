"""Shared types, protocols, and constants for the Gesture Orrery core."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Protocol

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

NUM_HAND_LANDMARKS = 21
LANDMARK_DIMS = 3  # x, y, z

THUMB_TIP = 4
INDEX_TIP = 8
MIDDLE_MCP = 9  # middle finger knuckle, orientation reference

HAND_CONNECTIONS: list[tuple[int, int]] = [
    (0, 1), (1, 2), (2, 3), (3, 4),        # Thumb
    (0, 5), (5, 6), (6, 7), (7, 8),        # Index
    (0, 9), (9, 10), (10, 11), (11, 12),   # Middle
    (0, 13), (13, 14), (14, 15), (15, 16), # Ring
    (0, 17), (17, 18), (18, 19), (19, 20), # Pinky
    (5, 9), (9, 13), (13, 17),             # Palm
]

MIN_SCALE = 0.5
MAX_SCALE = 3.0


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Handedness(Enum):
    """Hand role as reported by the detector, from the camera's viewpoint."""

    LEFT = "Left"
    RIGHT = "Right"
    UNKNOWN = "Unknown"

    @classmethod
    def from_label(cls, label: str | None) -> Handedness:
        """Resolve a detector label by exact match; anything else is UNKNOWN."""
        if label == cls.LEFT.value:
            return cls.LEFT
        if label == cls.RIGHT.value:
            return cls.RIGHT
        return cls.UNKNOWN


# ---------------------------------------------------------------------------
# Detection data
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class HandLandmarks:
    """Normalized 3D hand landmarks for a single detected hand.

    Attributes:
        landmarks: (21, 3) array of [x, y, z]; x, y in [0, 1] image space.
        handedness: Left, right, or unknown.
        confidence: Handedness score reported by the detector.
    """
    landmarks: NDArray[np.float32]
    handedness: Handedness = Handedness.UNKNOWN
    confidence: float = 0.0

    @property
    def is_complete(self) -> bool:
        """True when the hand holds 21 finite 3D landmarks."""
        lm = self.landmarks
        return (
            isinstance(lm, np.ndarray)
            and lm.shape == (NUM_HAND_LANDMARKS, LANDMARK_DIMS)
            and bool(np.isfinite(lm).all())
        )


class HandDetector(Protocol):
    """Protocol for hand landmark detection backends."""

    def detect(self, frame: NDArray[np.uint8], timestamp_ms: float) -> list[HandLandmarks]:
        """Detect hand landmarks in a BGR frame."""
        ...

    def close(self) -> None:
        """Release resources."""
        ...


class DetectionSource(Protocol):
    """Supplies zero or more detected hands per call. May block."""

    def detect(self, timestamp_ms: float) -> list[HandLandmarks]:
        ...


# ---------------------------------------------------------------------------
# Interaction state
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Vec2:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True, slots=True)
class Viewport:
    """Screen size used to map normalized coordinates to pixels."""
    width: float
    height: float


@dataclass(slots=True)
class InteractionState:
    """The single shared record written by detection and read by rendering.

    Detected flags are reset every detection frame. Every other field is
    sticky: it keeps its last value until a present hand overwrites it.
    ``is_pinching_left`` is part of the record but nothing computes it.
    """
    left_hand_detected: bool = False
    right_hand_detected: bool = False
    is_pinching_left: bool = False
    is_pinching_right: bool = False
    rotation: Vec2 = field(default_factory=Vec2)
    scale: float = 1.0
    drag_position: Vec2 = field(default_factory=Vec2)

    @property
    def is_dragging(self) -> bool:
        """Whether the info panel should follow ``drag_position``."""
        return self.right_hand_detected and self.is_pinching_right

    def snapshot(self) -> InteractionState:
        """Return an independent copy safe to hand to slower consumers."""
        return InteractionState(
            left_hand_detected=self.left_hand_detected,
            right_hand_detected=self.right_hand_detected,
            is_pinching_left=self.is_pinching_left,
            is_pinching_right=self.is_pinching_right,
            rotation=Vec2(self.rotation.x, self.rotation.y),
            scale=self.scale,
            drag_position=Vec2(self.drag_position.x, self.drag_position.y),
        )


# ---------------------------------------------------------------------------
# Scene data
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CelestialBody:
    """Static description of one orbiting body.

    Attributes:
        name: Display name, also the focus identifier.
        distance: Orbit radius (0 = sits at the centre).
        size: Sphere radius.
        speed: Angular speed factor.
        color: Hex color for the inner core.
        description: One-line blurb for the info panel.
        temperature: Display string.
        gravity: Display string.
    """
    name: str
    distance: float
    size: float
    speed: float
    color: str = "#00FFFF"
    description: str = ""
    temperature: str = ""
    gravity: str = ""

    def __post_init__(self) -> None:
        if self.distance < 0:
            raise ValueError(f"Orbit distance must be >= 0, got {self.distance} for {self.name}")


@dataclass(frozen=True, slots=True)
class BodyPose:
    """Per-tick derived placement of a body inside the scene group."""
    name: str
    angle: float
    position: NDArray[np.float64]  # shape (3,), pre group transform
    spin: float


@dataclass(frozen=True, slots=True)
class GroupTransform:
    """Transform of the parent group holding every body.

    Rotation is Euler XYZ in radians; scale is uniform.
    """
    pitch: float = 0.0
    yaw: float = 0.0
    roll: float = 0.0
    scale: float = 1.0
    translation: tuple[float, float, float] = (0.0, 0.0, 0.0)


@dataclass(frozen=True, slots=True)
class RenderFrame:
    """Everything the display layer needs for one tick.

    Attributes:
        transform: Smoothed group transform.
        poses: Body placements in declaration order.
        focused_body: Name of the frontmost body.
        state: Snapshot of the interaction state used for this tick.
        elapsed_s: Seconds since the session started.
        tick: Render tick counter.
    """
    transform: GroupTransform
    poses: list[BodyPose]
    focused_body: str
    state: InteractionState
    elapsed_s: float = 0.0
    tick: int = 0
