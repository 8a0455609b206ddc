"""Interaction state reducer.

Maps one detection frame onto the shared :class:`InteractionState`:

    left hand   → knuckle position drives rotation, thumb/index spread drives zoom
    right hand  → thumb/index pinch grabs the info panel and drags it

Only the per-frame ``*_hand_detected`` flags are reset. Rotation, scale and
drag position are sticky: when their hand drops out they hold their last
value, with no decay.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from loguru import logger

from core.gestures.classifier import PINCH_THRESHOLD, thumb_index_distance
from core.types import (
    INDEX_TIP,
    MAX_SCALE,
    MIDDLE_MCP,
    MIN_SCALE,
    Handedness,
    HandLandmarks,
    InteractionState,
    Vec2,
    Viewport,
    clamp,
)


@dataclass(frozen=True, slots=True)
class ReducerConfig:
    """Gains and limits for the hand → control mapping.

    Attributes:
        pitch_gain: Knuckle y offset from centre → rotation.x.
        yaw_gain: Knuckle x offset from centre → rotation.y.
        zoom_gain: Thumb/index distance → scale.
        min_scale: Lower zoom bound.
        max_scale: Upper zoom bound.
        pinch_threshold: Right-hand pinch distance (strictly below = pinching).
        mirror_drag: Mirror drag x to match a mirrored display.
    """
    pitch_gain: float = 2.0
    yaw_gain: float = 4.0
    zoom_gain: float = 10.0
    min_scale: float = MIN_SCALE
    max_scale: float = MAX_SCALE
    pinch_threshold: float = PINCH_THRESHOLD
    mirror_drag: bool = True


class InteractionReducer:
    """Recompute the interaction state from one frame's hands.

    Usage:
        >>> reducer = InteractionReducer()
        >>> reducer.apply(hands, Viewport(1280, 720))
        >>> reducer.state.scale
    """

    def __init__(
        self,
        state: InteractionState | None = None,
        config: ReducerConfig | None = None,
    ) -> None:
        self._state = state if state is not None else InteractionState()
        self._config = config or ReducerConfig()

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def config(self) -> ReducerConfig:
        return self._config

    def apply(self, hands: Iterable[HandLandmarks], viewport: Viewport) -> InteractionState:
        """Fold one detection frame into the state, in place.

        Args:
            hands: Hands detected this frame (usually 0-2).
            viewport: Current screen size, read for drag mapping.

        Returns:
            The same, mutated, InteractionState.
        """
        state = self._state
        state.left_hand_detected = False
        state.right_hand_detected = False

        for hand in hands:
            if not hand.is_complete:
                logger.debug(f"Dropping incomplete {hand.handedness.name} hand")
                continue

            if hand.handedness is Handedness.LEFT:
                self._apply_left(hand)
            elif hand.handedness is Handedness.RIGHT:
                self._apply_right(hand, viewport)

        return state

    def _apply_left(self, hand: HandLandmarks) -> None:
        """Orientation from the middle knuckle, zoom from thumb/index spread."""
        cfg = self._config
        state = self._state
        state.left_hand_detected = True

        knuckle = hand.landmarks[MIDDLE_MCP]
        state.rotation.x = (float(knuckle[1]) - 0.5) * cfg.pitch_gain
        state.rotation.y = (float(knuckle[0]) - 0.5) * cfg.yaw_gain

        spread = thumb_index_distance(hand)
        state.scale = clamp(spread * cfg.zoom_gain, cfg.min_scale, cfg.max_scale)

    def _apply_right(self, hand: HandLandmarks, viewport: Viewport) -> None:
        """Pinch to grab; the drag point follows the index tip while pinching."""
        cfg = self._config
        state = self._state
        state.right_hand_detected = True

        state.is_pinching_right = thumb_index_distance(hand) < cfg.pinch_threshold
        if not state.is_pinching_right:
            return

        tip = hand.landmarks[INDEX_TIP]
        x = 1.0 - float(tip[0]) if cfg.mirror_drag else float(tip[0])
        state.drag_position = Vec2(x * viewport.width, float(tip[1]) * viewport.height)
