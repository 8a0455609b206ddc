"""Render-time exponential smoothing.

Runs once per display tick, independently of the detection rate, and damps
the raw interaction values toward their targets:

    smoothed += (target - smoothed) * alpha

The step is fixed per tick rather than scaled by frame time, so the effective
time constant follows the display refresh rate.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.types import MAX_SCALE, MIN_SCALE, GroupTransform, InteractionState, clamp


def damp(current: float, target: float, alpha: float) -> float:
    """One step of first-order low-pass filtering."""
    return current + (target - current) * alpha


@dataclass(frozen=True, slots=True)
class SmootherConfig:
    """Render smoothing parameters.

    Attributes:
        alpha: Fraction of the remaining gap closed per tick.
        yaw_drift: Autonomous yaw added per second of elapsed time (rad/s).
        pitch_gain: rotation.x → presented pitch.
        initial_pitch: Pitch of the scene before any hand is seen (rad).
        initial_scale: Scale before any hand is seen.
        min_scale: Lower zoom bound.
        max_scale: Upper zoom bound.
        translation: Fixed offset of the scene group.
    """
    alpha: float = 0.1
    yaw_drift: float = 0.05
    pitch_gain: float = 0.5
    initial_pitch: float = 0.4
    initial_scale: float = 1.0
    min_scale: float = MIN_SCALE
    max_scale: float = MAX_SCALE
    translation: tuple[float, float, float] = (-2.0, 0.0, 0.0)


class RenderSmoother:
    """Damp rotation and scale, then compose the autonomous yaw drift.

    Usage:
        >>> smoother = RenderSmoother()
        >>> transform = smoother.step(state, elapsed_s=3.2)
    """

    def __init__(self, config: SmootherConfig | None = None) -> None:
        self._config = config or SmootherConfig()
        self.reset()

    @property
    def config(self) -> SmootherConfig:
        return self._config

    @property
    def pitch(self) -> float:
        return self._pitch

    @property
    def yaw(self) -> float:
        """Damped user yaw, without the autonomous drift."""
        return self._yaw

    @property
    def scale(self) -> float:
        return self._scale

    def reset(self) -> None:
        self._pitch = self._config.initial_pitch
        self._yaw = 0.0
        self._scale = self._config.initial_scale

    def step(self, state: InteractionState, elapsed_s: float) -> GroupTransform:
        """Advance the smoothed values by one tick.

        Args:
            state: Current interaction state (read only).
            elapsed_s: Seconds since the scene started, drives yaw drift.

        Returns:
            The group transform to present this tick.
        """
        cfg = self._config
        # Damping is linear, so damping the scaled target equals scaling the
        # damped rotation.x.
        self._pitch = damp(self._pitch, state.rotation.x * cfg.pitch_gain, cfg.alpha)
        self._yaw = damp(self._yaw, state.rotation.y, cfg.alpha)

        target_scale = clamp(state.scale, cfg.min_scale, cfg.max_scale)
        self._scale = damp(self._scale, target_scale, cfg.alpha)

        return GroupTransform(
            pitch=self._pitch,
            yaw=self._yaw + elapsed_s * cfg.yaw_drift,
            scale=self._scale,
            translation=cfg.translation,
        )
