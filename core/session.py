"""Orrery session: the shared interaction state and everything that reads it.

Ties the per-frame flow together:

    hands → InteractionReducer → InteractionState
    InteractionState → RenderSmoother + OrbitSimulator → FocusSelector → RenderFrame

Detection frames and render ticks are driven separately (see
:mod:`core.runtime`); both run on one thread, so the state needs no locking.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from core.interaction.reducer import InteractionReducer, ReducerConfig
from core.scene.bodies import DEFAULT_BODIES
from core.scene.focus import FocusSelector
from core.scene.orbits import OrbitSimulator
from core.smoothing.smoother import RenderSmoother, SmootherConfig
from core.types import CelestialBody, HandLandmarks, InteractionState, RenderFrame, Viewport


@dataclass
class SessionConfig:
    """Configuration for an orrery session.

    Attributes:
        bodies: Bodies in declaration order (focus ties go to the first).
        viewport: Initial screen size for drag mapping.
        reducer: Hand → control mapping parameters.
        smoother: Render smoothing parameters.
        fps_window_s: Period of the detection frame-rate meter and UI sync.
        clock: Monotonic clock in seconds.
    """
    bodies: Sequence[CelestialBody] = DEFAULT_BODIES
    viewport: Viewport = field(default_factory=lambda: Viewport(1280, 720))
    reducer: ReducerConfig = field(default_factory=ReducerConfig)
    smoother: SmootherConfig = field(default_factory=SmootherConfig)
    fps_window_s: float = 1.0
    clock: Callable[[], float] = time.perf_counter


class FrameRateMeter:
    """Count events and publish a rate once per window."""

    def __init__(self, window_s: float = 1.0) -> None:
        self._window_s = window_s
        self._count = 0
        self._window_start: float | None = None
        self._fps = 0

    @property
    def fps(self) -> int:
        return self._fps

    def tick(self, now: float) -> bool:
        """Count one event. Returns True when a new rate was published."""
        if self._window_start is None:
            self._window_start = now
        self._count += 1
        if now - self._window_start >= self._window_s:
            self._fps = self._count
            self._count = 0
            self._window_start = now
            return True
        return False


class OrbitSession:
    """Owns the single InteractionState and the per-tick scene pipeline.

    Usage:
        >>> with OrbitSession() as session:
        ...     session.process_detection(hands)
        ...     frame = session.render_tick()
        ...     print(frame.focused_body)
    """

    def __init__(self, config: SessionConfig | None = None) -> None:
        self._config = config or SessionConfig()
        self._viewport = self._config.viewport
        self._reducer: InteractionReducer | None = None
        self._smoother: RenderSmoother | None = None
        self._simulator: OrbitSimulator | None = None
        self._focus = FocusSelector()
        self._meter = FrameRateMeter(self._config.fps_window_s)
        self._ui_state = InteractionState()
        self._focused_body = self._config.bodies[0].name
        self._started_at = 0.0
        self._detection_frames = 0
        self._is_running = False

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @viewport.setter
    def viewport(self, viewport: Viewport) -> None:
        self._viewport = viewport

    @property
    def state(self) -> InteractionState:
        """The live interaction state. Do not hold on to it across ticks."""
        return self._require_running().state

    @property
    def ui_state(self) -> InteractionState:
        """Snapshot of the state, refreshed once per fps window."""
        return self._ui_state

    @property
    def fps(self) -> int:
        """Detection frames per second over the last window."""
        return self._meter.fps

    @property
    def focused_body(self) -> str:
        return self._focused_body

    @property
    def detection_frames(self) -> int:
        return self._detection_frames

    @property
    def elapsed_s(self) -> float:
        return self._config.clock() - self._started_at

    def start(self) -> None:
        """Create a fresh state and scene."""
        self._reducer = InteractionReducer(config=self._config.reducer)
        self._smoother = RenderSmoother(self._config.smoother)
        self._simulator = OrbitSimulator(self._config.bodies)
        self._meter = FrameRateMeter(self._config.fps_window_s)
        self._ui_state = self._reducer.state.snapshot()
        self._focused_body = self._config.bodies[0].name
        self._detection_frames = 0
        self._started_at = self._config.clock()
        self._is_running = True
        logger.info(
            f"Session started | Bodies: {len(self._config.bodies)} | "
            f"Viewport: {self._viewport.width:g}x{self._viewport.height:g}"
        )

    def stop(self) -> None:
        """Drop the state; nothing persists past the session."""
        self._reducer = None
        self._smoother = None
        self._simulator = None
        self._is_running = False
        logger.info(f"Session stopped after {self._detection_frames} detection frames.")

    def process_detection(
        self,
        hands: Iterable[HandLandmarks],
        viewport: Viewport | None = None,
    ) -> InteractionState:
        """Apply one detection frame to the shared state.

        Args:
            hands: Hands detected this frame.
            viewport: Screen size to use; defaults to the session viewport.

        Returns:
            The live interaction state.

        Raises:
            RuntimeError: If the session is not started.
        """
        reducer = self._require_running()
        if viewport is not None:
            self._viewport = viewport

        state = reducer.apply(hands, self._viewport)
        self._detection_frames += 1

        if self._meter.tick(self._config.clock()):
            self._ui_state = state.snapshot()
        return state

    def render_tick(self) -> RenderFrame:
        """Advance smoothing and orbits by one display tick and pick the focus.

        Raises:
            RuntimeError: If the session is not started.
        """
        reducer = self._require_running()
        elapsed = self.elapsed_s

        transform = self._smoother.step(reducer.state, elapsed)
        poses = self._simulator.step(elapsed)
        self._focused_body = self._focus.select(poses, transform)

        return RenderFrame(
            transform=transform,
            poses=poses,
            focused_body=self._focused_body,
            state=reducer.state.snapshot(),
            elapsed_s=elapsed,
            tick=self._simulator.ticks,
        )

    def _require_running(self) -> InteractionReducer:
        if not self._is_running or self._reducer is None:
            raise RuntimeError("Session not started. Call start() first.")
        return self._reducer

    def __enter__(self) -> OrbitSession:
        self.start()
        return self

    def __exit__(self, *args: Any) -> None:
        self.stop()
