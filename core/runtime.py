"""Cooperative detection and render loops on a single asyncio event loop.

The detection call may block for any length of time, so it runs in a worker
thread; its result is applied back on the event loop, which stays the only
writer of the interaction state. There is no timeout: a stalled detector just
stops state updates while rendering carries on.
"""

from __future__ import annotations

import asyncio
import inspect
import time
from collections.abc import Awaitable, Callable

from loguru import logger

from core.session import OrbitSession
from core.types import DetectionSource, HandLandmarks, RenderFrame

FrameSink = Callable[[RenderFrame], Awaitable[None] | None]


class OrreryRuntime:
    """Run a session's detection and render loops until stopped.

    Usage:
        >>> runtime = OrreryRuntime(session, source, on_frame=show)
        >>> asyncio.run(runtime.run())  # call runtime.stop() to finish
    """

    def __init__(
        self,
        session: OrbitSession,
        source: DetectionSource,
        on_frame: FrameSink | None = None,
        render_fps: float = 60.0,
    ) -> None:
        if render_fps <= 0:
            raise ValueError(f"render_fps must be positive, got {render_fps}")
        self._session = session
        self._source = source
        self._on_frame = on_frame
        self._period = 1.0 / render_fps
        self._tasks: list[asyncio.Task[None]] = []
        self._running = False
        self._detection_faults = 0

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def detection_faults(self) -> int:
        return self._detection_faults

    async def run(self) -> None:
        """Start both loops and wait until :meth:`stop` is called."""
        if not self._session.is_running:
            self._session.start()

        self._running = True
        self._tasks = [
            asyncio.create_task(self._detection_loop(), name="detection-loop"),
            asyncio.create_task(self._render_loop(), name="render-loop"),
        ]
        logger.info(f"Runtime started | Render period: {self._period * 1000:.1f}ms")
        try:
            await asyncio.gather(*self._tasks)
        except asyncio.CancelledError:
            if self._running:
                raise
        finally:
            self._running = False
            for task in self._tasks:
                task.cancel()
            self._tasks = []
            logger.info("Runtime stopped.")

    def stop(self) -> None:
        """Stop rescheduling both loops."""
        self._running = False
        for task in self._tasks:
            task.cancel()

    async def _detection_loop(self) -> None:
        while self._running:
            timestamp_ms = time.perf_counter() * 1000.0
            hands = await self._detect(timestamp_ms)
            if not self._running:
                break
            self._session.process_detection(hands)
            await asyncio.sleep(0)

    async def _detect(self, timestamp_ms: float) -> list[HandLandmarks]:
        """Run the source; a failed frame counts as a frame with no hands.

        Any fault raised by the source stays inside the detection loop so the
        render loop keeps ticking.
        """
        try:
            return await asyncio.to_thread(self._source.detect, timestamp_ms)
        except Exception as e:
            self._detection_faults += 1
            logger.opt(exception=e).warning(
                f"Detection frame failed, treating as no hands: {type(e).__name__}: {e}"
            )
            return []

    async def _render_loop(self) -> None:
        while self._running:
            frame = self._session.render_tick()
            if self._on_frame is not None:
                result = self._on_frame(frame)
                if inspect.isawaitable(result):
                    await result
            await asyncio.sleep(self._period)
