"""Tests for core.vision: overlay drawing, camera source, and detector setup."""

from __future__ import annotations

import numpy as np
import pytest

from core.session import OrbitSession, SessionConfig
from core.types import Handedness, InteractionState, Vec2, Viewport
from core.vision.overlay import draw_hand_skeleton, draw_scene, draw_status, project_points
from tests.conftest import build_hand


class TestProjection:
    def test_origin_projects_to_centre(self) -> None:
        xy, px_per_unit = project_points(np.zeros((1, 3)), 640, 480)
        np.testing.assert_allclose(xy, [[320.0, 240.0]])
        assert px_per_unit[0] > 0

    def test_nearer_points_look_bigger(self) -> None:
        _, px_per_unit = project_points(np.array([[0.0, 0.0, -5.0], [0.0, 0.0, 5.0]]), 640, 480)
        assert px_per_unit[1] > px_per_unit[0]

    def test_up_is_up(self) -> None:
        xy, _ = project_points(np.array([[0.0, 1.0, 0.0]]), 640, 480)
        assert xy[0, 1] < 240.0


class TestDrawing:
    @pytest.fixture
    def canvas(self) -> np.ndarray:
        return np.zeros((480, 640, 3), dtype=np.uint8)

    def test_skeleton_draws_on_copy(self, canvas: np.ndarray) -> None:
        hand = build_hand(Handedness.LEFT, {i: (0.3 + 0.01 * i, 0.4 + 0.01 * i) for i in range(21)})
        out = draw_hand_skeleton(canvas, [hand])
        assert out.any()
        assert not canvas.any()

    def test_scene_and_status(self, canvas: np.ndarray) -> None:
        with OrbitSession(SessionConfig()) as session:
            frame = session.render_tick()
            bodies = tuple(session.config.bodies)
            draw_scene(canvas, frame, bodies)
            draw_status(canvas, frame, InteractionState(), Viewport(1280, 720), bodies, fps=30)
        assert canvas.any()

    def test_dragged_panel(self, canvas: np.ndarray) -> None:
        with OrbitSession(SessionConfig()) as session:
            session.process_detection(
                [build_hand(Handedness.RIGHT, {8: (0.5, 0.5), 4: (0.51, 0.5)})]
            )
            frame = session.render_tick()
            assert frame.state.is_dragging
            ui = InteractionState(rotation=Vec2(0.1, 0.2))
            draw_status(canvas, frame, ui, session.viewport, tuple(session.config.bodies), fps=0)
        # Panel is centred on the drag point (320, 240): left edge at x = 170.
        assert canvas[240, 170].any()


class FakeCapture:
    def __init__(self, index: int, opened: bool = True) -> None:
        self.index = index
        self._opened = opened
        self.props: dict[int, float] = {}
        self.frames = [np.zeros((4, 4, 3), dtype=np.uint8)]
        self.released = False

    def isOpened(self) -> bool:  # noqa: N802
        return self._opened

    def set(self, prop: int, value: float) -> bool:
        self.props[prop] = value
        return True

    def read(self) -> tuple[bool, np.ndarray | None]:
        if self.frames:
            return True, self.frames.pop(0)
        return False, None

    def release(self) -> None:
        self.released = True


class FakeDetector:
    def __init__(self) -> None:
        self.timestamps: list[float] = []
        self.closed = False

    def detect(self, frame: np.ndarray, timestamp_ms: float) -> list:
        self.timestamps.append(timestamp_ms)
        return [build_hand(Handedness.RIGHT)]

    def close(self) -> None:
        self.closed = True


class TestCameraHandSource:
    def test_reads_and_detects(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from core.vision import camera

        monkeypatch.setattr(camera.cv2, "VideoCapture", FakeCapture)
        detector = FakeDetector()
        with camera.CameraHandSource(detector, camera_index=1) as source:
            hands = source.detect(12.5)
            assert len(hands) == 1
            assert source.last_hands is hands
            assert source.last_frame is not None
            assert detector.timestamps == [12.5]

            with pytest.raises(RuntimeError, match="no frame"):
                source.detect(13.0)
        assert detector.closed

    def test_unopened_camera_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from core.vision import camera

        monkeypatch.setattr(camera.cv2, "VideoCapture", lambda index: FakeCapture(index, opened=False))
        with pytest.raises(RuntimeError, match="Cannot open camera 3"):
            camera.CameraHandSource(FakeDetector(), camera_index=3)


class TestMediaPipeHandDetector:
    def test_missing_model_raises(self, tmp_path) -> None:
        from core.vision.detector import MediaPipeHandDetector

        with pytest.raises(FileNotFoundError, match="not found"):
            MediaPipeHandDetector(tmp_path / "missing.task")
