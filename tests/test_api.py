"""Tests for backend.apps.api — REST and WebSocket endpoints."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from backend.apps.api.dependencies import get_session
from backend.apps.api.main import app
from core.types import INDEX_TIP, MIDDLE_MCP, THUMB_TIP


def hand_payload(handedness: str, points: dict[int, tuple[float, float]] | None = None, n: int = 21) -> dict:
    landmarks = [[0.5, 0.5, 0.0] for _ in range(n)]
    for idx, (x, y) in (points or {}).items():
        landmarks[idx] = [x, y, 0.0]
    return {"landmarks": landmarks, "handedness": handedness, "score": 0.9}


@pytest.fixture
def client() -> Iterator[TestClient]:
    get_session.cache_clear()
    yield TestClient(app)
    get_session.cache_clear()


class TestSystemRoutes:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/api/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["session_running"] is True
        assert "X-Request-ID" in response.headers

    def test_bodies(self, client: TestClient) -> None:
        bodies = client.get("/api/bodies").json()
        assert [b["name"] for b in bodies] == ["SOL", "MERCURY", "VENUS", "EARTH", "MARS"]
        assert bodies[3]["distance"] == 8.0


class TestFrames:
    def test_left_hand_then_no_hands(self, client: TestClient) -> None:
        frame = {"hands": [hand_payload("Left", {MIDDLE_MCP: (0.5, 1.0), THUMB_TIP: (0.2, 0.2), INDEX_TIP: (0.4, 0.2)})]}
        first = client.post("/api/frames", json=frame).json()
        assert first["state"]["left_hand_detected"] is True
        assert first["state"]["rotation"]["x"] == pytest.approx(1.0)
        assert first["state"]["scale"] == pytest.approx(2.0, abs=1e-5)
        assert first["focused_body"] in {"SOL", "MERCURY", "VENUS", "EARTH", "MARS"}

        second = client.post("/api/frames", json={"hands": []}).json()
        assert second["state"]["left_hand_detected"] is False
        assert second["state"]["rotation"]["x"] == pytest.approx(1.0)
        assert second["state"]["scale"] == pytest.approx(2.0, abs=1e-5)

    def test_right_pinch_drags_in_given_viewport(self, client: TestClient) -> None:
        frame = {
            "hands": [hand_payload("Right", {INDEX_TIP: (0.3, 0.4), THUMB_TIP: (0.32, 0.4)})],
            "viewport_width": 1000,
            "viewport_height": 500,
        }
        state = client.post("/api/frames", json=frame).json()["state"]
        assert state["is_pinching_right"] is True
        assert state["is_dragging"] is True
        assert state["drag_position"]["x"] == pytest.approx(700.0, abs=1e-3)
        assert state["drag_position"]["y"] == pytest.approx(200.0, abs=1e-3)

    def test_malformed_hand_is_dropped(self, client: TestClient) -> None:
        frame = {"hands": [hand_payload("Left", n=10)]}
        body = client.post("/api/frames", json=frame).json()
        assert body["dropped_hands"] == 1
        assert body["state"]["left_hand_detected"] is False

    def test_invalid_payload_rejected(self, client: TestClient) -> None:
        response = client.post("/api/frames", json={"hands": [{"handedness": "Left"}]})
        assert response.status_code == 422

    @pytest.mark.parametrize("field", ["viewport_width", "viewport_height"])
    def test_half_viewport_rejected(self, client: TestClient, field: str) -> None:
        response = client.post("/api/frames", json={"hands": [], field: 1000})
        assert response.status_code == 422
        assert "sent together" in response.text
        assert get_session().detection_frames == 0

    def test_state_reflects_frames(self, client: TestClient) -> None:
        client.post("/api/frames", json={"hands": [hand_payload("Right")]})
        body = client.get("/api/state").json()
        assert body["state"]["right_hand_detected"] is True
        assert body["detection_frames"] == 1


class TestWebSocket:
    def test_stream(self, client: TestClient) -> None:
        with client.websocket_connect("/api/ws/stream") as ws:
            ws.send_text('{"hands": []}')
            reply = ws.receive_json()
            assert reply["focused_body"] in {"SOL", "MERCURY", "VENUS", "EARTH", "MARS"}
            assert reply["tick"] == 1

            ws.send_text("not json")
            assert "error" in ws.receive_json()

            ws.send_text('{"hands": []}')
            assert ws.receive_json()["tick"] == 2
