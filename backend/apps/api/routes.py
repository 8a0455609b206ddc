"""Gesture Orrery — API Routes.

REST + WebSocket endpoints that feed detection frames from a remote
(typically in-browser) hand detector into the core session.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from loguru import logger
from pydantic import ValidationError

from backend.apps.api.dependencies import get_session, get_settings
from backend.apps.api.schemas import (
    BodyOut,
    DetectionFrameIn,
    FrameResponse,
    HealthResponse,
    InteractionStateOut,
    StateResponse,
)
from backend.config import Settings
from core.session import OrbitSession
from core.types import HandLandmarks, Viewport
from core.vision.ingest import ingest_hand

router = APIRouter()


def _apply_frame(session: OrbitSession, payload: DetectionFrameIn) -> FrameResponse:
    """Ingest one detection frame, advance the scene one tick, report back."""
    hands: list[HandLandmarks] = []
    for hand_in in payload.hands:
        hand = ingest_hand(hand_in.landmarks, hand_in.handedness, hand_in.score)
        if hand is not None:
            hands.append(hand)

    viewport = None
    if payload.viewport_width is not None:
        viewport = Viewport(payload.viewport_width, payload.viewport_height)

    session.process_detection(hands, viewport)
    frame = session.render_tick()
    return FrameResponse.from_render(frame, dropped_hands=len(payload.hands) - len(hands))


# ── Health ───────────────────────────────────────────────────


@router.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check(
    settings: Settings = Depends(get_settings),
    session: OrbitSession = Depends(get_session),
) -> HealthResponse:
    """Liveness / readiness probe."""
    from backend.apps.api.main import get_uptime

    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        session_running=session.is_running,
        uptime_seconds=round(get_uptime(), 2),
    )


# ── Scene ────────────────────────────────────────────────────


@router.get("/bodies", response_model=list[BodyOut], tags=["Scene"])
async def list_bodies(session: OrbitSession = Depends(get_session)) -> list[BodyOut]:
    """The body catalogue, in declaration order."""
    return [BodyOut.from_body(b) for b in session.config.bodies]


@router.get("/state", response_model=StateResponse, tags=["Scene"])
async def current_state(session: OrbitSession = Depends(get_session)) -> StateResponse:
    """Current interaction state and the last focused body."""
    return StateResponse(
        state=InteractionStateOut.from_state(session.state),
        focused_body=session.focused_body,
        detection_frames=session.detection_frames,
        fps=session.fps,
    )


@router.post("/frames", response_model=FrameResponse, tags=["Interaction"])
async def post_frame(
    payload: DetectionFrameIn,
    session: OrbitSession = Depends(get_session),
) -> FrameResponse:
    """Apply one detection frame; malformed hands are dropped, not rejected."""
    return _apply_frame(session, payload)


# ── WebSocket Real-Time Stream ───────────────────────────────


@router.websocket("/ws/stream")
async def websocket_stream(ws: WebSocket) -> None:
    """Real-time detection frames over WebSocket.

    Protocol:
      Client → Server: DetectionFrameIn as JSON text
      Server → Client: FrameResponse JSON, or {"error": ...} for a bad frame
    """
    await ws.accept()
    session = get_session()
    logger.info("WebSocket client connected")
    frame_count = 0

    try:
        while True:
            data = await ws.receive_text()
            frame_count += 1

            try:
                payload = DetectionFrameIn.model_validate_json(data)
            except ValidationError as e:
                await ws.send_json({"error": "Invalid detection frame", "detail": e.errors()[0]["msg"]})
                continue

            response = _apply_frame(session, payload)
            await ws.send_text(response.model_dump_json())

    except WebSocketDisconnect:
        logger.info("WebSocket client disconnected | frames={}", frame_count)
