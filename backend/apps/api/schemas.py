# ============================================================
#  Gesture Orrery — Pydantic API Schemas
# ============================================================
"""Gesture Orrery — Pydantic API Schemas.

Wire shapes for detection frames coming in and state / render data going out.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from core.types import CelestialBody, GroupTransform, InteractionState, RenderFrame

# ── Detection input ──────────────────────────────────────────


class HandIn(BaseModel):
    landmarks: list[list[float]] = Field(..., description="21 [x, y, z] points, normalized")
    handedness: str = Field(..., description='Detector label, "Left" or "Right"')
    score: float = Field(0.0, ge=0.0, le=1.0)


class DetectionFrameIn(BaseModel):
    hands: list[HandIn] = Field(default_factory=list)
    viewport_width: float | None = Field(None, gt=0)
    viewport_height: float | None = Field(None, gt=0)

    @model_validator(mode="after")
    def _viewport_pair(self) -> DetectionFrameIn:
        if (self.viewport_width is None) != (self.viewport_height is None):
            raise ValueError("viewport_width and viewport_height must be sent together")
        return self


# ── State output ─────────────────────────────────────────────


class Vec2Out(BaseModel):
    x: float
    y: float


class InteractionStateOut(BaseModel):
    left_hand_detected: bool
    right_hand_detected: bool
    is_pinching_left: bool
    is_pinching_right: bool
    is_dragging: bool
    rotation: Vec2Out
    scale: float
    drag_position: Vec2Out

    @classmethod
    def from_state(cls, state: InteractionState) -> InteractionStateOut:
        return cls(
            left_hand_detected=state.left_hand_detected,
            right_hand_detected=state.right_hand_detected,
            is_pinching_left=state.is_pinching_left,
            is_pinching_right=state.is_pinching_right,
            is_dragging=state.is_dragging,
            rotation=Vec2Out(x=state.rotation.x, y=state.rotation.y),
            scale=state.scale,
            drag_position=Vec2Out(x=state.drag_position.x, y=state.drag_position.y),
        )


class TransformOut(BaseModel):
    pitch: float
    yaw: float
    roll: float
    scale: float
    translation: tuple[float, float, float]

    @classmethod
    def from_transform(cls, transform: GroupTransform) -> TransformOut:
        return cls(
            pitch=transform.pitch,
            yaw=transform.yaw,
            roll=transform.roll,
            scale=transform.scale,
            translation=transform.translation,
        )


class FrameResponse(BaseModel):
    state: InteractionStateOut
    transform: TransformOut
    focused_body: str
    dropped_hands: int = 0
    tick: int = 0

    @classmethod
    def from_render(cls, frame: RenderFrame, dropped_hands: int = 0) -> FrameResponse:
        return cls(
            state=InteractionStateOut.from_state(frame.state),
            transform=TransformOut.from_transform(frame.transform),
            focused_body=frame.focused_body,
            dropped_hands=dropped_hands,
            tick=frame.tick,
        )


class StateResponse(BaseModel):
    state: InteractionStateOut
    focused_body: str
    detection_frames: int
    fps: int


# ── Catalogue ────────────────────────────────────────────────


class BodyOut(BaseModel):
    name: str
    distance: float
    size: float
    speed: float
    color: str
    description: str
    temperature: str
    gravity: str

    @classmethod
    def from_body(cls, body: CelestialBody) -> BodyOut:
        return cls(
            name=body.name,
            distance=body.distance,
            size=body.size,
            speed=body.speed,
            color=body.color,
            description=body.description,
            temperature=body.temperature,
            gravity=body.gravity,
        )


# ── Health ───────────────────────────────────────────────────


class HealthResponse(BaseModel):
    status: str = "healthy"
    version: str
    session_running: bool
    uptime_seconds: float
