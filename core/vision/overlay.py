"""OpenCV drawing for the demo window: projected scene and status readout.

Display-only. Nothing here feeds back into the session.
"""

from __future__ import annotations

import math

import cv2
import numpy as np

from core.scene.bodies import find_body
from core.scene.transform import apply_group_transform
from core.types import HAND_CONNECTIONS, CelestialBody, HandLandmarks, InteractionState, RenderFrame, Viewport

CYAN = (255, 255, 0)
YELLOW = (0, 215, 255)
WHITE = (255, 255, 255)

CAMERA_Z = 10.0
FOV_DEG = 45.0


def project_points(world: np.ndarray, width: int, height: int) -> tuple[np.ndarray, np.ndarray]:
    """Perspective-project world points for a camera on +z looking at the origin.

    Returns:
        (N, 2) pixel coordinates and (N,) pixels-per-world-unit at each depth.
    """
    focal = (height / 2.0) / math.tan(math.radians(FOV_DEG) / 2.0)
    depth = np.maximum(CAMERA_Z - world[:, 2], 1e-3)
    px_per_unit = focal / depth
    xy = np.stack(
        [width / 2.0 + world[:, 0] * px_per_unit, height / 2.0 - world[:, 1] * px_per_unit],
        axis=1,
    )
    return xy, px_per_unit


def draw_scene(image: np.ndarray, frame: RenderFrame, bodies: tuple[CelestialBody, ...]) -> None:
    """Draw every body as a wireframe-ish circle, the focused one highlighted."""
    h, w = image.shape[:2]
    local = np.stack([p.position for p in frame.poses])
    world = apply_group_transform(local, frame.transform)
    xy, px_per_unit = project_points(world, w, h)

    # Far bodies first so near ones overlap them.
    for i in np.argsort(world[:, 2]):
        body = bodies[i]
        center = (int(xy[i, 0]), int(xy[i, 1]))
        radius = max(2, int(body.size * frame.transform.scale * px_per_unit[i]))
        color = YELLOW if body.distance == 0 else CYAN
        thickness = 2 if body.name == frame.focused_body else 1
        cv2.circle(image, center, radius, color, thickness, cv2.LINE_AA)
        cv2.putText(
            image, body.name, (center[0] - radius, center[1] - radius - 6),
            cv2.FONT_HERSHEY_SIMPLEX, 0.4, color, 1, cv2.LINE_AA,
        )


def draw_status(
    image: np.ndarray,
    frame: RenderFrame,
    ui_state: InteractionState,
    viewport: Viewport,
    bodies: tuple[CelestialBody, ...],
    fps: int,
) -> None:
    """Status lines top-left and the info panel, docked or dragged."""
    h, w = image.shape[:2]
    lines = [
        f"FPS: {fps}",
        f"L: {'ON' if ui_state.left_hand_detected else '--'}  "
        f"R: {'ON' if ui_state.right_hand_detected else '--'}",
        f"ZOOM: {frame.transform.scale:.2f}x",
        f"ROT: {ui_state.rotation.x:+.2f} / {ui_state.rotation.y:+.2f}",
    ]
    for i, text in enumerate(lines):
        cv2.putText(image, text, (10, 24 + 22 * i), cv2.FONT_HERSHEY_SIMPLEX, 0.55, CYAN, 1, cv2.LINE_AA)

    body = find_body(frame.focused_body, bodies)
    panel_w, panel_h = 300, 90
    state = frame.state
    if state.is_dragging:
        cx = state.drag_position.x * w / viewport.width
        cy = state.drag_position.y * h / viewport.height
        x0, y0 = int(cx - panel_w / 2), int(cy - panel_h / 2)
    else:
        x0, y0 = w - panel_w - 32, int(h * 0.2)

    cv2.rectangle(image, (x0, y0), (x0 + panel_w, y0 + panel_h), CYAN, 1, cv2.LINE_AA)
    panel_lines = [
        f"TARGET: {body.name}",
        body.description[:42],
        f"TEMP {body.temperature}  G {body.gravity}",
    ]
    for i, text in enumerate(panel_lines):
        cv2.putText(
            image, text, (x0 + 8, y0 + 24 + 24 * i),
            cv2.FONT_HERSHEY_SIMPLEX, 0.45, WHITE, 1, cv2.LINE_AA,
        )


def draw_hand_skeleton(
    frame: np.ndarray,
    hands: list[HandLandmarks],
    mirrored: bool = True,
    color: tuple[int, int, int] = CYAN,
) -> np.ndarray:
    """Draw bones and joints of each hand on a copy of ``frame``.

    Args:
        frame: BGR display frame.
        hands: Hands in camera (unmirrored) coordinates.
        mirrored: Whether ``frame`` is shown mirrored; x is flipped to match.
        color: BGR bone color.

    Returns:
        Annotated copy of the frame.
    """
    annotated = frame.copy()
    h, w = annotated.shape[:2]

    for hand in hands:
        pts = []
        for x, y, _ in hand.landmarks:
            px = (1.0 - x) * w if mirrored else x * w
            pts.append((int(px), int(y * h)))

        for start, end in HAND_CONNECTIONS:
            cv2.line(annotated, pts[start], pts[end], color, 2, cv2.LINE_AA)
        for p in pts:
            cv2.circle(annotated, p, 3, WHITE, -1, cv2.LINE_AA)

    return annotated
