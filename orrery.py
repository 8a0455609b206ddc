"""Gesture Orrery CLI — webcam demo, API server, and diagnostics.

Usage:
    python orrery.py demo --model models/hand_landmarker.task
    python orrery.py serve --port 8000
    python orrery.py bodies
    python orrery.py info
"""

from __future__ import annotations

import argparse
import sys

from loguru import logger

from backend.config import settings


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="orrery",
        description="Gesture Orrery — two-hand control of an orbiting scene",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---- demo ----
    demo_parser = subparsers.add_parser("demo", help="Run the real-time webcam demo")
    demo_parser.add_argument("--model", type=str, default=settings.hand_model_path, help="Hand landmarker .task file")
    demo_parser.add_argument("--camera", type=int, default=settings.camera_index, help="Camera device index")
    demo_parser.add_argument("--fps", type=float, default=settings.render_fps, help="Render ticks per second")

    # ---- serve ----
    serve_parser = subparsers.add_parser("serve", help="Start the FastAPI API server")
    serve_parser.add_argument("--host", type=str, default=settings.host, help="Host")
    serve_parser.add_argument("--port", type=int, default=settings.port, help="Port")
    serve_parser.add_argument("--workers", type=int, default=settings.workers, help="Number of workers")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    # ---- bodies ----
    subparsers.add_parser("bodies", help="List the body catalogue")

    # ---- info ----
    subparsers.add_parser("info", help="Show system information")

    args = parser.parse_args()

    if args.command == "demo":
        cmd_demo(args)
    elif args.command == "serve":
        cmd_serve(args)
    elif args.command == "bodies":
        cmd_bodies()
    elif args.command == "info":
        cmd_info()


def cmd_demo(args: argparse.Namespace) -> None:
    """Run the webcam demo: mirrored feed, hand skeleton, projected scene."""
    import asyncio

    import cv2

    from backend.logging_config import setup_logging
    from core.runtime import OrreryRuntime
    from core.session import OrbitSession, SessionConfig
    from core.types import RenderFrame
    from core.vision.camera import CameraHandSource
    from core.vision.detector import MediaPipeHandDetector
    from core.vision.overlay import draw_hand_skeleton, draw_scene, draw_status

    setup_logging(component="demo")

    try:
        detector = MediaPipeHandDetector(
            args.model,
            max_hands=settings.max_hands,
            min_detection_confidence=settings.min_detection_confidence,
            min_presence_confidence=settings.min_presence_confidence,
            min_tracking_confidence=settings.min_tracking_confidence,
        )
    except (FileNotFoundError, RuntimeError) as e:
        logger.error(f"Detector initialization failed: {e}")
        sys.exit(1)

    try:
        source = CameraHandSource(
            detector,
            camera_index=args.camera,
            width=settings.camera_width,
            height=settings.camera_height,
        )
    except RuntimeError as e:
        detector.close()
        logger.error(f"Camera initialization failed: {e}")
        sys.exit(1)

    session = OrbitSession(SessionConfig(viewport=settings.viewport))
    bodies = tuple(session.config.bodies)

    def show(frame: RenderFrame) -> None:
        image = source.last_frame
        if image is None:
            return
        display = draw_hand_skeleton(cv2.flip(image, 1), source.last_hands, mirrored=True)
        draw_scene(display, frame, bodies)
        draw_status(display, frame, session.ui_state, session.viewport, bodies, session.fps)

        cv2.imshow("Gesture Orrery", display)
        if cv2.waitKey(1) & 0xFF == ord("q"):
            runtime.stop()

    runtime = OrreryRuntime(session, source, on_frame=show, render_fps=args.fps)
    logger.info("Press 'q' to quit")

    try:
        asyncio.run(runtime.run())
    finally:
        session.stop()
        source.close()
        cv2.destroyAllWindows()


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the FastAPI API server (optional server mode)."""
    import uvicorn

    logger.info("Starting Gesture Orrery API server...")
    uvicorn.run(
        "backend.apps.api.main:app",
        host=args.host,
        port=args.port,
        workers=args.workers,
        reload=args.reload,
        log_level="info",
    )


def cmd_bodies() -> None:
    """Print the body catalogue."""
    from core.scene.bodies import DEFAULT_BODIES

    print(f"\n{'NAME':<10}{'DIST':>6}{'SIZE':>6}{'SPEED':>7}  DESCRIPTION")
    for body in DEFAULT_BODIES:
        print(f"{body.name:<10}{body.distance:>6.1f}{body.size:>6.1f}{body.speed:>7.2f}  {body.description}")


def cmd_info() -> None:
    """Show system information."""
    import platform

    import numpy as np

    try:
        import mediapipe as mp
        mp_ver = mp.__version__
    except ImportError:
        mp_ver = "not installed"

    try:
        import cv2
        cv_ver = cv2.__version__
    except ImportError:
        cv_ver = "not installed"

    print(f"""
Gesture Orrery v{settings.app_version}
══════════════════════════════════════════════
  Python:       {platform.python_version()}
  Platform:     {platform.system()} {platform.machine()}
  NumPy:        {np.__version__}
  MediaPipe:    {mp_ver}
  OpenCV:       {cv_ver}
  Model:        {settings.hand_model_path}
  Viewport:     {settings.viewport_width}x{settings.viewport_height} @ {settings.render_fps:g} fps
""")


if __name__ == "__main__":
    main()
