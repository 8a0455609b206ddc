"""Gesture Orrery — Centralised Settings (Pydantic v2).

Single source of truth for all configuration.
Loads from .env, environment variables, or defaults.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.types import Viewport

_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ──────────────────────────────────────────
    app_name: str = "Gesture Orrery"
    app_version: str = "0.1.0"
    app_env: str = "development"
    debug: bool = True
    log_level: str = "INFO"
    log_dir: str = "logs"
    log_file_level: str = "DEBUG"
    log_retention_days: int = 7

    # ── Server ───────────────────────────────────────────────
    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1
    cors_origins: list[str] = ["*"]

    # ── Detector ─────────────────────────────────────────────
    hand_model_path: str = "models/hand_landmarker.task"
    max_hands: int = 2
    min_detection_confidence: float = 0.5
    min_presence_confidence: float = 0.5
    min_tracking_confidence: float = 0.5

    # ── Camera ───────────────────────────────────────────────
    camera_index: int = 0
    camera_width: int = 1280
    camera_height: int = 720

    # ── Display ──────────────────────────────────────────────
    viewport_width: int = 1280
    viewport_height: int = 720
    render_fps: float = 60.0

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_cors(cls, v: str | list[str]) -> list[str]:
        if isinstance(v, str):
            return json.loads(v)
        return v

    @field_validator("max_hands")
    @classmethod
    def _check_max_hands(cls, v: int) -> int:
        if not 1 <= v <= 2:
            raise ValueError("max_hands must be 1 or 2")
        return v

    @field_validator("log_level", "log_file_level")
    @classmethod
    def _check_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level {v!r}")
        return level

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def project_root(self) -> Path:
        return Path(__file__).resolve().parent.parent

    @property
    def viewport(self) -> Viewport:
        return Viewport(self.viewport_width, self.viewport_height)


settings = Settings()
