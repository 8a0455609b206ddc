# ============================================================
#  Gesture Orrery — Dependency Injection
# ============================================================
"""
FastAPI dependency providers for settings and the orrery session.
Ensures a single session (and so a single InteractionState) per process.
"""
from __future__ import annotations

from functools import lru_cache

from backend.config import Settings, settings
from core.session import OrbitSession, SessionConfig


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton Settings instance."""
    return settings


@lru_cache(maxsize=1)
def get_session() -> OrbitSession:
    """Return the process-wide session, started on first use."""
    session = OrbitSession(SessionConfig(viewport=get_settings().viewport))
    session.start()
    return session
