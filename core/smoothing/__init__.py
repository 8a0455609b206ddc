"""Smoothing module — render-time damping of interaction values."""

from core.smoothing.smoother import RenderSmoother, SmootherConfig, damp

__all__ = ["RenderSmoother", "SmootherConfig", "damp"]
