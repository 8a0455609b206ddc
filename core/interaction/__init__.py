"""Interaction module — folds detected hands into the shared interaction state."""

from core.interaction.reducer import InteractionReducer, ReducerConfig

__all__ = ["InteractionReducer", "ReducerConfig"]
