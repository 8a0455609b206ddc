"""Gesture Orrery — FastAPI backend (optional server mode).

Lets a browser-side hand detector stream landmark frames into the core
session and read back interaction state and focus. The core runs without it.
"""
