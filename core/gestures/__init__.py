"""Gestures module — geometric classification of single-hand keypoints."""

from core.gestures.classifier import PINCH_THRESHOLD, distance, is_pinch, thumb_index_distance

__all__ = ["PINCH_THRESHOLD", "distance", "is_pinch", "thumb_index_distance"]
