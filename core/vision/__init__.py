"""Vision module — MediaPipe hand detection and detector-output ingestion."""

from core.vision.ingest import ingest_hand, ingest_hands

__all__ = ["ingest_hand", "ingest_hands"]
