"""Focus selection: the body nearest the viewer is the focused one.

The camera looks down -z from the +z side, so the forward coordinate of a body
is its world z. There is no hysteresis: two bodies at near-equal depth can
swap focus from one tick to the next.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from core.scene.transform import apply_group_transform
from core.types import BodyPose, GroupTransform

FORWARD_AXIS = 2  # world z


def select_focus(names: Sequence[str], forward: Sequence[float]) -> str:
    """Name of the entry with the largest forward coordinate.

    Ties resolve to the first entry in declaration order.

    Raises:
        ValueError: If the inputs are empty or of different lengths.
    """
    if not names:
        raise ValueError("Cannot select focus from an empty scene")
    if len(names) != len(forward):
        raise ValueError(f"Got {len(names)} names but {len(forward)} forward coordinates")
    return names[int(np.argmax(np.asarray(forward, dtype=np.float64)))]


class FocusSelector:
    """Pick the frontmost body after the group transform is applied."""

    def forward_coordinates(self, poses: Sequence[BodyPose], transform: GroupTransform) -> np.ndarray:
        if not poses:
            return np.zeros(0, dtype=np.float64)
        local = np.stack([p.position for p in poses])
        world = apply_group_transform(local, transform)
        return world[:, FORWARD_AXIS]

    def select(self, poses: Sequence[BodyPose], transform: GroupTransform) -> str:
        forward = self.forward_coordinates(poses, transform)
        return select_focus([p.name for p in poses], forward.tolist())
