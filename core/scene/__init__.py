"""Scene module — orbiting bodies, group transform and focus selection."""

from core.scene.bodies import DEFAULT_BODIES, find_body
from core.scene.focus import FocusSelector, select_focus
from core.scene.orbits import OrbitSimulator, orbital_angle, orbital_position
from core.scene.transform import apply_group_transform, rotation_matrix

__all__ = [
    "DEFAULT_BODIES",
    "find_body",
    "FocusSelector",
    "select_focus",
    "OrbitSimulator",
    "orbital_angle",
    "orbital_position",
    "apply_group_transform",
    "rotation_matrix",
]
