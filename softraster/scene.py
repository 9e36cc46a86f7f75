"""Built-in demo geometry."""
import math
from typing import Optional, Sequence

from .config import Color
from .pipeline import Camera, Mesh
from .vecmath import Vec3

# One color per cube side: front, back, right, left, top, bottom
CUBE_SIDE_COLORS = (
    (220, 60, 60),
    (60, 200, 90),
    (70, 110, 230),
    (230, 200, 60),
    (200, 80, 210),
    (60, 200, 210),
)

# Two triangles per side, wound counter-clockwise as seen from outside the cube
_CUBE_INDICES = (
    0, 1, 2,  0, 2, 3,   # front  (z = -s)
    5, 4, 7,  5, 7, 6,   # back   (z = +s)
    1, 6, 2,  1, 5, 6,   # right  (x = +s)
    4, 0, 3,  4, 3, 7,   # left   (x = -s)
    3, 2, 6,  3, 6, 7,   # top    (y = +s)
    4, 5, 1,  4, 1, 0,   # bottom (y = -s)
)


def cube_mesh(size: float = 1.0, colors: Optional[Sequence[Color]] = None) -> Mesh:
    """
    Axis-aligned cube centred on the origin with vertices at +-size.

    colors: 6 per-side colors (each used for both triangles of a side) or
    12 per-triangle colors. Defaults to CUBE_SIDE_COLORS.
    """
    s = float(size)
    vertices = [
        Vec3(-s, -s, -s), Vec3(s, -s, -s), Vec3(s, s, -s), Vec3(-s, s, -s),
        Vec3(-s, -s, s), Vec3(s, -s, s), Vec3(s, s, s), Vec3(-s, s, s),
    ]
    if colors is None:
        colors = CUBE_SIDE_COLORS
    if len(colors) == 6:
        colors = [c for c in colors for _ in range(2)]
    return Mesh(vertices=vertices, indices=_CUBE_INDICES, face_colors=colors)


def default_camera(aspect: float, **kwargs) -> Camera:
    """Camera on the -Z axis looking at the origin, 60 deg vertical fov."""
    return Camera.looking_at(Vec3(0.0, 0.0, -5.0), Vec3(0.0, 0.0, 0.0),
                             fov=math.radians(60.0), aspect=aspect, **kwargs)
