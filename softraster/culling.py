from typing import Optional, Tuple

from .config import CLOCKWISE, COUNTER_CLOCKWISE
from .vecmath import Vec2, Vec3


# ============================================================
#  Screen-space winding
# ============================================================

def signed_area(a: Vec2, b: Vec2, c: Vec2) -> float:
    """
    Twice the signed area of triangle (a, b, c): (b - a) x (c - a).

    Screen y grows downwards, so a positive value means the triangle is
    clockwise as seen on the screen.
    """
    return (b - a).cross(c - a)


def canonical_winding(a: Vec2, b: Vec2, c: Vec2) -> Tuple[Vec2, Vec2, Vec2]:
    """Reorder to clockwise on screen (signed area >= 0) by swapping b and c."""
    if signed_area(a, b, c) < 0.0:
        return a, c, b
    return a, b, c


def winding_of(a: Vec2, b: Vec2, c: Vec2) -> Optional[str]:
    """CLOCKWISE / COUNTER_CLOCKWISE as seen on screen, None when degenerate."""
    area = signed_area(a, b, c)
    if area > 0.0:
        return CLOCKWISE
    if area < 0.0:
        return COUNTER_CLOCKWISE
    return None


# ============================================================
#  Backface culling
# ============================================================

def face_normal(v0: Vec3, v1: Vec3, v2: Vec3) -> Vec3:
    """Unit normal cross(v1 - v0, v2 - v0); zero vector for a degenerate face."""
    return (v1 - v0).cross(v2 - v0).normalize()


def is_backface(v0: Vec3, v1: Vec3, v2: Vec3, camera_pos: Vec3,
                front: str = COUNTER_CLOCKWISE, view_dir: Optional[Vec3] = None) -> bool:
    """
    World-space backface test.

    view_dir defaults to the ray from camera_pos to v0 (perspective). An
    orthographic camera has parallel rays, so pass its forward vector.

    View space is left-handed, so a triangle that shows up counter-clockwise
    on screen has cross(v1 - v0, v2 - v0) pointing away from the viewer.

      front == COUNTER_CLOCKWISE: cull when dot(normal, view_dir) <= 0
      front == CLOCKWISE:         cull when dot(normal, view_dir) >= 0

    Edge-on and degenerate faces (dot == 0) are culled in both cases.
    """
    normal = face_normal(v0, v1, v2)
    if view_dir is None:
        view_dir = v0 - camera_pos
    view_dir = view_dir.normalize()
    facing = normal.dot(view_dir)
    if front == CLOCKWISE:
        facing = -facing
    return facing <= 0.0
