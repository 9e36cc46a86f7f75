import math

from .errors import DegenerateMatrixError
from .vecmath import Mat4, Vec3


# ============================================================
#  3D transforms
# ============================================================

def translate(tx, ty, tz) -> Mat4:
    """
    Translation matrix.

    Applies: (x, y, z) -> (x + tx, y + ty, z + tz)
    """
    m = Mat4.identity()
    m.m[0][3] = tx
    m.m[1][3] = ty
    m.m[2][3] = tz
    return m

def scale(sx, sy, sz) -> Mat4:
    """
    Scaling matrix.

    Applies: (x, y, z) -> (sx*x, sy*y, sz*z)
    """
    m = Mat4.identity()
    m.m[0][0] = sx
    m.m[1][1] = sy
    m.m[2][2] = sz
    return m

def rotate_x(a) -> Mat4:
    """Rotation around X axis by angle a (radians)."""
    c, s = math.cos(a), math.sin(a)
    m = Mat4.identity()
    m.m[1][1] = c
    m.m[1][2] = -s
    m.m[2][1] = s
    m.m[2][2] = c
    return m

def rotate_y(a) -> Mat4:
    """Rotation around Y axis by angle a (radians)."""
    c, s = math.cos(a), math.sin(a)
    m = Mat4.identity()
    m.m[0][0] = c
    m.m[0][2] = s
    m.m[2][0] = -s
    m.m[2][2] = c
    return m

def rotation_about_axis(axis: Vec3, angle_degrees: float) -> Mat4:
    """
    Rotation about an arbitrary axis through the origin (Rodrigues' formula).

        R = cos(a) * I + sin(a) * [k]x + (1 - cos(a)) * k k^T

    The axis is normalized here, so callers may pass any non-zero direction.
    A zero axis has no direction and raises DegenerateMatrixError.
    """
    k = axis.normalize()
    if k.is_zero():
        raise DegenerateMatrixError(f"rotation axis has zero length: {axis}")

    a = math.radians(angle_degrees)
    c, s = math.cos(a), math.sin(a)
    t = 1.0 - c
    x, y, z = k.x, k.y, k.z

    m = Mat4.identity()
    m.m[0][0] = c + x*x*t
    m.m[0][1] = x*y*t - z*s
    m.m[0][2] = x*z*t + y*s
    m.m[1][0] = y*x*t + z*s
    m.m[1][1] = c + y*y*t
    m.m[1][2] = y*z*t - x*s
    m.m[2][0] = z*x*t - y*s
    m.m[2][1] = z*y*t + x*s
    m.m[2][2] = c + z*z*t
    return m


# ============================================================
#  View
# ============================================================

def look_at(eye: Vec3, target: Vec3, up: Vec3) -> Mat4:
    """
    View matrix for a camera at `eye` looking at `target`.

    Basis (left-handed view space, camera looks down +Z):
      forward = normalize(target - eye)
      right   = normalize(cross(up, forward))
      true_up = cross(forward, right)

    Returns R^T @ T(-eye): the world is first moved so the eye sits at the
    origin, then rotated into the camera basis.
    """
    forward = (target - eye).normalize()
    if forward.is_zero():
        raise DegenerateMatrixError("look_at: eye and target coincide")
    right = up.cross(forward).normalize()
    if right.is_zero():
        raise DegenerateMatrixError("look_at: up is parallel to the view direction")
    true_up = forward.cross(right)

    # rows of the rotation are the basis vectors (transpose of the basis)
    basis_t = Mat4([
        [right.x,   right.y,   right.z,   0.0],
        [true_up.x, true_up.y, true_up.z, 0.0],
        [forward.x, forward.y, forward.z, 0.0],
        [0.0,       0.0,       0.0,       1.0],
    ])
    return basis_t @ translate(-eye.x, -eye.y, -eye.z)


# ============================================================
#  Projections
# ============================================================

def perspective(fov_y, aspect, z_near, z_far) -> Mat4:
    """
    Perspective projection matrix.

    Parameters:
      fov_y  - full vertical field of view in radians, 0 < fov_y < pi
      aspect - width / height
      z_near - near plane distance (positive)
      z_far  - far plane distance (> z_near)

    Notes:
      - View space looks towards +Z, so clip-space w = +z_view.
      - Depth maps to NDC z in [0, 1]: z_near -> 0, z_far -> 1.
    """
    if not 0.0 < fov_y < math.pi:
        raise DegenerateMatrixError(f"fov must be in (0, pi), got {fov_y}")
    if aspect <= 0.0:
        raise DegenerateMatrixError(f"aspect must be positive, got {aspect}")
    if z_near <= 0.0 or z_far <= z_near:
        raise DegenerateMatrixError(f"need 0 < near < far, got near={z_near}, far={z_far}")

    f = 1.0 / math.tan(fov_y / 2.0)
    depth = z_far - z_near
    m = Mat4()
    m.m[0][0] = f / aspect
    m.m[1][1] = f
    m.m[2][2] = z_far / depth
    m.m[2][3] = -z_near * z_far / depth
    m.m[3][2] = 1.0
    return m

def orthographic(left, right, bottom, top, z_near, z_far) -> Mat4:
    """
    Orthographic (parallel) projection matrix.

    Maps the box [left, right] x [bottom, top] x [z_near, z_far] to
    NDC [-1, 1] x [-1, 1] x [0, 1]. w stays 1, so the divide is a no-op.
    """
    if right == left or top == bottom or z_far == z_near:
        raise DegenerateMatrixError(
            f"empty orthographic volume: x=({left}, {right}) y=({bottom}, {top}) z=({z_near}, {z_far})")

    m = Mat4.identity()
    m.m[0][0] = 2.0 / (right - left)
    m.m[0][3] = -(right + left) / (right - left)
    m.m[1][1] = 2.0 / (top - bottom)
    m.m[1][3] = -(top + bottom) / (top - bottom)
    m.m[2][2] = 1.0 / (z_far - z_near)
    m.m[2][3] = -z_near / (z_far - z_near)
    return m
