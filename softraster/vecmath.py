import math
from dataclasses import dataclass
from typing import List, Optional


EPSILON = 1e-12


# ============================================================
#  Vectors
# ============================================================

@dataclass(frozen=True)
class Vec2:
    """
    2D vector for screen-space points.

    Note:
      - We keep this immutable (frozen) for safer math style.
      - Operations return new objects (no in-place changes).
      - Screen space has its origin top-left, y grows downwards.
    """
    x: float
    y: float

    def __sub__(self, o): return Vec2(self.x - o.x, self.y - o.y)

    def cross(self, o) -> float:
        """2D cross product (z of the 3D cross product)."""
        return self.x * o.y - self.y * o.x


@dataclass(frozen=True)
class Vec3:
    """
    3D vector for positions, directions and normals.

    Used in:
      - mesh vertices (model space)
      - camera position and basis
      - face normals for backface culling
    """
    x: float
    y: float
    z: float

    def __add__(self, o): return Vec3(self.x + o.x, self.y + o.y, self.z + o.z)
    def __sub__(self, o): return Vec3(self.x - o.x, self.y - o.y, self.z - o.z)
    def __mul__(self, k: float): return Vec3(self.x * k, self.y * k, self.z * k)
    def __neg__(self): return Vec3(-self.x, -self.y, -self.z)

    def dot(self, o) -> float:
        """Dot product (scalar product)."""
        return self.x * o.x + self.y * o.y + self.z * o.z

    def cross(self, o):
        """Cross product (vector product)."""
        return Vec3(
            self.y * o.z - self.z * o.y,
            self.z * o.x - self.x * o.z,
            self.x * o.y - self.y * o.x
        )

    def norm(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.dot(self))

    def normalize(self):
        """
        Return normalized vector (length=1).

        A (near) zero-length vector has no direction; the zero vector is
        returned explicitly instead of dividing by zero. Callers that need a
        direction check `is_zero()` on the result.
        """
        n = self.norm()
        if n <= EPSILON:
            return Vec3(0.0, 0.0, 0.0)
        return self * (1.0 / n)

    def is_zero(self) -> bool:
        return self.norm() <= EPSILON


@dataclass(frozen=True)
class Vec4:
    """
    4D homogeneous vector.
    Used for matrix multiplication in 3D transforms and projections.
    """
    x: float
    y: float
    z: float
    w: float

    def xyz(self) -> Vec3:
        return Vec3(self.x, self.y, self.z)


# ============================================================
#  Matrix
# ============================================================

class Mat4:
    """
    4x4 matrix (row-major storage, column-vector convention).

    Convention:
      - vectors are columns: v' = M * v
      - M1 @ M2 applies M2 first, then M1
      - the full transform is MVP = P @ V @ M

    Multiplication:
      - Matrix @ Matrix => Mat4
      - Matrix.mul_vec4(Vec4) => Vec4
    """
    def __init__(self, m: Optional[List[List[float]]] = None):
        self.m = m if m is not None else [[0.0]*4 for _ in range(4)]

    @staticmethod
    def identity():
        """Create identity matrix."""
        m = Mat4()
        for i in range(4):
            m.m[i][i] = 1.0
        return m

    def __matmul__(self, o: "Mat4") -> "Mat4":
        """Matrix multiplication (Mat4 @ Mat4)."""
        r = Mat4()
        for i in range(4):
            for j in range(4):
                s = 0.0
                for k in range(4):
                    s += self.m[i][k] * o.m[k][j]
                r.m[i][j] = s
        return r

    def __eq__(self, o):
        if not isinstance(o, Mat4):
            return NotImplemented
        return self.m == o.m

    def __repr__(self):
        rows = ", ".join("[" + ", ".join(f"{v:.4g}" for v in row) + "]" for row in self.m)
        return f"Mat4([{rows}])"

    def mul_vec4(self, v: Vec4) -> Vec4:
        """Multiply matrix by a Vec4 (Mat4 * Vec4)."""
        x = self.m[0][0]*v.x + self.m[0][1]*v.y + self.m[0][2]*v.z + self.m[0][3]*v.w
        y = self.m[1][0]*v.x + self.m[1][1]*v.y + self.m[1][2]*v.z + self.m[1][3]*v.w
        z = self.m[2][0]*v.x + self.m[2][1]*v.y + self.m[2][2]*v.z + self.m[2][3]*v.w
        w = self.m[3][0]*v.x + self.m[3][1]*v.y + self.m[3][2]*v.z + self.m[3][3]*v.w
        return Vec4(x, y, z, w)

    def mul_point(self, v: Vec3) -> Vec3:
        """Transform a position (w=1), dropping w. Only meaningful for affine matrices."""
        return self.mul_vec4(vec3_to_vec4(v)).xyz()


def vec3_to_vec4(v: Vec3, w: float = 1.0) -> Vec4:
    """Convert Vec3 to homogeneous Vec4."""
    return Vec4(v.x, v.y, v.z, w)


def transform(v: Vec4, m: Mat4) -> Vec4:
    """Apply m to a column vector: returns m * v."""
    return m.mul_vec4(v)
