"""
Vertex pipeline and per-frame entry point.

Frame data flow:
  Mesh + Camera -> M, V, P -> MVP = P @ V @ M
  -> project every vertex (perspective divide, NDC -> screen pixels)
  -> backface culling per triangle (world space)
  -> rasterize survivors into the host's frame buffer

render_frame() keeps no state between calls: the result depends only on
the mesh, camera, model matrix, viewport size and config.
"""
import logging
import math
import numbers
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .config import (
    Color,
    PROJECTION_ORTHOGRAPHIC,
    PROJECTION_PERSPECTIVE,
    RENDER_POINTS,
    RENDER_WIREFRAME,
    RenderConfig,
)
from .culling import is_backface
from .errors import DegenerateMatrixError, IndexOutOfRangeError, InvalidMeshError
from .raster import draw_segment, draw_triangle, plot_point
from .transforms import look_at, orthographic, perspective
from .vecmath import Mat4, Vec2, Vec3, vec3_to_vec4

logger = logging.getLogger(__name__)

# Clip-space w at or below this is treated as behind / at the eye
W_EPSILON = 1e-6


# ============================================================
#  Scene data
# ============================================================

@dataclass(frozen=True)
class Mesh:
    """
    Triangle mesh.

      vertices    - model-space positions
      indices     - flat list, every 3 consecutive entries name one triangle
      face_colors - one RGB color per triangle

    Validated on construction; rendering never sees a bad index.
    """
    vertices: Tuple[Vec3, ...]
    indices: Tuple[int, ...]
    face_colors: Tuple[Color, ...]

    def __post_init__(self):
        # accept lists from callers, store tuples
        object.__setattr__(self, "vertices", tuple(self.vertices))
        object.__setattr__(self, "indices", tuple(self.indices))
        for pos, i in enumerate(self.indices):
            if isinstance(i, bool) or not isinstance(i, numbers.Integral):
                raise InvalidMeshError(f"index {i!r} at position {pos} is not an integer")
        object.__setattr__(self, "indices", tuple(int(i) for i in self.indices))
        object.__setattr__(self, "face_colors", tuple(tuple(c) for c in self.face_colors))

        if len(self.indices) % 3 != 0:
            raise InvalidMeshError(f"index count {len(self.indices)} is not a multiple of 3")
        if len(self.face_colors) != len(self.indices) // 3:
            raise InvalidMeshError(
                f"{len(self.face_colors)} face colors for {len(self.indices) // 3} triangles")
        n = len(self.vertices)
        for pos, i in enumerate(self.indices):
            if not 0 <= i < n:
                raise IndexOutOfRangeError(
                    f"index {i} at position {pos} (triangle {pos // 3}) out of range for {n} vertices")
        for color in self.face_colors:
            if len(color) != 3 or any(not 0 <= ch <= 255 for ch in color):
                raise InvalidMeshError(f"bad RGB color {color}")

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    def triangles(self):
        """Yield (i0, i1, i2, color) per triangle, in list order."""
        idx = self.indices
        for t in range(self.triangle_count):
            yield idx[3*t], idx[3*t + 1], idx[3*t + 2], self.face_colors[t]


@dataclass(frozen=True)
class Camera:
    """
    Camera state handed to render_frame each frame.

    Only forward and up are stored; right is derived. On construction
    forward is normalized and up is made orthogonal to it, so the pair is
    always orthonormal. Hosts move the camera by building a new value
    (see moved()), never by mutating one.

      fov          - full vertical field of view, radians, 0 < fov < pi
      aspect       - viewport width / height
      near, far    - 0 < near < far
      projection   - PROJECTION_PERSPECTIVE or PROJECTION_ORTHOGRAPHIC
      ortho_height - visible world height for the orthographic projection
    """
    position: Vec3
    forward: Vec3 = Vec3(0.0, 0.0, 1.0)
    up: Vec3 = Vec3(0.0, 1.0, 0.0)
    fov: float = math.radians(60.0)
    aspect: float = 4.0 / 3.0
    near: float = 0.1
    far: float = 100.0
    projection: str = PROJECTION_PERSPECTIVE
    ortho_height: float = 4.0

    def __post_init__(self):
        if not 0.0 < self.fov < math.pi:
            raise DegenerateMatrixError(f"fov must be in (0, pi), got {self.fov}")
        if self.aspect <= 0.0:
            raise DegenerateMatrixError(f"aspect must be positive, got {self.aspect}")
        if not 0.0 < self.near < self.far:
            raise DegenerateMatrixError(f"need 0 < near < far, got near={self.near}, far={self.far}")
        if self.projection not in (PROJECTION_PERSPECTIVE, PROJECTION_ORTHOGRAPHIC):
            raise ValueError(f"unknown projection: {self.projection}")
        if self.ortho_height <= 0.0:
            raise DegenerateMatrixError(f"ortho_height must be positive, got {self.ortho_height}")

        forward = self.forward.normalize()
        if forward.is_zero():
            raise DegenerateMatrixError("camera forward vector has zero length")
        # Gram-Schmidt: drop the part of up along forward
        up = (self.up - forward * self.up.dot(forward)).normalize()
        if up.is_zero():
            raise DegenerateMatrixError("camera up vector is parallel to forward")
        object.__setattr__(self, "forward", forward)
        object.__setattr__(self, "up", up)

    @classmethod
    def looking_at(cls, eye: Vec3, target: Vec3, up: Vec3 = Vec3(0.0, 1.0, 0.0), **kwargs) -> "Camera":
        """Camera at eye, pointed at target."""
        return cls(position=eye, forward=target - eye, up=up, **kwargs)

    @classmethod
    def from_yaw_pitch(cls, position: Vec3, yaw: float, pitch: float, **kwargs) -> "Camera":
        """
        Camera from yaw (around +Y) and pitch (around right) angles in radians.
        yaw = pitch = 0 looks down +Z.
        """
        cy, sy = math.cos(yaw), math.sin(yaw)
        cp, sp = math.cos(pitch), math.sin(pitch)
        forward = Vec3(sy * cp, sp, cy * cp)
        return cls(position=position, forward=forward, up=Vec3(0.0, 1.0, 0.0), **kwargs)

    @property
    def right(self) -> Vec3:
        return self.up.cross(self.forward)

    def moved(self, delta: Vec3) -> "Camera":
        """Copy of this camera translated by delta (world space)."""
        return replace(self, position=self.position + delta)

    def view_matrix(self) -> Mat4:
        return look_at(self.position, self.position + self.forward, self.up)

    def projection_matrix(self) -> Mat4:
        if self.projection == PROJECTION_ORTHOGRAPHIC:
            half_h = self.ortho_height / 2.0
            half_w = half_h * self.aspect
            return orthographic(-half_w, half_w, -half_h, half_h, self.near, self.far)
        return perspective(self.fov, self.aspect, self.near, self.far)


@dataclass
class FrameStats:
    """Per-frame triangle counters returned by render_frame()."""
    triangles: int = 0
    drawn: int = 0
    culled: int = 0
    skipped: int = 0      # nothing left to draw once unprojectable vertices are dropped
    offscreen: int = 0    # screen bounding box misses the viewport


# ============================================================
#  Vertex pipeline
# ============================================================

def to_screen(ndc_x, ndc_y, W, H):
    """
    Convert NDC coordinates [-1..1] to screen coordinates [0..W], [0..H].

    NDC:
      x=-1 left, x=+1 right
      y=-1 bottom, y=+1 top

    Screen:
      x=0 left, x=W right
      y=0 top, y=H bottom
    """
    sx = (ndc_x + 1.0) * 0.5 * W
    sy = (1.0 - ndc_y) * 0.5 * H
    return sx, sy


def project(vertex: Vec3, mvp: Mat4, width: int, height: int,
            depth_range: Optional[Tuple[float, float]] = None,
            clamp: bool = False) -> Optional[Vec2]:
    """
    Project one model-space vertex to screen pixel coordinates.

    Returns None (skip this vertex) when:
      - clip-space w <= W_EPSILON: the point is behind or at the eye, and
        dividing would flip it or blow up
      - depth_range is given and NDC z falls outside it
    """
    c = mvp.mul_vec4(vec3_to_vec4(vertex))
    if c.w <= W_EPSILON:
        return None

    # Perspective divide
    ndc_x, ndc_y, ndc_z = c.x / c.w, c.y / c.w, c.z / c.w
    if depth_range is not None and not depth_range[0] <= ndc_z <= depth_range[1]:
        return None

    sx, sy = to_screen(ndc_x, ndc_y, width, height)
    if clamp:
        sx = min(max(sx, 0.0), width - 1.0)
        sy = min(max(sy, 0.0), height - 1.0)
    return Vec2(sx, sy)


def project_vertices(vertices: Sequence[Vec3], mvp: Mat4, width: int, height: int,
                     config: RenderConfig) -> List[Optional[Vec2]]:
    """Projected vertex buffer for one frame: one screen point (or None) per vertex."""
    return [project(v, mvp, width, height, config.depth_range, config.clamp_to_viewport)
            for v in vertices]


def _offscreen(points: Sequence[Vec2], width: int, height: int) -> bool:
    """Trivial reject: bbox of the projected points fully outside the viewport."""
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return max(xs) < 0 or min(xs) > width - 1 or max(ys) < 0 or min(ys) > height - 1


# ============================================================
#  Frame entry point
# ============================================================

def render_frame(mesh: Mesh, camera: Camera, width: int, height: int,
                 frame_buffer: np.ndarray, config: Optional[RenderConfig] = None,
                 model: Optional[Mat4] = None) -> FrameStats:
    """
    Render one frame of mesh, seen from camera, into frame_buffer.

    frame_buffer must be a (width, height, 3) uint8 array indexed [x, y, c]
    (e.g. pygame.surfarray.pixels3d). It is cleared in place to
    config.background. Triangles are drawn in list order with no depth
    test, so later triangles win where they overlap.

    A vertex that projects to None (behind the eye or outside the depth
    range) removes the whole triangle in solid mode, but only its own edges
    in wireframe mode and only itself in points mode.
    """
    if config is None:
        config = RenderConfig()
    if frame_buffer.shape[:2] != (width, height):
        raise ValueError(f"frame buffer shape {frame_buffer.shape} does not match viewport {width}x{height}")

    frame_buffer[:, :, :] = config.background

    model_m = model if model is not None else Mat4.identity()
    mvp = camera.projection_matrix() @ camera.view_matrix() @ model_m

    projected = project_vertices(mesh.vertices, mvp, width, height, config)
    world = [model_m.mul_point(v) for v in mesh.vertices] if config.cull_backfaces else None
    # orthographic rays are parallel to forward; perspective rays start at the eye
    view_dir = camera.forward if camera.projection == PROJECTION_ORTHOGRAPHIC else None

    stats = FrameStats(triangles=mesh.triangle_count)

    for i0, i1, i2, color in mesh.triangles():
        pts = (projected[i0], projected[i1], projected[i2])
        # a vertex that did not project drops only what it touches:
        # its point, its two edges, or the whole filled triangle
        edges = [(pts[k], pts[(k + 1) % 3]) for k in range(3)
                 if pts[k] is not None and pts[(k + 1) % 3] is not None]
        visible = [p for p in pts if p is not None]
        if config.render_mode == RENDER_POINTS:
            drawable = bool(visible)
        elif config.render_mode == RENDER_WIREFRAME:
            drawable = bool(edges)
        else:
            drawable = len(visible) == 3
        if not drawable:
            stats.skipped += 1
            continue

        if config.cull_backfaces and is_backface(world[i0], world[i1], world[i2], camera.position,
                                                 config.front_winding, view_dir):
            stats.culled += 1
            continue

        if _offscreen(visible, width, height):
            stats.offscreen += 1
            continue

        if config.render_mode == RENDER_POINTS:
            pr, pg, pb = config.point_color
            for p in visible:
                plot_point(frame_buffer, int(math.floor(p.x)), int(math.floor(p.y)), pr, pg, pb)
        elif config.render_mode == RENDER_WIREFRAME:
            if len(edges) == 3:
                draw_triangle(frame_buffer, pts[0], pts[1], pts[2], config.wire_color,
                              filled=False, line_algorithm=config.line_algorithm)
            else:
                for p, q in edges:
                    draw_segment(frame_buffer, p, q, config.wire_color, config.line_algorithm)
        else:
            draw_triangle(frame_buffer, pts[0], pts[1], pts[2], color, filled=True)
        stats.drawn += 1

    logger.debug("frame %dx%d: %d triangles, %d drawn, %d culled, %d skipped, %d offscreen",
                 width, height, stats.triangles, stats.drawn, stats.culled,
                 stats.skipped, stats.offscreen)
    return stats
