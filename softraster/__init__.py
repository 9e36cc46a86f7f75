"""
softraster - a small software 3D rendering pipeline.

Model/view/projection transforms, perspective divide, backface culling and
Bresenham / edge-function rasterization into a numpy pixel buffer.
"""
from .config import RenderConfig
from .errors import DegenerateMatrixError, IndexOutOfRangeError, InvalidMeshError, RenderError
from .pipeline import Camera, FrameStats, Mesh, project, render_frame
from .vecmath import Mat4, Vec2, Vec3, Vec4

__version__ = "0.1.0"

__all__ = [
    "Camera",
    "DegenerateMatrixError",
    "FrameStats",
    "IndexOutOfRangeError",
    "InvalidMeshError",
    "Mat4",
    "Mesh",
    "RenderConfig",
    "RenderError",
    "Vec2",
    "Vec3",
    "Vec4",
    "project",
    "render_frame",
]
