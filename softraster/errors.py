"""
Error types raised by the rendering core.

Only construction-time problems raise. Per-vertex and per-pixel conditions
during a frame (a point behind the eye, a pixel outside the buffer) are
skipped instead, so a single bad triangle cannot blank the whole frame.
"""


class RenderError(Exception):
    """Base class for all softraster errors."""


class DegenerateMatrixError(RenderError, ValueError):
    """
    A transform could not be built from the given parameters.

    Examples:
      - perspective() with near >= far, aspect <= 0 or fov outside (0, pi)
      - look_at() with eye == target or up parallel to the view direction
      - rotation_about_axis() with a zero-length axis
    """


class InvalidMeshError(RenderError, ValueError):
    """Mesh arrays are inconsistent (index count, color count)."""


class IndexOutOfRangeError(InvalidMeshError, IndexError):
    """A triangle index does not name an existing vertex."""
