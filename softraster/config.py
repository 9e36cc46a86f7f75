"""
Render configuration knobs.

Everything the pipeline can be told lives in RenderConfig, a frozen
dataclass passed into render_frame() on every call. Hosts switch modes with
dataclasses.replace(); there is no module-level mutable state.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

Color = Tuple[int, int, int]


# ============================================================
#  Render modes (runtime toggles)
# ============================================================

RENDER_POINTS = 1
RENDER_WIREFRAME = 2
RENDER_SOLID = 3

RENDER_MODE_NAMES = {
    RENDER_POINTS: "POINTS",
    RENDER_WIREFRAME: "WIREFRAME",
    RENDER_SOLID: "SOLID",
}

# On-screen winding treated as front facing
CLOCKWISE = "cw"
COUNTER_CLOCKWISE = "ccw"

LINE_BRESENHAM = "bresenham"
LINE_PARAMETRIC = "parametric"

PROJECTION_PERSPECTIVE = "perspective"
PROJECTION_ORTHOGRAPHIC = "orthographic"


@dataclass(frozen=True)
class RenderConfig:
    """
    Per-frame rendering options.

    depth_range:
      NDC depth window (z_min, z_max) a projected vertex must fall in, or
      None to disable rejection. Both projection builders map near..far to
      [0, 1], so the default acts as a cheap near/far test.
    clamp_to_viewport:
      clamp projected points into the buffer instead of letting them fall
      outside (the rasterizer clips anyway; this only affects the points).
    """
    render_mode: int = RENDER_SOLID
    depth_range: Optional[Tuple[float, float]] = (0.0, 1.0)
    cull_backfaces: bool = True
    front_winding: str = COUNTER_CLOCKWISE
    clamp_to_viewport: bool = False
    line_algorithm: str = LINE_BRESENHAM
    background: Color = (10, 10, 18)
    wire_color: Color = (200, 200, 220)
    point_color: Color = (255, 255, 255)

    def __post_init__(self):
        if self.render_mode not in RENDER_MODE_NAMES:
            raise ValueError(f"unknown render mode: {self.render_mode}")
        if self.front_winding not in (CLOCKWISE, COUNTER_CLOCKWISE):
            raise ValueError(f"unknown winding: {self.front_winding}")
        if self.line_algorithm not in (LINE_BRESENHAM, LINE_PARAMETRIC):
            raise ValueError(f"unknown line algorithm: {self.line_algorithm}")
        if self.depth_range is not None and self.depth_range[0] > self.depth_range[1]:
            raise ValueError(f"depth_range is inverted: {self.depth_range}")
