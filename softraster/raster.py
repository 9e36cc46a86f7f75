import math
from typing import Optional, Tuple

import numpy as np
from numba import njit

from .config import Color, LINE_BRESENHAM, LINE_PARAMETRIC
from .culling import canonical_winding
from .vecmath import Vec2

# Fixed step count of the naive parametric line stepper
PARAMETRIC_STEPS = 100


# ============================================================
#  Numba kernels
# ============================================================
#
# img is a pygame.surfarray.pixels3d-style array: shape (W, H, 3), uint8.
# IMPORTANT: index order is [x, y, channel].

@njit(cache=True)
def plot_point(img, x, y, r, g, b):
    """Write one pixel; silently ignored when outside the buffer."""
    W, H, _ = img.shape
    if 0 <= x < W and 0 <= y < H:
        img[x, y, 0] = r
        img[x, y, 1] = g
        img[x, y, 2] = b


@njit(cache=True)
def draw_line(img, x0, y0, x1, y1, r, g, b):
    """
    Bresenham integer line drawing.

    Parameters:
      x0, y0, x1, y1 - integer endpoints (may lie outside the buffer)
      r, g, b        - color

    Works in all octants: steep lines are drawn with x/y swapped and the
    endpoints are ordered so x always increases. One pixel is written per
    step along the major axis, so there are no gaps and no duplicates.
    A zero-length segment plots a single pixel.
    """
    W, H, _ = img.shape

    steep = abs(x0 - x1) < abs(y0 - y1)
    if steep:
        x0, y0 = y0, x0
        x1, y1 = y1, x1
    if x0 > x1:
        x0, x1 = x1, x0
        y0, y1 = y1, y0

    dx = x1 - x0
    dy = abs(y1 - y0)
    error2 = 0
    y = y0
    ystep = 1 if y1 > y0 else -1

    for x in range(x0, x1 + 1):
        if steep:
            px, py = y, x
        else:
            px, py = x, y
        if 0 <= px < W and 0 <= py < H:
            img[px, py, 0] = r
            img[px, py, 1] = g
            img[px, py, 2] = b
        error2 += 2 * dy
        if error2 > dx:
            y += ystep
            error2 -= 2 * dx


@njit(cache=True)
def draw_line_parametric(img, x0, y0, x1, y1, r, g, b, steps):
    """
    Naive parametric line: sample p(t) = p0 + (p1 - p0) * t at `steps` + 1
    evenly spaced t in [0, 1] and round to the nearest pixel.

    Cheap but inexact: long lines get gaps and short lines repeat pixels.
    """
    W, H, _ = img.shape
    if steps < 1:
        steps = 1
    for i in range(steps + 1):
        t = i / steps
        x = int(math.floor(x0 + (x1 - x0) * t + 0.5))
        y = int(math.floor(y0 + (y1 - y0) * t + 0.5))
        if 0 <= x < W and 0 <= y < H:
            img[x, y, 0] = r
            img[x, y, 1] = g
            img[x, y, 2] = b


@njit(cache=True)
def _edge(ax, ay, bx, by, px, py):
    """Edge function: > 0 when p lies on the inner side of a->b (clockwise triangle, y down)."""
    return (bx - ax) * (py - ay) - (by - ay) * (px - ax)


@njit(cache=True)
def _is_top_left(ax, ay, bx, by):
    """
    Top-left rule for a clockwise triangle on a y-down screen:
      top edge  - horizontal, walked towards +x
      left edge - walked upwards (towards -y)
    """
    dx = bx - ax
    dy = by - ay
    return (dy == 0.0 and dx > 0.0) or dy < 0.0


@njit(cache=True)
def fill_triangle(img, x0, y0, x1, y1, x2, y2, r, g, b):
    """
    Rasterize a filled triangle with a constant color.

    Vertices must be in canonical order (clockwise on screen, signed area
    > 0); degenerate or reversed triangles draw nothing.

    Pixel (x, y) is covered when its centre (x + 0.5, y + 0.5) is inside all
    three edges. Centres exactly on an edge belong to the triangle only if
    that edge is a top or left edge, so two triangles sharing an edge never
    both write the pixels along it.
    """
    W, H, _ = img.shape

    area = _edge(x0, y0, x1, y1, x2, y2)
    if area <= 0.0:
        return

    minx = max(0, int(math.floor(min(x0, x1, x2))))
    maxx = min(W - 1, int(math.ceil(max(x0, x1, x2))))
    miny = max(0, int(math.floor(min(y0, y1, y2))))
    maxy = min(H - 1, int(math.ceil(max(y0, y1, y2))))

    # edge k is the one opposite vertex k
    tl0 = _is_top_left(x1, y1, x2, y2)
    tl1 = _is_top_left(x2, y2, x0, y0)
    tl2 = _is_top_left(x0, y0, x1, y1)

    for y in range(miny, maxy + 1):
        py = y + 0.5
        for x in range(minx, maxx + 1):
            px = x + 0.5
            w0 = _edge(x1, y1, x2, y2, px, py)
            w1 = _edge(x2, y2, x0, y0, px, py)
            w2 = _edge(x0, y0, x1, y1, px, py)
            if w0 < 0.0 or w1 < 0.0 or w2 < 0.0:
                continue
            if (w0 == 0.0 and not tl0) or (w1 == 0.0 and not tl1) or (w2 == 0.0 and not tl2):
                continue

            img[x, y, 0] = r
            img[x, y, 1] = g
            img[x, y, 2] = b


def warmup():
    """Pre-warm Numba (first call triggers compilation)."""
    dummy_img = np.zeros((4, 4, 3), dtype=np.uint8)
    plot_point(dummy_img, 0, 0, 255, 255, 255)
    draw_line(dummy_img, 0, 0, 3, 2, 255, 255, 255)
    draw_line_parametric(dummy_img, 0.0, 0.0, 3.0, 2.0, 255, 255, 255, PARAMETRIC_STEPS)
    fill_triangle(dummy_img, 0.0, 0.0, 3.0, 0.0, 0.0, 3.0, 255, 255, 255)


# ============================================================
#  Python-level drawing helpers
# ============================================================

def clip_segment(x0, y0, x1, y1, xmin, ymin, xmax, ymax) -> Optional[Tuple[float, float, float, float]]:
    """
    Liang-Barsky clip of segment p0->p1 against an axis-aligned box.
    Returns the clipped endpoints, or None if the segment misses the box.
    """
    dx = x1 - x0
    dy = y1 - y0
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x0 - xmin), (dx, xmax - x0), (-dy, y0 - ymin), (dy, ymax - y0)):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    return x0 + t0 * dx, y0 + t0 * dy, x0 + t1 * dx, y0 + t1 * dy


def draw_segment(img, p: Vec2, q: Vec2, color: Color, line_algorithm: str = LINE_BRESENHAM):
    """
    Draw a screen-space segment between two float points.

    Endpoints farther than one buffer size outside the buffer are clipped
    first so a vertex projected far off-screen does not make the stepper walk
    millions of invisible pixels. Segments inside that guard band are drawn
    unchanged.
    """
    W, H = img.shape[0], img.shape[1]
    x0, y0, x1, y1 = p.x, p.y, q.x, q.y

    gx0, gy0, gx1, gy1 = -W, -H, 2 * W, 2 * H
    inside = (gx0 <= x0 <= gx1 and gy0 <= y0 <= gy1 and
              gx0 <= x1 <= gx1 and gy0 <= y1 <= gy1)
    if not inside:
        clipped = clip_segment(x0, y0, x1, y1, gx0, gy0, gx1, gy1)
        if clipped is None:
            return
        x0, y0, x1, y1 = clipped

    r, g, b = color
    if line_algorithm == LINE_PARAMETRIC:
        draw_line_parametric(img, float(x0), float(y0), float(x1), float(y1),
                             r, g, b, PARAMETRIC_STEPS)
    else:
        draw_line(img, int(math.floor(x0)), int(math.floor(y0)),
                  int(math.floor(x1)), int(math.floor(y1)), r, g, b)


def draw_triangle(img, a: Vec2, b: Vec2, c: Vec2, color: Color,
                  filled: bool = False, line_algorithm: str = LINE_BRESENHAM):
    """
    Draw triangle (a, b, c) into img.

    Outline: edges a->b, b->c, c->a.
    Filled:  winding is canonicalized first, so either author order works.
    """
    if filled:
        a, b, c = canonical_winding(a, b, c)
        r, g, bl = color
        fill_triangle(img, float(a.x), float(a.y), float(b.x), float(b.y),
                      float(c.x), float(c.y), r, g, bl)
        return

    draw_segment(img, a, b, color, line_algorithm)
    draw_segment(img, b, c, color, line_algorithm)
    draw_segment(img, c, a, color, line_algorithm)
