"""Headless rendering of the demo scene to an image file."""
import logging
from typing import Optional

import numpy as np
from PIL import Image

from .config import RenderConfig
from .pipeline import FrameStats, render_frame
from .scene import cube_mesh, default_camera
from .transforms import rotation_about_axis
from .vecmath import Vec3

logger = logging.getLogger(__name__)


def frame_to_image(frame_buffer: np.ndarray) -> Image.Image:
    """(W, H, 3) [x, y] buffer -> PIL image (PIL wants rows first)."""
    return Image.fromarray(np.ascontiguousarray(frame_buffer.transpose(1, 0, 2)))


def render_snapshot(path: str, width: int = 800, height: int = 600,
                    config: Optional[RenderConfig] = None,
                    yaw: float = 30.0, pitch: float = 20.0) -> FrameStats:
    """
    Render the demo cube once and save it to path (format from the extension).

    yaw / pitch rotate the model, in degrees.
    """
    frame = np.zeros((width, height, 3), dtype=np.uint8)
    camera = default_camera(width / height)
    model = (rotation_about_axis(Vec3(0.0, 1.0, 0.0), yaw) @
             rotation_about_axis(Vec3(1.0, 0.0, 0.0), pitch))

    stats = render_frame(cube_mesh(), camera, width, height, frame, config, model=model)
    frame_to_image(frame).save(path)
    logger.info("Saved %dx%d snapshot to %s (%d/%d triangles drawn)",
                width, height, path, stats.drawn, stats.triangles)
    return stats
