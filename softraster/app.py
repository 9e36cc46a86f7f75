"""
Interactive pygame host.

Owns everything the rendering core does not: the window, input, frame
pacing and presentation. Each frame it turns input into a new Camera value
and model matrix, then hands render_frame() the pixel array of an
off-screen surface.
"""
import logging
import math
from dataclasses import replace
from typing import Optional

import pygame

from .config import (
    CLOCKWISE,
    COUNTER_CLOCKWISE,
    LINE_BRESENHAM,
    LINE_PARAMETRIC,
    PROJECTION_ORTHOGRAPHIC,
    PROJECTION_PERSPECTIVE,
    RENDER_MODE_NAMES,
    RENDER_POINTS,
    RENDER_SOLID,
    RENDER_WIREFRAME,
    RenderConfig,
)
from .pipeline import Camera, render_frame
from .raster import warmup
from .scene import cube_mesh, default_camera
from .transforms import rotate_x, rotate_y, scale
from .vecmath import Vec3

logger = logging.getLogger(__name__)

MODE_KEYS = {
    pygame.K_1: RENDER_POINTS,
    pygame.K_2: RENDER_WIREFRAME,
    pygame.K_3: RENDER_SOLID,
}


def run(width: int = 900, height: int = 900, config: Optional[RenderConfig] = None) -> None:
    """
    Main interactive loop:
      - handle input
      - rebuild camera / model state
      - render selected mode each frame
    """
    if config is None:
        config = RenderConfig()

    pygame.init()
    screen = pygame.display.set_mode((width, height))
    pygame.display.set_caption("softraster: modes (1..3), P/O projections")
    render_surface = pygame.Surface((width, height))

    clock = pygame.time.Clock()
    font = pygame.font.SysFont("consolas", 16)

    logger.info("Compiling raster kernels...")
    warmup()

    mesh = cube_mesh()
    camera = default_camera(width / height)
    logger.info("Window %dx%d, %d triangles", width, height, mesh.triangle_count)

    # Model orientation (radians) and scale
    yaw = math.radians(30.0)
    pitch = math.radians(20.0)
    obj_scale = 1.0

    # Camera heading (radians); the default camera looks down +Z
    cam_yaw = 0.0
    cam_pitch = 0.0

    dragging = False
    last_mouse = (0, 0)

    running = True
    while running:
        dt = clock.tick(60) / 1000.0

        # ====================================================
        #  Input handling
        # ====================================================
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False

                elif event.key in MODE_KEYS:
                    config = replace(config, render_mode=MODE_KEYS[event.key])
                    logger.info("Render mode: %s", RENDER_MODE_NAMES[config.render_mode])

                elif event.key == pygame.K_p:
                    camera = replace(camera, projection=PROJECTION_PERSPECTIVE)
                    logger.info("Projection: perspective")
                elif event.key == pygame.K_o:
                    camera = replace(camera, projection=PROJECTION_ORTHOGRAPHIC)
                    logger.info("Projection: orthographic")

                elif event.key == pygame.K_c:
                    config = replace(config, cull_backfaces=not config.cull_backfaces)
                    logger.info("Backface culling: %s", config.cull_backfaces)
                elif event.key == pygame.K_f:
                    front = CLOCKWISE if config.front_winding == COUNTER_CLOCKWISE else COUNTER_CLOCKWISE
                    config = replace(config, front_winding=front)
                    logger.info("Front winding: %s", front)
                elif event.key == pygame.K_z:
                    depth = None if config.depth_range is not None else (0.0, 1.0)
                    config = replace(config, depth_range=depth)
                    logger.info("Depth rejection: %s", depth)
                elif event.key == pygame.K_l:
                    algo = LINE_PARAMETRIC if config.line_algorithm == LINE_BRESENHAM else LINE_BRESENHAM
                    config = replace(config, line_algorithm=algo)
                    logger.info("Line algorithm: %s", algo)

            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1:
                    dragging = True
                    last_mouse = event.pos

            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button == 1:
                    dragging = False

            elif event.type == pygame.MOUSEMOTION and dragging:
                # Mouse drag rotates the model (yaw/pitch)
                mx, my = event.pos
                lx, ly = last_mouse
                dx, dy = mx - lx, my - ly
                last_mouse = (mx, my)
                yaw += dx * 0.01
                pitch += dy * 0.01
                pitch = max(-1.4, min(1.4, pitch))

        # Continuous key controls
        keys = pygame.key.get_pressed()

        # Camera movement (world axes)
        speed = 1.8 * dt
        move = Vec3(0.0, 0.0, 0.0)
        if keys[pygame.K_w]:
            move = move + Vec3(0.0, 0.0, speed)
        if keys[pygame.K_s]:
            move = move - Vec3(0.0, 0.0, speed)
        if keys[pygame.K_a]:
            move = move - Vec3(speed, 0.0, 0.0)
        if keys[pygame.K_d]:
            move = move + Vec3(speed, 0.0, 0.0)
        if keys[pygame.K_q]:
            move = move - Vec3(0.0, speed, 0.0)
        if keys[pygame.K_e]:
            move = move + Vec3(0.0, speed, 0.0)
        if not move.is_zero():
            camera = camera.moved(move)

        # Camera turn (arrow keys)
        turn = 1.2 * dt
        turned = False
        if keys[pygame.K_LEFT]:
            cam_yaw -= turn
            turned = True
        if keys[pygame.K_RIGHT]:
            cam_yaw += turn
            turned = True
        if keys[pygame.K_UP]:
            cam_pitch = min(1.4, cam_pitch + turn)
            turned = True
        if keys[pygame.K_DOWN]:
            cam_pitch = max(-1.4, cam_pitch - turn)
            turned = True
        if turned:
            camera = Camera.from_yaw_pitch(
                camera.position, cam_yaw, cam_pitch,
                fov=camera.fov, aspect=camera.aspect, near=camera.near, far=camera.far,
                projection=camera.projection, ortho_height=camera.ortho_height)

        # Model scale
        if keys[pygame.K_MINUS]:
            obj_scale = max(0.15, obj_scale - 0.9 * dt)
        if keys[pygame.K_EQUALS]:
            obj_scale = min(8.0, obj_scale + 0.9 * dt)

        # ====================================================
        #  Render
        # ====================================================
        model_m = rotate_y(yaw) @ rotate_x(pitch) @ scale(obj_scale, obj_scale, obj_scale)

        img = pygame.surfarray.pixels3d(render_surface)  # shape: (W,H,3)
        stats = render_frame(mesh, camera, width, height, img, config, model=model_m)
        # Delete img view to unlock surface for blitting
        del img

        # ====================================================
        #  Present frame
        # ====================================================
        screen.blit(render_surface, (0, 0))

        proj_name = "PERSPECTIVE (P)" if camera.projection == PROJECTION_PERSPECTIVE else "ORTHOGRAPHIC (O)"
        depth_name = "off" if config.depth_range is None else "%g..%g" % config.depth_range
        hud = [
            f"{proj_name} | {RENDER_MODE_NAMES[config.render_mode]} | Cull(C): {config.cull_backfaces} "
            f"| Front(F): {config.front_winding} | Depth(Z): {depth_name} | Line(L): {config.line_algorithm}",
            f"Drawn: {stats.drawn}/{stats.triangles} | Culled: {stats.culled} | Skipped: {stats.skipped} "
            f"| FPS: {clock.get_fps():.1f}",
            "P/O proj | 1..3 modes | LMB drag rotate | WASD/QE move | arrows turn | -/= scale | ESC exit",
        ]
        y = 10
        for line in hud:
            screen.blit(font.render(line, True, (235, 235, 235)), (10, y))
            y += 18

        pygame.display.flip()

    pygame.quit()
    logger.info("Window closed")
