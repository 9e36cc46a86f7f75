"""Command-line interface."""
import argparse
from typing import List, Optional

from .config import RENDER_POINTS, RENDER_SOLID, RENDER_WIREFRAME, RenderConfig
from .logging_config import setup_logging

MODES = {
    "points": RENDER_POINTS,
    "wireframe": RENDER_WIREFRAME,
    "solid": RENDER_SOLID,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="softraster", description="Software 3D rasterizer demo")
    parser.add_argument("--width", type=int, default=900)
    parser.add_argument("--height", type=int, default=900)
    parser.add_argument("--mode", choices=sorted(MODES), default="solid")
    parser.add_argument("--no-cull", action="store_true", help="disable backface culling")
    parser.add_argument("--no-depth", action="store_true", help="disable depth-range rejection")
    parser.add_argument("--snapshot", metavar="PATH",
                        help="render one frame headless and save it as an image instead of opening a window")
    parser.add_argument("--yaw", type=float, default=30.0, help="snapshot model yaw, degrees")
    parser.add_argument("--pitch", type=float, default=20.0, help="snapshot model pitch, degrees")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    config = RenderConfig(
        render_mode=MODES[args.mode],
        cull_backfaces=not args.no_cull,
        depth_range=None if args.no_depth else (0.0, 1.0),
    )

    if args.snapshot:
        from .snapshot import render_snapshot
        render_snapshot(args.snapshot, args.width, args.height, config, yaw=args.yaw, pitch=args.pitch)
        return

    # pygame is only needed for the interactive window
    from .app import run
    run(args.width, args.height, config)


if __name__ == "__main__":
    main()
