import argparse
import logging
import sys

from .config import ConfigError, load_config
from .logging_utils import setup_default_logging
from .projection import ProjectionMode
from .shapes import Shape4D

logger = logging.getLogger("hyper4d")


def build_parser():
    parser = argparse.ArgumentParser(prog="hyper4d", description="Interactive tesseract viewer")
    parser.add_argument("--config", help="JSON config file")
    parser.add_argument("--size", type=float, help="tesseract edge length")
    parser.add_argument("--perspective", action="store_true", help="start in perspective mode")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--export", metavar="PATH", help="write the tesseract as JSON and exit")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_default_logging(args.log_level)

    try:
        config = load_config(args.config).with_overrides(
            size=args.size,
            projection_mode=ProjectionMode.PERSPECTIVE if args.perspective else None,
        )
    except ConfigError as e:
        logger.error("%s", e)
        return 2

    shape = Shape4D.tesseract(config.size)
    if args.export:
        shape.save(args.export)
        logger.info("wrote %d vertices, %d edges to %s", len(shape.vertices), len(shape.edges), args.export)
        return 0

    from .viewer import Viewer
    Viewer(config, shape).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
