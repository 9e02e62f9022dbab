import logging


def setup_default_logging(level: str = "INFO") -> None:
    """basicConfig for hosts; leaves an already configured root logger alone."""
    if logging.getLogger().handlers:
        return
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
