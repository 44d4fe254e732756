"""Application logging setup for the API process."""

import logging

from core.config import LOG_LEVEL

_configured = False


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once with a console handler."""
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root = logging.getLogger()
    root.setLevel(getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO))
    root.addHandler(handler)

    _configured = True
    logging.getLogger(__name__).debug("Logging configured at %s", logging.getLevelName(root.level))
