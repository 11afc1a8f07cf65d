import logging
from logging.config import dictConfig

from app.core.config import settings


def setup_logging(level: str | None = None) -> None:
    """Configure root logging once for the API process."""
    level = (level or settings.LOG_LEVEL).upper()

    dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {
                "format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "plain",
            },
        },
        "root": {"level": level, "handlers": ["console"]},
        "loggers": {
            # uvicorn installs its own handlers
            "uvicorn.access": {"level": level, "propagate": False},
        },
    })

    logging.getLogger(__name__).debug("Logging configured at %s", level)
