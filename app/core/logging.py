# app/core/logging.py
import logging
import logging.config

from app.core.config import settings

SERVICE_NAME = "auth-service"


def setup_logging() -> None:
    level = settings.LOG_LEVEL.upper()
    if settings.ENV == "test":
        level = "CRITICAL"

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": f"%(asctime)s %(levelname)s [{SERVICE_NAME}] %(name)s: %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "root": {"level": level, "handlers": ["console"]},
        "loggers": {
            # uvicorn access lines duplicate the instrumentator metrics
            "uvicorn.access": {"level": "WARNING"},
        },
    })
