"""Logging configuration for the application."""

import logging
import sys

from cms.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure application logging.

    Structured application events go through Logfire; this only sets up the
    stdlib root logger so third-party libraries (uvicorn, alembic, passlib)
    print consistently.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    # Configure root logger
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing configuration
    )

    # Set third-party loggers to WARNING to reduce noise
    logging.getLogger("passlib").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    # Our application loggers stay at the configured level
    logging.getLogger("cms").setLevel(level)

    logger = logging.getLogger(__name__)
    logger.info(
        f"Logging configured: environment={settings.environment}, level={logging.getLevelName(level)}"
    )

