"""
Configuration settings for the Resource Manager client.

Client-side domain layer for managing cloud projects and their IAM policies.
"""

import logging
import os
from functools import lru_cache

from pydantic import BaseModel, Field

APP_VERSION = "0.1.0"


class Settings(BaseModel):
    """
    Application settings for the Resource Manager client.
    """

    app_name: str = "Resource Manager Client"
    app_description: str = (
        "Client-side project handles and IAM policy values for a cloud resource manager"
    )
    api_version: str = APP_VERSION
    log_level: str = Field(
        default=os.getenv("LOG_LEVEL", "INFO"),
        description="Logging level for the application",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get the application settings.

    Uses lru_cache to avoid rebuilding the settings on every call.
    """
    return Settings()


def configure_logging():
    """Configure logging for the application."""
    settings = get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if settings.log_level.upper() not in logging.getLevelNamesMapping():
        logging.warning(
            "Unrecognized log level '%s'. Falling back to 'INFO'.",
            settings.log_level,
        )
