"""Configuration and logging setup for the release catalog."""

import logging
import os
import sys


def setup_logging(level: str | None = None) -> None:
    """Set up logging to stdout.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to the
            LOG_LEVEL environment variable, then INFO.
    """
    log_level = level or os.getenv(ENV_LOG_LEVEL, "INFO")

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Set HTTP library logging to WARNING to reduce noise
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)


def get_env_var(name: str, default: str | None = None, required: bool = False) -> str:
    """Get environment variable with optional default and validation.

    Args:
        name: Environment variable name
        default: Default value if not set
        required: Whether the variable is required

    Returns:
        Environment variable value

    Raises:
        ValueError: If required variable is not set
    """
    value = os.getenv(name, default)

    if required and not value:
        raise ValueError(f"Required environment variable {name} is not set")

    return value or ""


# Environment variable names
ENV_RELEASES_URI = "RELEASES_URI"
ENV_RELEASES_CONFIG = "RELEASES_CONFIG"
ENV_LOG_LEVEL = "LOG_LEVEL"
