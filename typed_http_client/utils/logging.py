"""Centralized logging configuration for the typed HTTP client."""

import logging
import sys

# Package-wide logger name
PACKAGE_LOGGER_NAME = "typed_http_client"

# Track if we've already configured
_configured = False


def get_logger(module_name: str) -> logging.Logger:
    """Get a logger for the specified module.

    Automatically configures basic logging on first use if no handlers exist.

    Args:
        module_name: Name of the module requesting the logger.

    Returns:
        logging.Logger: Configured logger for the module.
    """
    global _configured

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)

    if not _configured and not package_logger.handlers:
        from typed_http_client.config import LOG_LEVEL

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s [%(name)s] %(message)s"))
        package_logger.addHandler(handler)
        package_logger.setLevel(LOG_LEVEL)
        package_logger.propagate = False
        _configured = True

    return logging.getLogger(f"{PACKAGE_LOGGER_NAME}.{module_name}")
