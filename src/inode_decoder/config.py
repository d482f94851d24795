"""
Handles configuration for the inode_decoder library.

This module is responsible for:
- Configuring logging for applications that embed the decoder (the library itself
  never installs handlers on import).
- Providing decoder settings from environment variables.
"""

import logging
import os

import coloredlogs

# ── Logging Configuration ──────────────────────────────────────────────────
# This logger is for messages originating from the config.py module itself.
module_logger = logging.getLogger(__name__)


def configure_logger():
    """
    Installs colored console logging on the root logger for an application that
    embeds the decoder.

    This takes over root logging: any handlers already attached to the root logger
    are removed, the root level is set to DEBUG, and a single coloredlogs handler
    filtering at LOG_LEVEL (default INFO) is installed. Call it once at startup,
    before adding application-specific handlers.

    Returns:
        logging.Logger: The configured root logger.
    """
    root_logger = logging.getLogger()  # Get the root logger
    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Attempt to get the integer value for the log level string
    log_level_int = getattr(logging, log_level_str, None)
    if not isinstance(log_level_int, int):
        module_logger.warning(f"Invalid LOG_LEVEL '{log_level_str}'. Defaulting to INFO.")
        log_level_int = logging.INFO

    log_format = "%(asctime)s %(name)s[%(process)d] %(levelname)s %(message)s"

    root_logger.setLevel(logging.DEBUG)

    # Remove any existing handlers from the root logger to prevent duplication.
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    coloredlogs.install(
        level=log_level_int,
        fmt=log_format,
        logger=root_logger,
        reconfigure=True,
    )

    return root_logger


# ── Decoder Configuration ──────────────────────────────────────────────────
def get_decoder_config():
    """
    Retrieves decoder settings from environment variables.

    Returns:
        dict: A dictionary containing:
              - 'log_payloads': True if raw MSD payloads should be hex-dumped in
                debug logs (INODE_LOG_PAYLOADS=1).
    """
    return {
        "log_payloads": os.getenv("INODE_LOG_PAYLOADS", "0") == "1",
    }
