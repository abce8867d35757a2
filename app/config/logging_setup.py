"""Process-wide logging setup for the webhook service."""

import logging
import sys

from .settings import AppSettings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s | %(message)s"


def config_configure_logging(settings: AppSettings) -> None:
    """Install one stdout handler on the root logger at the configured level.

    Args:
        settings: Validated runtime settings carrying `log_level`.

    Returns:
        None: Logging configuration is applied as side effect.
    """

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(settings.log_level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(console_handler)
