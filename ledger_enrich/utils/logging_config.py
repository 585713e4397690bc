import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'


def setup_logging(level=logging.INFO):
    """
    Sets up centralized logging configuration for the application.

    Configures the root logger with a StreamHandler that outputs to stderr.
    Calling it again only adjusts the level.

    Args:
        level: The minimum logging level, as a number or a name such as "DEBUG".
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Prevent adding duplicate handlers if setup_logging is called multiple times
    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)

    # Keep urllib3 connection chatter out of INFO output
    logging.getLogger('urllib3').setLevel(max(level, logging.WARNING))
