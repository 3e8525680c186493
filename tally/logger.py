import logging
from .config import tally

LOGGER_NAME = "tally"

logging.basicConfig(
    level=tally.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)

def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Return the service logger"""
    return logging.getLogger(name)
