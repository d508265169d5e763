import logging
from typing import Union


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure basic logging format."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
