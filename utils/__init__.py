"""
utils/
------
Cross-cutting helpers.

    from utils.logger import init_logger, get_logger
"""

from utils.logger import init_logger, get_logger

__all__ = [
    "init_logger",
    "get_logger",
]
