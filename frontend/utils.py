"""
Shared client utilities
"""
import logging
import sys

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stderr),
    ]
)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a client module"""
    return logging.getLogger(f"dawn2dusk.frontend.{name}")
