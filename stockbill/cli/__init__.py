"""
CLI module for the stockbill package.
Provides configuration and logging setup; commands live in ``main``.
"""

from .config import Config
from .logging import setup_logging, get_logger

__all__ = ['Config', 'setup_logging', 'get_logger']
