"""Persistence backends for the catalog and invoice stores."""

from .base import Storage
from .memory import MemoryStorage
from .sql import SqlStorage

__all__ = ['Storage', 'MemoryStorage', 'SqlStorage']
