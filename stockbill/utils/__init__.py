"""Utility functions and helpers."""

from .formatting import format_indian_rupees, to_decimal
from .uuid import generate_uuid, utcnow

__all__ = [
    'format_indian_rupees',
    'to_decimal',
    'generate_uuid',
    'utcnow'
]
