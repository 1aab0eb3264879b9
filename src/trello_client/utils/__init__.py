"""Utility modules for Trello client."""

from .serialization import dump_body, serialized_size
from .sanitizer import (
    mask_sensitive_data,
    mask_url,
    mask_secret,
)

__all__ = [
    'dump_body',
    'serialized_size',
    'mask_sensitive_data',
    'mask_url',
    'mask_secret',
]
