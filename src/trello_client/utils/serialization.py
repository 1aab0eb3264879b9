"""
Body serialization helpers.

Used to render decoded response bodies into error messages and logs the
same way regardless of whether the body was parsed as JSON or kept as text.
"""

import json
from typing import Any


def dump_body(body: Any) -> str:
    """
    Serialize a decoded body to a JSON string.

    Text bodies are serialized as JSON strings (quoted), structured bodies
    as compact JSON. Values json cannot handle fall back to ``str()``.

    Example:
        >>> dump_body({"message": "invalid id"})
        '{"message": "invalid id"}'
        >>> dump_body("invalid id")
        '"invalid id"'
    """
    try:
        return json.dumps(body, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return str(body)


def serialized_size(body: Any) -> int:
    """Length in characters of ``dump_body(body)``."""
    return len(dump_body(body))
