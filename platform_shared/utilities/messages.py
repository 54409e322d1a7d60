"""
User-facing message catalog.

Messages are str.format() templates stored in the bundled
``data/messages.yaml`` and addressed by dotted keys.
"""

from __future__ import annotations

from typing import Any

from ..data import read_yaml
from ..payload_template import resolve_path


def m(key: str, **params: Any) -> str:
    """
    Returns the message for a dotted key with params substituted.

    Raises:
        KeyError: If the catalog has no such message
    """
    template = resolve_path(read_yaml("messages.yaml"), key)
    if not isinstance(template, str):
        raise KeyError(f"Unknown message: {key}")
    return template.format(**params)


__all__ = ["m"]
