"""
Marker-aware JSON serializer.

Produces template text from a Python structure. Works like regular JSON
serialization except that VariableMarker values are written as bare
{{name}} tokens instead of encoded JSON values.
"""

from __future__ import annotations

import logging
import math
import re
import uuid
from collections.abc import Mapping
from typing import Any, Callable, Collection, List, Optional, Union

from .. import jsonic
from .variables import VariableMarker

logger = logging.getLogger(__name__)

Replacer = Union[Callable[[str, Any], Any], Collection[str], None]

# JSON.stringify never indents by more than 10 characters
_MAX_INDENT = 10


class _MarkerTable:
    """
    Stand-in strings for markers during one stringify() call.

    Each marker is encoded as a unique string first; the quoted
    stand-ins are swapped for {{name}} after JSON encoding.
    """

    def __init__(self) -> None:
        self._prefix = f"__payload_variable_{uuid.uuid4().hex}_"
        self._names: List[str] = []
        self._pattern = re.compile('"' + re.escape(self._prefix) + r'(\d+)__"')

    def stand_in(self, marker: VariableMarker) -> str:
        self._names.append(marker.name)
        return f"{self._prefix}{len(self._names) - 1}__"

    def substitute(self, text: str) -> str:
        if not self._names:
            return text
        return self._pattern.sub(lambda m: "{{" + self._names[int(m.group(1))] + "}}", text)


def stringify(value: Any, replacer: Replacer = None, indent: Optional[Union[int, str]] = None) -> str:
    """
    Serializes a value into payload template text.

    Args:
        value: JSON-compatible structure, may contain VariableMarker leaves
        replacer: Callable (key, value) -> value applied to every member
                  (root key is ""), or a collection of mapping keys to keep,
                  which also sets their output order
        indent: Number of spaces or indent string; None, 0 or "" for compact output

    Returns:
        Template text accepted by parse()

    Raises:
        TypeError: If the value contains something not serializable to JSON
    """
    if replacer is not None and not callable(replacer):
        replacer = tuple(dict.fromkeys(replacer))
    markers = _MarkerTable()
    prepared = _prepare("", value, replacer, markers)
    text = markers.substitute(jsonic.dumps(prepared, indent=_normalize_indent(indent)))
    logger.debug("Stringified template of length %d", len(text))
    return text


def _prepare(key: str, value: Any, replacer: Replacer, markers: _MarkerTable) -> Any:
    """Applies the replacer and swaps markers for stand-in strings, recursively."""
    if callable(replacer):
        value = replacer(key, value)

    if isinstance(value, VariableMarker):
        return markers.stand_in(value)

    if isinstance(value, Mapping):
        if replacer is None or callable(replacer):
            keys = list(value)
        else:
            # Key list decides both membership and order
            keys = [k for k in replacer if k in value]
        return {k: _prepare(str(k), value[k], replacer, markers) for k in keys}

    if isinstance(value, (list, tuple)):
        return [_prepare(str(i), item, replacer, markers) for i, item in enumerate(value)]

    if isinstance(value, float) and not math.isfinite(value):
        return None

    if value is None or isinstance(value, (str, int, float)):
        return value

    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _normalize_indent(indent: Optional[Union[int, str]]) -> Optional[Union[int, str]]:
    if isinstance(indent, bool):
        raise TypeError("indent must be an int or a str")
    if isinstance(indent, int):
        return min(indent, _MAX_INDENT) if indent > 0 else None
    if isinstance(indent, str):
        return indent[:_MAX_INDENT] or None
    return None


__all__ = ["stringify", "Replacer"]
