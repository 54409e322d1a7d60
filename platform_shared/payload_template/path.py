"""
Placeholder paths.

A path is a root identifier followed by zero or more segments separated
by dots; each segment is either an identifier (mapping key) or a
non-negative integer index (sequence position):

    resource
    resource.defaultDatasetId
    eventData.messages.0
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple, Union

IDENTIFIER_PATTERN = r"[A-Za-z_$][A-Za-z0-9_$]*"
INDEX_PATTERN = r"[0-9]+"
PATH_PATTERN = rf"{IDENTIFIER_PATTERN}(?:\.(?:{IDENTIFIER_PATTERN}|{INDEX_PATTERN}))*"

_PATH_RE = re.compile(PATH_PATTERN)

PathSegment = Union[str, int]


@dataclass(frozen=True)
class PlaceholderPath:
    """Parsed dot/index path of a placeholder."""
    root: str
    segments: Tuple[PathSegment, ...] = ()

    @property
    def text(self) -> str:
        """Canonical textual form, as written between {{ and }}."""
        return ".".join([self.root, *(str(s) for s in self.segments)])

    def __str__(self) -> str:
        return self.text


def is_valid_path(text: str) -> bool:
    return isinstance(text, str) and _PATH_RE.fullmatch(text) is not None


def parse_path(text: str) -> PlaceholderPath:
    """
    Parses a dotted path like ``resource.first.0``.

    Raises:
        ValueError: If the text is not a valid placeholder path
    """
    if not is_valid_path(text):
        raise ValueError(f"Invalid placeholder path: {text!r}")

    root, *rest = text.split(".")
    segments = tuple(int(part) if part.isdigit() else part for part in rest)
    return PlaceholderPath(root=root, segments=segments)


__all__ = [
    "PATH_PATTERN",
    "PathSegment",
    "PlaceholderPath",
    "is_valid_path",
    "parse_path",
]
