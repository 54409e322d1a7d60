"""
Value tree nodes.

Immutable node classes representing a parsed payload template: one
variant per JSON kind plus PlaceholderNode for ``{{path}}`` tokens in
value position. ``ValueNode`` is the closed union of all variants.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from .path import PlaceholderPath


@dataclass(frozen=True)
class NullNode:
    position: int = 0


@dataclass(frozen=True)
class BoolNode:
    value: bool
    position: int = 0


@dataclass(frozen=True)
class NumberNode:
    value: Union[int, float]
    position: int = 0


@dataclass(frozen=True)
class StringNode:
    """
    String literal.

    Placeholders written inside the quotes are kept here as raw text.
    """
    value: str
    position: int = 0


@dataclass(frozen=True)
class ArrayNode:
    items: Tuple["ValueNode", ...] = ()
    position: int = 0


@dataclass(frozen=True)
class ObjectNode:
    """
    JSON object.

    Members are kept as (key, value) pairs in source order;
    duplicate keys are resolved when converting to a dict.
    """
    members: Tuple[Tuple[str, "ValueNode"], ...] = ()
    position: int = 0


@dataclass(frozen=True)
class PlaceholderNode:
    """{{path}} in value position, resolved against the context later."""
    path: PlaceholderPath
    position: int = 0

    @property
    def variable(self) -> str:
        """Root identifier checked against the allow-list."""
        return self.path.root


ValueNode = Union[NullNode, BoolNode, NumberNode, StringNode, ArrayNode, ObjectNode, PlaceholderNode]

__all__ = [
    "NullNode",
    "BoolNode",
    "NumberNode",
    "StringNode",
    "ArrayNode",
    "ObjectNode",
    "PlaceholderNode",
    "ValueNode",
]
