"""
Webhook payload template engine.

Entry point tying the lexer, parser, resolver and serializer together:

    parse(template, allowed_variables=None, context=None) -> plain value
    stringify(value, replacer=None, indent=None)          -> template text
    get_variable(name)                                     -> VariableMarker
"""

from __future__ import annotations

import logging
from typing import Any, Collection, Iterator, List, Optional, Tuple, Union

from .errors import InvalidVariableError
from .nodes import (
    ArrayNode, BoolNode, NullNode, NumberNode, ObjectNode, PlaceholderNode,
    StringNode, ValueNode,
)
from .parser import parse_template
from .resolver import PathResolver
from .serializer import Replacer, stringify
from .variables import VariableMarker, get_variable

logger = logging.getLogger(__name__)


def parse(
    template: str,
    allowed_variables: Optional[Collection[str]] = None,
    context: Optional[Any] = None,
) -> Any:
    """
    Parses a payload template and fills its placeholders.

    Args:
        template: JSON text with {{path}} placeholders in value positions
        allowed_variables: Permitted root variable names (None = any)
        context: Data placeholders are resolved against (None = all placeholders become None)

    Returns:
        Plain value built from dicts, lists, str, int, float, bool and None

    Raises:
        InvalidJsonError: If the template is not well-formed
        InvalidVariableError: If a placeholder uses a variable outside the allow-list
    """
    tree = parse_template(template)

    if allowed_variables is not None:
        for placeholder in iter_placeholders(tree):
            if placeholder.variable not in allowed_variables:
                raise InvalidVariableError(placeholder.variable)
        logger.debug("All placeholders are within %d allowed variables", len(allowed_variables))

    return _to_plain(tree, context)


def iter_placeholders(node: ValueNode) -> Iterator[PlaceholderNode]:
    """Yields placeholder nodes in document order."""
    pending: List[ValueNode] = [node]
    while pending:
        current = pending.pop()
        if isinstance(current, PlaceholderNode):
            yield current
        elif isinstance(current, ArrayNode):
            pending.extend(reversed(current.items))
        elif isinstance(current, ObjectNode):
            pending.extend(value for _, value in reversed(current.members))


def _to_plain(node: ValueNode, context: Optional[Any]) -> Any:
    """
    Converts the value tree to plain Python data, resolving placeholders.

    Containers are created first and filled as their children are
    converted, so deep nesting needs no recursion.
    """
    root: List[Any] = [None]
    pending: List[Tuple[ValueNode, Any, Any]] = [(node, root, 0)]

    while pending:
        current, target, slot = pending.pop()

        if isinstance(current, ObjectNode):
            # Later duplicates win, first occurrence keeps its position
            members = dict(current.members)
            value: Any = dict.fromkeys(members)
            pending.extend((child, value, key) for key, child in members.items())
        elif isinstance(current, ArrayNode):
            value = [None] * len(current.items)
            pending.extend((child, value, index) for index, child in enumerate(current.items))
        elif isinstance(current, PlaceholderNode):
            value = None if context is None else PathResolver.resolve(context, current.path)
        elif isinstance(current, (StringNode, NumberNode, BoolNode)):
            value = current.value
        elif isinstance(current, NullNode):
            value = None
        else:
            raise TypeError(f"Unknown value node: {type(current).__name__}")

        target[slot] = value

    return root[0]


class WebhookPayloadTemplate:
    """Class facade over the module functions."""

    @staticmethod
    def parse(
        template: str,
        allowed_variables: Optional[Collection[str]] = None,
        context: Optional[Any] = None,
    ) -> Any:
        return parse(template, allowed_variables, context)

    @staticmethod
    def stringify(value: Any, replacer: Replacer = None, indent: Optional[Union[int, str]] = None) -> str:
        return stringify(value, replacer, indent)

    @staticmethod
    def get_variable(name: str) -> VariableMarker:
        return get_variable(name)


__all__ = ["parse", "stringify", "get_variable", "iter_placeholders", "WebhookPayloadTemplate"]
