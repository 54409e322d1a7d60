"""
Payload template parser.

Turns the token sequence into a value tree. Grammar is plain JSON where
a ``{{path}}`` placeholder is accepted anywhere a value is allowed:

    value   := object | array | STRING | NUMBER | true | false | null | PLACEHOLDER
    object  := '{' [ STRING ':' value ( ',' STRING ':' value )* ] '}'
    array   := '[' [ value ( ',' value )* ] ']'
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, List, Optional

from .errors import InvalidJsonError
from .lexer import TemplateLexer
from .nodes import (
    ArrayNode, BoolNode, NullNode, NumberNode, ObjectNode, PlaceholderNode,
    StringNode, ValueNode,
)
from .tokens import VALUE_START_TOKENS, Token, TokenType

logger = logging.getLogger(__name__)


@dataclass
class _Container:
    """Object or array still being filled while its members are parsed."""
    start: Token
    closing: TokenType
    items: List[Any] = field(default_factory=list)
    key: Optional[str] = None

    def add(self, node: ValueNode) -> None:
        self.items.append(node if self.key is None else (self.key, node))

    def build(self) -> ValueNode:
        if self.closing == TokenType.RBRACE:
            return ObjectNode(tuple(self.items), self.start.position)
        return ArrayNode(tuple(self.items), self.start.position)


class TemplateParser:
    """
    Parser for payload templates.

    Containers are tracked on an explicit stack, so nesting depth is not
    limited by the interpreter recursion limit. Any grammar violation
    raises InvalidJsonError; no partial tree is ever returned.
    """

    def __init__(self, tokens: Iterable[Token]):
        # Tokens are pulled one at a time so that the first error in
        # reading order is the one reported
        self._tokens: Iterator[Token] = iter(tokens)
        self._lookahead: Optional[Token] = None
        self._last_position = 0

    def parse(self) -> ValueNode:
        """
        Parses exactly one top-level value followed by end of input.

        Returns:
            Root node of the value tree

        Raises:
            InvalidJsonError: On syntax error
        """
        node = self._parse_value()

        trailing = self._current_token()
        if trailing.type != TokenType.EOF:
            raise self._unexpected(trailing)

        return node

    def _parse_value(self) -> ValueNode:
        stack: List[_Container] = []

        while True:
            node = self._begin_value(stack)
            if node is None:
                # Opened a non-empty container, its first value comes next
                continue

            # Attach the finished value, closing every container it completes
            while stack:
                container = stack[-1]
                container.add(node)

                separator = self._advance()
                if separator.type == container.closing:
                    stack.pop()
                    node = container.build()
                    continue
                if separator.type != TokenType.COMMA:
                    raise self._unexpected(separator)

                if container.closing == TokenType.RBRACE:
                    container.key = self._parse_key()
                break
            else:
                return node

    def _begin_value(self, stack: List[_Container]) -> Optional[ValueNode]:
        """
        Reads the start of the next value.

        Returns:
            Complete node for scalars, placeholders and empty containers;
            None after pushing a non-empty container onto the stack
        """
        current = self._current_token()

        if current.type == TokenType.LBRACE:
            self._advance()
            if self._current_token().type == TokenType.RBRACE:
                self._advance()
                return ObjectNode((), current.position)
            container = _Container(current, TokenType.RBRACE)
            # Keys are string literals only, placeholders are not allowed here
            container.key = self._parse_key()
            stack.append(container)
            return None

        if current.type == TokenType.LBRACKET:
            self._advance()
            if self._current_token().type == TokenType.RBRACKET:
                self._advance()
                return ArrayNode((), current.position)
            stack.append(_Container(current, TokenType.RBRACKET))
            return None

        return self._parse_scalar()

    def _parse_key(self) -> str:
        key = self._consume(TokenType.STRING)
        self._consume(TokenType.COLON)
        return key.data

    def _parse_scalar(self) -> ValueNode:
        current = self._current_token()

        if current.type not in VALUE_START_TOKENS:
            raise self._unexpected(current)

        self._advance()

        if current.type == TokenType.STRING:
            return StringNode(current.data, current.position)
        if current.type == TokenType.NUMBER:
            return NumberNode(current.data, current.position)
        if current.type in (TokenType.TRUE, TokenType.FALSE):
            return BoolNode(current.data, current.position)
        if current.type == TokenType.NULL:
            return NullNode(current.position)
        if current.type == TokenType.PLACEHOLDER:
            return PlaceholderNode(current.data, current.position)

        raise self._unexpected(current)


    # ---------------------------- Token navigation ---------------------------- #

    def _current_token(self) -> Token:
        if self._lookahead is None:
            token = next(self._tokens, None)
            if token is None:
                # Exhausted stream behaves as a sticky EOF
                return Token(TokenType.EOF, "", self._last_position, 0, 0)
            self._lookahead = token
            self._last_position = token.position
        return self._lookahead

    def _advance(self) -> Token:
        """Moves to the next token and returns the previous one."""
        current = self._current_token()
        if current.type != TokenType.EOF:
            self._lookahead = None
        return current

    def _consume(self, expected_type: TokenType) -> Token:
        current = self._current_token()
        if current.type != expected_type:
            raise self._unexpected(current)
        return self._advance()

    @staticmethod
    def _unexpected(token: Token) -> InvalidJsonError:
        """Builds an error in the wording of JSON.parse diagnostics."""
        if token.type == TokenType.EOF:
            message = "Unexpected end of JSON input"
        elif token.type == TokenType.STRING:
            message = f"Unexpected string in JSON at position {token.position}"
        elif token.type == TokenType.NUMBER:
            message = f"Unexpected number in JSON at position {token.position}"
        else:
            message = f"Unexpected token {token.value[0]} in JSON at position {token.position}"
        return InvalidJsonError(message, token.position, token.line, token.column)


def parse_template(text: str) -> ValueNode:
    """
    Lexes and parses template text into a value tree.

    Raises:
        InvalidJsonError: On lexical or syntax error
    """
    tree = TemplateParser(TemplateLexer(text).iter_tokens()).parse()
    logger.debug("Parsed template into %s", type(tree).__name__)
    return tree


__all__ = ["TemplateParser", "parse_template"]
