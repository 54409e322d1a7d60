"""
Lexical types for the payload template engine.

Defines token types produced by the lexer for JSON text extended
with {{placeholder}} tokens.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


class TokenType(enum.Enum):
    """Token types of a payload template."""

    # Structural punctuation
    LBRACE = "LBRACE"                        # {
    RBRACE = "RBRACE"                        # }
    LBRACKET = "LBRACKET"                    # [
    RBRACKET = "RBRACKET"                    # ]
    COLON = "COLON"                          # :
    COMMA = "COMMA"                          # ,

    # Scalar literals
    STRING = "STRING"
    NUMBER = "NUMBER"
    TRUE = "TRUE"
    FALSE = "FALSE"
    NULL = "NULL"

    # {{path.to.value}} outside of string literals
    PLACEHOLDER = "PLACEHOLDER"

    EOF = "EOF"


# Tokens that may start a JSON value
VALUE_START_TOKENS = frozenset({
    TokenType.LBRACE,
    TokenType.LBRACKET,
    TokenType.STRING,
    TokenType.NUMBER,
    TokenType.TRUE,
    TokenType.FALSE,
    TokenType.NULL,
    TokenType.PLACEHOLDER,
})


@dataclass(frozen=True)
class Token:
    """
    Token with position information for precise error diagnostics.
    """
    type: TokenType
    value: str           # Raw source text of the token
    position: int        # Offset in the source text
    line: int            # Line number (starting from 1)
    column: int          # Column number (starting from 1)
    data: Any = None     # Decoded value: str, int/float, bool or PlaceholderPath

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


__all__ = ["TokenType", "Token", "VALUE_START_TOKENS"]
