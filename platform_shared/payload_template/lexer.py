"""
Lexical analyzer for payload templates.

Splits template text into JSON tokens plus PLACEHOLDER tokens. String
literals are scanned as a whole, so ``{{...}}`` inside quotes never
becomes a placeholder and stays part of the string value.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterator, List, Tuple

from .errors import InvalidJsonError
from .path import PATH_PATTERN, parse_path
from .tokens import Token, TokenType

logger = logging.getLogger(__name__)


class TemplateLexer:
    """
    Payload template lexer.

    Tracks two scanning modes on top of the default one:
    - inside a string literal "..."
    - inside a placeholder {{...}}
    """

    _PATTERNS = {
        TokenType.NUMBER: re.compile(r'-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?'),
        TokenType.PLACEHOLDER: re.compile(r'\{\{(' + PATH_PATTERN + r')\}\}'),
    }

    _WHITESPACE = re.compile(r'[ \t\r\n]+')

    # Run of characters that need no special handling inside a string
    _STRING_CHUNK = re.compile(r'[^"\\\x00-\x1f]+')

    _HEX4 = re.compile(r'[0-9a-fA-F]{4}')

    _PUNCTUATION = {
        '{': TokenType.LBRACE,
        '}': TokenType.RBRACE,
        '[': TokenType.LBRACKET,
        ']': TokenType.RBRACKET,
        ':': TokenType.COLON,
        ',': TokenType.COMMA,
    }

    _KEYWORDS = {
        'true': (TokenType.TRUE, True),
        'false': (TokenType.FALSE, False),
        'null': (TokenType.NULL, None),
    }

    _ESCAPES = {
        '"': '"',
        '\\': '\\',
        '/': '/',
        'b': '\b',
        'f': '\f',
        'n': '\n',
        'r': '\r',
        't': '\t',
    }

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.line = 1
        self.column = 1
        self.length = len(text)

    def tokenize(self) -> List[Token]:
        """
        Tokenizes the whole source text.

        Raises:
            InvalidJsonError: On any lexical error
        """
        tokens = list(self.iter_tokens())
        logger.debug("Tokenized template of length %d into %d tokens", self.length, len(tokens))
        return tokens

    def iter_tokens(self) -> Iterator[Token]:
        """
        Lazily yields tokens up to and including EOF.

        Errors surface only when the offending token is reached.
        """
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def next_token(self) -> Token:
        """
        Extracts the next token from the input stream.
        """
        self._skip_whitespace()

        if self.position >= self.length:
            return Token(TokenType.EOF, "", self.position, self.line, self.column)

        char = self.text[self.position]

        if char == '"':
            return self._read_string()

        # {{ outside of a string always starts a placeholder
        if self.text.startswith('{{', self.position):
            return self._read_placeholder()

        token_type = self._PUNCTUATION.get(char)
        if token_type is not None:
            return self._make_token(token_type, char)

        if char == '-' or char.isdigit():
            return self._read_number()

        for keyword, (keyword_type, data) in self._KEYWORDS.items():
            if self.text.startswith(keyword, self.position):
                return self._make_token(keyword_type, keyword, data)

        raise self.error_at(self.position)

    def error_at(self, position: int) -> InvalidJsonError:
        """Builds an "unexpected token" error for the character at the given offset."""
        if position >= self.length:
            return self._error("Unexpected end of JSON input", self.length)
        char = self.text[position]
        return self._error(f"Unexpected token {char} in JSON at position {position}", position)

    def _make_token(self, token_type: TokenType, value: str, data: Any = None) -> Token:
        token = Token(token_type, value, self.position, self.line, self.column, data)
        self._advance(len(value))
        return token

    def _read_placeholder(self) -> Token:
        match = self._PATTERNS[TokenType.PLACEHOLDER].match(self.text, self.position)
        if not match:
            raise self._error(f"Invalid placeholder in JSON at position {self.position}", self.position)
        return self._make_token(TokenType.PLACEHOLDER, match.group(0), parse_path(match.group(1)))

    def _read_number(self) -> Token:
        match = self._PATTERNS[TokenType.NUMBER].match(self.text, self.position)
        if not match:
            # Lone minus or a minus followed by a non-digit
            raise self.error_at(self.position + 1 if self.text[self.position] == '-' else self.position)

        raw = match.group(0)
        if any(c in raw for c in '.eE'):
            data = float(raw)
        else:
            try:
                data = int(raw)
            except ValueError:
                # Past the int conversion digit limit, read as a double
                data = float(raw)
        return self._make_token(TokenType.NUMBER, raw, data)

    def _read_string(self) -> Token:
        start_pos = self.position
        start_line = self.line
        start_column = self.column

        # Opening quote
        pos = self.position + 1
        chunks: List[str] = []

        while True:
            if pos >= self.length:
                raise self._error(f"Unterminated string in JSON at position {self.length}", self.length)

            char = self.text[pos]

            if char == '"':
                pos += 1
                break

            if char == '\\':
                value, pos = self._read_escape(pos)
                chunks.append(value)
                continue

            if char < ' ':
                raise self._error(
                    f"Bad control character in string literal in JSON at position {pos}", pos
                )

            chunk = self._STRING_CHUNK.match(self.text, pos)
            chunks.append(chunk.group(0))
            pos = chunk.end()

        raw = self.text[start_pos:pos]
        self._advance(len(raw))
        return Token(TokenType.STRING, raw, start_pos, start_line, start_column, "".join(chunks))

    def _read_escape(self, pos: int) -> Tuple[str, int]:
        """
        Decodes one escape sequence starting at the backslash.

        Returns:
            Tuple (decoded text, position after the sequence)
        """
        if pos + 1 >= self.length:
            raise self._error(f"Unterminated string in JSON at position {self.length}", self.length)

        esc = self.text[pos + 1]
        if esc in self._ESCAPES:
            return self._ESCAPES[esc], pos + 2

        if esc != 'u':
            raise self._error(f"Bad escaped character in JSON at position {pos + 1}", pos + 1)

        code = self._read_hex4(pos + 2)
        end = pos + 6

        # Combine UTF-16 surrogate pairs into one code point
        if 0xD800 <= code <= 0xDBFF and self.text.startswith('\\u', end):
            if self._HEX4.fullmatch(self.text, end + 2, end + 6):
                low = int(self.text[end + 2:end + 6], 16)
                if 0xDC00 <= low <= 0xDFFF:
                    code = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
                    end += 6

        return chr(code), end

    def _read_hex4(self, pos: int) -> int:
        if not self._HEX4.fullmatch(self.text, pos, pos + 4):
            raise self._error(f"Bad Unicode escape in JSON at position {pos}", pos)
        return int(self.text[pos:pos + 4], 16)

    def _skip_whitespace(self) -> None:
        match = self._WHITESPACE.match(self.text, self.position)
        if match:
            self._advance(len(match.group(0)))

    def _error(self, message: str, position: int) -> InvalidJsonError:
        line, column = self._line_column(position)
        return InvalidJsonError(message, position, line, column)

    def _line_column(self, position: int) -> Tuple[int, int]:
        line = self.text.count('\n', 0, position) + 1
        column = position - (self.text.rfind('\n', 0, position) + 1) + 1
        return line, column

    def _advance(self, count: int) -> None:
        """
        Moves the position forward by the given number of characters,
        updating line and column numbers.
        """
        for _ in range(count):
            if self.position < self.length:
                if self.text[self.position] == '\n':
                    self.line += 1
                    self.column = 1
                else:
                    self.column += 1
                self.position += 1


def tokenize_template(text: str) -> List[Token]:
    """
    Convenience function for tokenizing a template.

    Args:
        text: Template source text

    Returns:
        List of tokens ending with EOF

    Raises:
        InvalidJsonError: On lexical error
    """
    return TemplateLexer(text).tokenize()


__all__ = ["TemplateLexer", "tokenize_template"]
