"""
Exceptions raised by the webhook payload template engine.

A template either parses completely or the call fails with one of the
errors below; no partial result is ever returned.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import SharedUserError


class PayloadTemplateError(SharedUserError):
    """Base class for payload template errors."""
    pass


@dataclass
class InvalidJsonError(PayloadTemplateError, ValueError):
    """Template is not well-formed JSON extended with {{placeholders}}."""
    message: str
    position: int
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        return self.message


@dataclass
class InvalidVariableError(PayloadTemplateError, ValueError):
    """Placeholder references a variable missing from the allow-list."""
    variable: str

    def __str__(self) -> str:
        return f"Invalid payload template variable: {self.variable}"


__all__ = [
    "PayloadTemplateError",
    "InvalidJsonError",
    "InvalidVariableError",
]
