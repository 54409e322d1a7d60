"""
Variable markers for building payload templates programmatically.

A marker stands for a named variable inside an ordinary Python structure;
stringify() emits it as a bare {{name}} token:

    >>> stringify({"user": get_variable("userId")}, indent=0)
    '{"user":{{userId}}}'
"""

from __future__ import annotations

from dataclasses import dataclass

from .path import is_valid_path


@dataclass(frozen=True)
class VariableMarker:
    """Immutable sentinel for a named variable, compared by name."""
    name: str

    def __post_init__(self) -> None:
        if not is_valid_path(self.name):
            raise ValueError(f"Invalid payload template variable name: {self.name!r}")

    @property
    def token(self) -> str:
        """Placeholder text emitted into templates."""
        return "{{" + self.name + "}}"

    def __repr__(self) -> str:
        return f"VariableMarker({self.name!r})"


def get_variable(name: str) -> VariableMarker:
    """
    Returns a marker for the given variable name.

    Raises:
        ValueError: If name is not a valid placeholder path
    """
    return VariableMarker(name)


__all__ = ["VariableMarker", "get_variable"]
