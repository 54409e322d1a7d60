"""
Placeholder path resolution against a run-time context.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union

from .path import PlaceholderPath, parse_path


class PathResolver:
    """
    Resolves dot/index paths against JSON-shaped context data.

    Resolution never fails: a missing key, an index out of range or a step
    into a value that is not a container yields None.
    """

    @staticmethod
    def resolve(context: Any, path: PlaceholderPath) -> Any:
        """
        Walks the context along the path.

        Args:
            context: Mapping of variable names to values
            path: Parsed placeholder path

        Returns:
            Value at the path or None
        """
        if not isinstance(context, Mapping):
            return None

        current = context.get(path.root)

        for segment in path.segments:
            if isinstance(segment, int):
                # Strings are not indexable here, only real sequences
                if isinstance(current, (list, tuple)) and segment < len(current):
                    current = current[segment]
                else:
                    return None
            elif isinstance(current, Mapping):
                current = current.get(segment)
            else:
                return None

        return current


def resolve_path(context: Any, path: Union[str, PlaceholderPath]) -> Any:
    """
    Convenience wrapper accepting a dotted string path.

    Raises:
        ValueError: If a string path is malformed
    """
    if isinstance(path, str):
        path = parse_path(path)
    return PathResolver.resolve(context, path)


__all__ = ["PathResolver", "resolve_path"]
