"""
String, date and number formatting helpers.
"""

from __future__ import annotations

import re
import unicodedata
from datetime import datetime
from typing import Any, Optional

from ..consts import SHORT_CRAWLER_ID_LENGTH, VERSION_INT_MAJOR_BASE, VERSION_INT_MINOR_BASE

DEFAULT_TRUNCATE_SUFFIX = "...[truncated]"

_ORDINAL_SUFFIXES = ("th", "st", "nd", "rd")

_SLUG_APOSTROPHES = re.compile(r"['\u2019]")
_SLUG_SEPARATORS = re.compile(r"[^a-z0-9]+")


def date_to_string(value: Any, middle_t: bool = False) -> str:
    """
    Formats a datetime as ``YYYY-MM-DD HH:MM:SS.mmm``.

    Args:
        value: Datetime to format; anything else yields ""
        middle_t: Separate date and time with "T" instead of a space
    """
    if not isinstance(value, datetime):
        return ""
    separator = "T" if middle_t else " "
    return value.strftime(f"%Y-%m-%d{separator}%H:%M:%S.") + f"{value.microsecond // 1000:03d}"


def truncate(text: Any, max_length: int, suffix: Optional[str] = None) -> Any:
    """
    Ensures a string is not longer than max_length, cutting it and appending suffix if it is.

    Non-string values are returned unchanged.

    Raises:
        ValueError: If suffix itself is longer than max_length
    """
    if not isinstance(suffix, str):
        suffix = DEFAULT_TRUNCATE_SUFFIX
    if len(suffix) > max_length:
        raise ValueError("suffix string cannot be longer than max_length")
    if isinstance(text, str) and len(text) > max_length:
        text = text[:max_length - len(suffix)] + suffix
    return text


def get_ordinal_suffix(num: int) -> str:
    """Returns the English ordinal suffix of a number ("st" for 1, "th" for 11, ...)."""
    v = num % 100
    if v >= 20:
        index = (v - 20) % 10
        return _ORDINAL_SUFFIXES[index] if index < len(_ORDINAL_SUFFIXES) else "th"
    return _ORDINAL_SUFFIXES[v] if v < len(_ORDINAL_SUFFIXES) else "th"


def build_or_version_number_int_to_str(value: Any) -> Optional[str]:
    """
    Converts an integer-encoded version back to 'MAJOR.MINOR' or 'MAJOR.MINOR.BUILD'.

    The build part is only present when non-zero. Returns None for
    anything that is not a non-negative integer.
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return None

    major, remainder = divmod(value, VERSION_INT_MAJOR_BASE)
    minor, build = divmod(remainder, VERSION_INT_MINOR_BASE)

    result = f"{major}.{minor}"
    if build > 0:
        result += f".{build}"
    return result


def slugify(text: str, separator: str = "-") -> str:
    """
    Converts text to a lower-case ASCII slug: "Héllo, World's" -> "hello-worlds".
    """
    text = unicodedata.normalize("NFKD", text)
    text = "".join(c for c in text if unicodedata.category(c) != "Mn")
    text = _SLUG_APOSTROPHES.sub("", text.lower())
    return _SLUG_SEPARATORS.sub(separator, text).strip(separator)


def get_public_crawler_nice_path(crawler_id: str, custom_id: str, domain: Optional[str] = None) -> str:
    """
    Creates a "nice path" for a public crawler from the start of its ID,
    the word "api" and a slug of either its public domain or custom ID.
    """
    parts = [crawler_id[:SHORT_CRAWLER_ID_LENGTH], "api", slugify(domain or custom_id)]
    return "-".join(parts)


__all__ = [
    "DEFAULT_TRUNCATE_SUFFIX",
    "date_to_string",
    "truncate",
    "get_ordinal_suffix",
    "build_or_version_number_int_to_str",
    "slugify",
    "get_public_crawler_nice_path",
]
