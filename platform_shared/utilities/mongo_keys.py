"""
Escaping of property names that MongoDB or BSON serialization reject.

MongoDB field names cannot contain dots or null characters and must not
start with a dollar sign. BSON additionally gives special meaning to the
names "toBSON" and "_bsontype". Such names are mapped to look-alike
full-width Unicode characters, which can be reverted later (except for
null characters, which are dropped).
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Any, Callable, Iterator

ESCAPE_DOT = "．"  # "."
ESCAPE_DOLLAR = "＄"  # "$"
ESCAPE_TO_BSON = "ｔｏＢＳＯＮ"  # "toBSON"
ESCAPE_BSON_TYPE = "＿ｂｓｏｎｔｙｐｅ"  # "_bsontype"
ESCAPE_NULL = ""  # "\0", not recoverable

# Reserved whole names and their escaped forms
_RESERVED_NAMES = MappingProxyType({
    "toBSON": ESCAPE_TO_BSON,
    "_bsontype": ESCAPE_BSON_TYPE,
})
_ESCAPED_NAMES = MappingProxyType({v: k for k, v in _RESERVED_NAMES.items()})

_NEEDS_ESCAPE = re.compile(r"(\.|^\$|^toBSON$|^_bsontype$|\x00)")
_IS_ESCAPED = re.compile(f"({ESCAPE_DOT}|^{ESCAPE_DOLLAR}|^{ESCAPE_TO_BSON}$|^{ESCAPE_BSON_TYPE}$)")

KeyTransform = Callable[[str], str]


def escape_property_name(name: str) -> str:
    """
    Transforms a property name invalid for MongoDB or BSON into a valid one.

    Reversible with unescape_property_name() except for null characters.
    """
    if not _NEEDS_ESCAPE.search(name):
        return name

    name = name.replace(".", ESCAPE_DOT)
    if name.startswith("$"):
        name = ESCAPE_DOLLAR + name[1:]
    name = _RESERVED_NAMES.get(name, name)
    return name.replace("\x00", ESCAPE_NULL)


def unescape_property_name(name: str) -> str:
    """Reverts escape_property_name()."""
    if not _IS_ESCAPED.search(name):
        return name

    name = name.replace(ESCAPE_DOT, ".")
    if name.startswith(ESCAPE_DOLLAR):
        name = "$" + name[1:]
    return _ESCAPED_NAMES.get(name, name)


def _transform_key(key: Any, transform: KeyTransform) -> Any:
    # Non-string keys (ints etc.) are left to the serializer
    return transform(key) if isinstance(key, str) else key


def _traverse(obj: Any, clone: bool, transform: KeyTransform) -> Any:
    """
    Transforms dict keys throughout a JSON-like structure.

    With clone=False dicts and lists are modified in place, otherwise a
    deep copy is built. The structure must not contain cycles.
    """
    if isinstance(obj, list):
        # List indexes never need escaping
        items = [_traverse(item, clone, transform) for item in obj]
        if clone:
            return items
        obj[:] = items
        return obj

    if isinstance(obj, dict):
        if clone:
            return {_transform_key(key, transform): _traverse(value, clone, transform) for key, value in obj.items()}
        for key, value in list(obj.items()):
            new_value = _traverse(value, clone, transform)
            new_key = _transform_key(key, transform)
            if new_key != key:
                del obj[key]
            obj[new_key] = new_value
        return obj

    # Scalars, datetimes and other leaves are left as they are
    return obj


def _iter_keys(obj: Any) -> Iterator[str]:
    if isinstance(obj, list):
        for item in obj:
            yield from _iter_keys(item)
    elif isinstance(obj, dict):
        for key, value in obj.items():
            if isinstance(key, str):
                yield key
            yield from _iter_keys(value)


def escape_for_bson(obj: Any, clone: bool = False) -> Any:
    """
    Makes an object storable to MongoDB / serializable to BSON by escaping
    prohibited property names (see escape_property_name()).

    Args:
        obj: JSON-like structure without cycles
        clone: Transform a deep copy instead of the object itself

    Returns:
        Transformed object
    """
    return _traverse(obj, clone, escape_property_name)


def unescape_from_bson(obj: Any, clone: bool = False) -> Any:
    """Reverts escape_for_bson()."""
    return _traverse(obj, clone, unescape_property_name)


def is_bad_for_mongo(obj: Any) -> bool:
    """Returns True if the object contains property names that cannot be stored to MongoDB."""
    return any(escape_property_name(key) != key for key in _iter_keys(obj))


__all__ = [
    "ESCAPE_DOT",
    "ESCAPE_DOLLAR",
    "ESCAPE_TO_BSON",
    "ESCAPE_BSON_TYPE",
    "escape_property_name",
    "unescape_property_name",
    "escape_for_bson",
    "unescape_from_bson",
    "is_bad_for_mongo",
]
