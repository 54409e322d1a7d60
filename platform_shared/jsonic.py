from __future__ import annotations

import json
from typing import Any, Optional, Union


def dumps(obj: Any, indent: Optional[Union[int, str]] = None) -> str:
    """
    JSON dumper shared by the library.
    - ensure_ascii=False, key order preserved;
    - compact separators without indent, ": " after keys with indent;
    - NaN/Infinity are rejected (not valid JSON).
    """
    if indent is None:
        return json.dumps(obj, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
    return json.dumps(obj, ensure_ascii=False, allow_nan=False, indent=indent, separators=(",", ": "))


__all__ = ["dumps"]
