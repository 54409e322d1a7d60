"""
URL parsing and normalization.

parse_url() follows the "loose" grammar of the classic parseUri routine,
which tolerates scheme-less and otherwise sloppy URLs found in the wild.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Optional

URL_KEYS = (
    "source", "protocol", "authority", "userInfo", "user", "password", "host", "port",
    "relative", "path", "directory", "file", "query", "fragment",
)

_LOOSE_URL = re.compile(
    r"^(?:(?![^:@]+:[^:@/]*@)([^:/?#.]+):)?(?://)?"
    r"((?:(([^:@]*)(?::([^:@]*))?)?@)?([^:/?#]*)(?::(\d*))?)"
    r"(((/(?:[^?#](?![^?#/]*\.[^?#/.]+(?:[?#]|$)))*/?)?([^?#/]*))"
    r"(?:\?([^#]*))?(?:#(.*))?)"
)

_QUERY_PARAM = re.compile(r"(?:^|&)([^&=]*)=?([^&]*)")

_UTM_PARAM = re.compile(r"^utm_")


def _parse_params(text: str) -> Dict[str, str]:
    params: Dict[str, str] = {}
    for match in _QUERY_PARAM.finditer(text):
        if match.group(1):
            params[match.group(1)] = match.group(2)
    return params


def parse_url(text: Any) -> Dict[str, Any]:
    """
    Splits a URL into its parts.

    Returns a dict with the URL_KEYS (missing parts are ""), plus
    ``queryKey`` and ``fragmentKey`` dicts with query parameters and
    query-string-like fragment parameters (``#key1=val1&key2=val2``).
    Non-string input yields an empty dict.
    """
    if not isinstance(text, str):
        return {}

    match = _LOOSE_URL.match(text)
    uri: Dict[str, Any] = {key: match.group(i) or "" for i, key in enumerate(URL_KEYS)}

    uri["queryKey"] = _parse_params(uri["query"])
    # Many sites keep state in the fragment using the query string format
    uri["fragmentKey"] = _parse_params(uri["fragment"]) if uri["fragment"] else {}

    return uri


def normalize_url(url: Any, keep_fragment: bool = False) -> Optional[str]:
    """
    Normalizes a URL for comparison: lower-cases scheme and host, strips
    the trailing slash of the path, drops utm_* parameters and sorts the
    remaining ones. The fragment is kept only if keep_fragment is set.

    Returns None for values that are not absolute URLs.
    """
    if not isinstance(url, str) or not url:
        return None

    parts = parse_url(url.strip())
    if not parts["protocol"] or not parts["host"]:
        return None

    path = re.sub(r"/$", "", parts["path"])
    params = sorted(
        param for param in parts["query"].split("&") if not _UTM_PARAM.match(param)
    ) if parts["query"] else []

    result = f"{parts['protocol'].strip().lower()}://{parts['host'].strip().lower()}{path.strip()}"
    if params:
        result += "?" + "&".join(params).strip()
    if keep_fragment and parts["fragment"]:
        result += "#" + parts["fragment"].strip()
    return result


__all__ = ["URL_KEYS", "parse_url", "normalize_url"]
