"""
Platform constants.

Values come from the bundled ``data/platform.yaml``; derived values such as
the default webhook payload template are built once at import.
"""

from __future__ import annotations

import re
from typing import Dict, FrozenSet

from .data import read_yaml
from .payload_template import get_variable, stringify

_PLATFORM = read_yaml("platform.yaml")
_WEBHOOK = _PLATFORM["webhook"]


def _build_default_payload_template(default_payload: Dict[str, str], indent: int) -> str:
    """Renders the reference payload (key -> variable name) as template text."""
    reference = {key: get_variable(variable) for key, variable in default_payload.items()}
    return stringify(reference, None, indent)


WEBHOOK_ALLOWED_PAYLOAD_VARIABLES: FrozenSet[str] = frozenset(_WEBHOOK["allowed_payload_variables"])

WEBHOOK_DEFAULT_PAYLOAD_TEMPLATE: str = _build_default_payload_template(
    _WEBHOOK["default_payload"],
    _WEBHOOK.get("default_payload_indent", 4),
)

VERSION_INT_MAJOR_BASE: int = int(_PLATFORM["version_int"]["major_base"])
VERSION_INT_MINOR_BASE: int = int(_PLATFORM["version_int"]["minor_base"])

PROXY_URL_REGEX = re.compile(_PLATFORM["proxy"]["url_regex"])

SHORT_CRAWLER_ID_LENGTH: int = int(_PLATFORM["crawler"]["short_id_length"])

TRUSTED_LINK_HOST_REGEX = re.compile(_PLATFORM["markdown"]["trusted_link_host_regex"], re.IGNORECASE)


__all__ = [
    "WEBHOOK_ALLOWED_PAYLOAD_VARIABLES",
    "WEBHOOK_DEFAULT_PAYLOAD_TEMPLATE",
    "VERSION_INT_MAJOR_BASE",
    "VERSION_INT_MINOR_BASE",
    "PROXY_URL_REGEX",
    "SHORT_CRAWLER_ID_LENGTH",
    "TRUSTED_LINK_HOST_REGEX",
]
