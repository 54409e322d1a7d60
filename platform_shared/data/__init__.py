"""
Bundled data files.

Static platform data (webhook variables, validation messages, ...) lives
in YAML files next to this module and is read once per process.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from importlib import resources
from typing import Any, Dict

from ruamel.yaml import YAML

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")


@lru_cache(maxsize=16)
def read_yaml(filename: str) -> Dict[str, Any]:
    """
    Reads a bundled YAML file that must contain a mapping.

    Callers must treat the result as read-only: it is shared between calls.

    Raises:
        FileNotFoundError: If no such data file is bundled
        RuntimeError: If the file is not a YAML mapping
    """
    resource = resources.files(__name__) / filename
    raw = _yaml.load(resource.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise RuntimeError(f"YAML must be a mapping: {filename}")
    logger.debug("Loaded data file %s (%d top-level keys)", filename, len(raw))
    return raw


__all__ = ["read_yaml"]
