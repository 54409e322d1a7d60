from __future__ import annotations

from importlib import metadata


def tool_version() -> str:
    """
    Single way to get the installed package version.
    Does not depend on other modules (to avoid import cycles).
    """
    for dist in ("platform-shared", "platform_shared"):
        try:
            return metadata.version(dist)
        except metadata.PackageNotFoundError:
            continue
    return "0.0.0"

__all__ = ["tool_version"]
