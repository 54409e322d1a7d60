"""
Shared platform library.

Webhook payload templates, platform constants, the image proxy client
and assorted helpers used by platform services.
"""

from .version import tool_version

__version__ = tool_version()

__all__ = ["__version__"]
