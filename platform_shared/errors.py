"""
Base exception for user-facing errors.

All expected errors caused by data supplied by callers
(templates, schemas, inputs) must inherit from SharedUserError.

Programming errors and bugs should NOT inherit from SharedUserError;
they will propagate with full tracebacks.
"""

from __future__ import annotations


class SharedUserError(Exception):
    """
    Base class for all user-facing errors in the shared platform library.

    These errors indicate problems that the user can fix:
    malformed templates, disallowed variables, invalid inputs, etc.
    """
    pass


__all__ = ["SharedUserError"]
