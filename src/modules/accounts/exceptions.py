"""Authorization exceptions shared by every module."""

from __future__ import annotations


class NotAuthorized(Exception):
    """The acting user may not perform the operation on this resource."""
