from __future__ import annotations


class OutlineError(Exception):
    """Base error for outline reading/writing."""


class OutlineFormatError(OutlineError, ValueError):
    """An outline record (e.g. loaded from JSON) is malformed."""
