"""Exceptions raised by the region/strip core."""

from __future__ import annotations


class MgvError(Exception):
    """Base class for viewer state errors."""


class InvalidParameter(MgvError, ValueError):
    """Raised when a navigation command receives an out-of-range argument."""


class UnsupportedType(MgvError, ValueError):
    """Raised for export or sequence types the viewer does not know about."""


class ParameterStringError(MgvError, ValueError):
    """Raised when a serialised ``regions=`` string cannot be parsed."""
