"""
Error taxonomy for Gopher sessions.
"""

from __future__ import annotations


class GopherError(Exception):
    """Base class for every failure raised by a Gopher session."""


class MalformedURLError(GopherError, ValueError):
    pass


class GopherConnectionError(GopherError, ConnectionError):
    pass


class UnsupportedModeError(GopherError):
    pass


class MalformedListingError(GopherError):
    pass


class TransportError(GopherError):
    pass


__all__ = [
    "GopherError",
    "MalformedURLError",
    "GopherConnectionError",
    "UnsupportedModeError",
    "MalformedListingError",
    "TransportError",
]
