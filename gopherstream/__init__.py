"""
Gopher protocol client exposing responses as byte streams or directory
listings.
"""

from .directory import DirectoryCursor, make_entry, parse_listing
from .errors import (
    GopherConnectionError,
    GopherError,
    MalformedListingError,
    MalformedURLError,
    TransportError,
    UnsupportedModeError,
)
from .session import GopherSession
from .transport import GopherConnection, StreamOption
from .url import DEFAULT_PORT, GopherURL, normalize_selector, resolve_url
from .wrapper import WARNING_TOPIC, GopherStream, OpenOptions, Result, StreamWrapper

__all__ = [
    "DEFAULT_PORT",
    "GopherURL",
    "resolve_url",
    "normalize_selector",
    "GopherConnection",
    "StreamOption",
    "DirectoryCursor",
    "make_entry",
    "parse_listing",
    "GopherSession",
    "GopherStream",
    "StreamWrapper",
    "OpenOptions",
    "Result",
    "WARNING_TOPIC",
    "GopherError",
    "MalformedURLError",
    "GopherConnectionError",
    "UnsupportedModeError",
    "MalformedListingError",
    "TransportError",
]
