"""
Gopher URL resolution and selector normalization.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from .errors import MalformedURLError

DEFAULT_PORT = 70

# One path segment holding a single item-type character, e.g. "/1/" or "/h/".
RE_TYPE_PREFIX = re.compile(r"^/[A-Za-z0-9]/")


@dataclass
class GopherURL:
    host: str
    port: int = DEFAULT_PORT
    selector: str = ""


def resolve_url(url: str) -> GopherURL:
    """
    Split a URL into host, port and raw path. Purely syntactic: the host is
    not looked up. Missing ports resolve to DEFAULT_PORT.
    """
    try:
        parts = urlsplit(url)
        port = parts.port
    except (TypeError, ValueError) as e:
        raise MalformedURLError(f"Unable to parse URL {url!r}: {e}") from e

    host = parts.hostname
    if not host:
        raise MalformedURLError(f"URL has no host: {url!r}")

    return GopherURL(
        host=host,
        port=port if port is not None else DEFAULT_PORT,
        selector=parts.path,
    )


def normalize_selector(path: Optional[str]) -> str:
    # The item type travels in links only; it is never part of the request.
    if not path:
        return ""
    return RE_TYPE_PREFIX.sub("", path, count=1)


__all__ = ["DEFAULT_PORT", "GopherURL", "resolve_url", "normalize_selector"]
