"""
Explicit scheme registry and the small set of host-side helpers that drive a
registered StreamWrapper through its operation set.
"""

from __future__ import annotations

from typing import Callable, Dict, List
from urllib.parse import urlsplit

from .errors import GopherError, MalformedURLError, TransportError
from .wrapper import OpenOptions, StreamWrapper

READ_SIZE = 8192

_wrappers: Dict[str, Callable[[], StreamWrapper]] = {}


def register_wrapper(scheme: str, factory: Callable[[], StreamWrapper]):
    scheme = scheme.lower()
    if scheme in _wrappers:
        raise ValueError(f"A wrapper is already registered for {scheme}://")
    _wrappers[scheme] = factory


def unregister_wrapper(scheme: str):
    _wrappers.pop(scheme.lower(), None)


def registered_schemes() -> List[str]:
    return sorted(_wrappers)


def wrapper_for(url: str) -> StreamWrapper:
    scheme = urlsplit(url).scheme.lower()
    factory = _wrappers.get(scheme)
    if factory is None:
        raise MalformedURLError(f"No wrapper registered for {scheme or '(none)'}:// in {url!r}")
    return factory()


def listdir(url: str, options: int = OpenOptions.REPORT_ERRORS) -> List[str]:
    """
    Open a directory through its wrapper and collect every entry in order.
    """
    wrapper = wrapper_for(url)
    result = wrapper.dir_opendir(url, options)
    if not result:
        raise result.error or GopherError(f"Unable to open directory {url}")
    entries: List[str] = []
    try:
        while True:
            entry = wrapper.dir_readdir()
            if entry is False:
                break
            entries.append(entry)
    finally:
        wrapper.dir_closedir()
    return entries


def read_url(url: str, mode: str = "rb", options: int = OpenOptions.REPORT_ERRORS) -> bytes:
    wrapper = wrapper_for(url)
    result = wrapper.stream_open(url, mode, options)
    if not result:
        raise result.error or GopherError(f"Unable to open {url}")
    chunks = []
    try:
        while not wrapper.stream_eof():
            data = wrapper.stream_read(READ_SIZE)
            if data is False:
                raise wrapper.last_error or TransportError(f"Read failed on {url}")
            chunks.append(data)
    finally:
        wrapper.stream_close()
    return b"".join(chunks)


__all__ = [
    "register_wrapper",
    "unregister_wrapper",
    "registered_schemes",
    "wrapper_for",
    "listdir",
    "read_url",
]
