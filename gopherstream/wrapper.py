"""
Host-facing stream wrapper: the fixed operation set a virtual-filesystem
layer calls, implemented on top of GopherSession.

Every operation returns a failure indicator instead of raising. Warnings go
to the host's error-reporting channel only when the caller asked for them
with OpenOptions.REPORT_ERRORS.
"""

from __future__ import annotations

import abc
import enum
import os
from dataclasses import dataclass
from typing import Callable, Optional, Union

from pubsub import pub

from .directory import DirectoryEntry
from .errors import GopherError
from .session import GopherSession
from .transport import SOCKET_TIMEOUT, Connector

WARNING_TOPIC = "gopherstream.warning"

WarningCallback = Callable[[str, str], None]


class OpenOptions(enum.IntFlag):
    NONE = 0
    USE_PATH = 1
    REPORT_ERRORS = 8


@dataclass
class Result:
    ok: bool
    error: Optional[GopherError] = None
    opened_path: Optional[str] = None

    def __bool__(self) -> bool:
        return self.ok

    @property
    def error_kind(self) -> Optional[str]:
        return type(self.error).__name__ if self.error else None


def publish_warning(message: str, url: str = ""):
    pub.sendMessage(WARNING_TOPIC, message=message, url=url)


class StreamWrapper(abc.ABC):
    """Operation set a host filesystem layer dispatches to."""

    last_error: Optional[GopherError] = None

    @abc.abstractmethod
    def dir_opendir(self, path: str, options: int = OpenOptions.NONE) -> Result: ...

    @abc.abstractmethod
    def dir_readdir(self) -> Union[DirectoryEntry, bool]: ...

    @abc.abstractmethod
    def dir_rewinddir(self) -> Result: ...

    @abc.abstractmethod
    def dir_closedir(self) -> Result: ...

    @abc.abstractmethod
    def stream_open(self, path: str, mode: str, options: int = OpenOptions.NONE) -> Result: ...

    @abc.abstractmethod
    def stream_read(self, count: int) -> Union[bytes, bool]: ...

    @abc.abstractmethod
    def stream_eof(self) -> bool: ...

    @abc.abstractmethod
    def stream_seek(self, offset: int, whence: int = os.SEEK_SET) -> bool: ...

    @abc.abstractmethod
    def stream_tell(self) -> int: ...

    @abc.abstractmethod
    def stream_set_option(self, option: int, arg1=None, arg2=None) -> bool: ...

    @abc.abstractmethod
    def stream_stat(self) -> Optional[os.stat_result]: ...

    @abc.abstractmethod
    def stream_close(self) -> Result: ...


class GopherStream(StreamWrapper):
    def __init__(
        self,
        timeout: Optional[float] = SOCKET_TIMEOUT,
        connector: Optional[Connector] = None,
        on_warning: Optional[WarningCallback] = None,
        verbose: bool = False,
    ):
        self.session = GopherSession(timeout=timeout, connector=connector, verbose=verbose)
        self.on_warning = on_warning or publish_warning
        self.last_error: Optional[GopherError] = None
        self.path = ""
        self.options: int = OpenOptions.NONE

    # ---------- Directory family ----------

    def dir_opendir(self, path, options=OpenOptions.NONE):
        try:
            self.session.open_directory(path)
        except GopherError as e:
            return self._fail(e, path, options)
        return Result(True)

    def dir_readdir(self):
        entry = self.session.read_next()
        return False if entry is None else entry

    def dir_rewinddir(self):
        self.session.rewind()
        return Result(True)

    def dir_closedir(self):
        self.session.close_directory()
        return Result(True)

    # ---------- Stream family ----------

    def stream_open(self, path, mode, options=OpenOptions.NONE):
        self.path = path
        self.options = options
        try:
            opened = self.session.open(path, mode)
        except GopherError as e:
            return self._fail(e, path, options)
        if options & OpenOptions.USE_PATH:
            return Result(True, opened_path=opened)
        return Result(True)

    def stream_read(self, count):
        try:
            return self.session.read(count)
        except GopherError as e:
            # Nothing more can be read from a connection that failed mid-read.
            self.session.close()
            self._stream_failed(e)
            return False

    def stream_eof(self):
        try:
            return self.session.eof()
        except GopherError as e:
            self._stream_failed(e)
            return True

    def stream_seek(self, offset, whence=os.SEEK_SET):
        try:
            return self.session.seek(offset, whence)
        except GopherError as e:
            self._stream_failed(e)
            return False

    def stream_tell(self):
        try:
            return self.session.tell()
        except GopherError as e:
            self._stream_failed(e)
            return -1

    def stream_set_option(self, option, arg1=None, arg2=None):
        try:
            return self.session.set_option(option, arg1, arg2)
        except GopherError as e:
            self._stream_failed(e)
            return False

    def stream_stat(self):
        try:
            return self.session.stat()
        except GopherError as e:
            self._stream_failed(e)
            return None

    def stream_close(self):
        if self.session.connection is None:
            return Result(False)
        self.session.close()
        return Result(True)

    # ---------- Internals ----------

    def _fail(self, error: GopherError, path: str, options: int) -> Result:
        self.last_error = error
        if options & OpenOptions.REPORT_ERRORS:
            self.on_warning(str(error), path)
        return Result(False, error=error)

    def _stream_failed(self, error: GopherError) -> Result:
        # Failures after open are reported under the options open was given.
        return self._fail(error, self.path, self.options)


__all__ = [
    "WARNING_TOPIC",
    "OpenOptions",
    "Result",
    "StreamWrapper",
    "GopherStream",
    "publish_warning",
]
