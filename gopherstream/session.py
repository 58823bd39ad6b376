"""
GopherSession: owns one byte-stream connection and performs synchronous
directory fetches over separate single-use connections.
"""

from __future__ import annotations

import os
from typing import Optional

from .directory import DirectoryCursor, DirectoryEntry, DirectoryListing, parse_listing
from .errors import GopherError, TransportError, UnsupportedModeError
from .transport import SOCKET_TIMEOUT, Connector, GopherConnection
from .url import normalize_selector, resolve_url

READ_MODES = ("r", "rb", "rt")


class GopherSession:
    def __init__(
        self,
        timeout: Optional[float] = SOCKET_TIMEOUT,
        connector: Optional[Connector] = None,
        verbose: bool = False,
    ):
        self.timeout = timeout
        self.connector = connector
        self.verbose = verbose

        self.connection: Optional[GopherConnection] = None
        self.listing: Optional[DirectoryListing] = None
        self.cursor: Optional[DirectoryCursor] = None

    def __enter__(self) -> "GopherSession":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        self.close_directory()

    def __del__(self):
        conn = getattr(self, "connection", None)
        if conn is not None:
            conn.close()

    # ---------- Byte-stream mode ----------

    def open(self, url: str, mode: str = "rb") -> str:
        """
        Connect to the URL's host and send its selector. Returns the opened
        path, which for Gopher is always the URL itself.
        """
        if mode not in READ_MODES:
            raise UnsupportedModeError("Gopher only supports read-only streams")

        target = resolve_url(url)
        self.close()

        self.connection = self._connect(target.host, target.port)
        try:
            self.connection.send_request(normalize_selector(target.selector))
        except TransportError:
            self.close()
            raise
        return url

    def read(self, count: int) -> bytes:
        return self._stream().read(count)

    def eof(self) -> bool:
        return self._stream().eof()

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> bool:
        return self._stream().seek(offset, whence)

    def tell(self) -> int:
        return self._stream().tell()

    def set_option(self, option: int, arg1=None, arg2=None) -> bool:
        return self._stream().set_option(option, arg1, arg2)

    def stat(self) -> os.stat_result:
        return self._stream().stat()

    def close(self):
        conn, self.connection = self.connection, None
        if conn is not None:
            if self.verbose:
                print("[GopherSession] Closing stream connection")
            conn.close()

    # ---------- Directory mode ----------

    def open_directory(self, url: str) -> DirectoryListing:
        """
        Fetch and parse a Gopher menu. The whole response is drained and the
        connection closed before returning; on a malformed line nothing is
        kept from the attempt.
        """
        target = resolve_url(url)
        self.close_directory()

        conn = self._connect(target.host, target.port)
        try:
            conn.send_request(normalize_selector(target.selector))
            listing = parse_listing(conn.iter_lines())
        finally:
            conn.close()

        # Duplicates are left in place; de-duplication is up to the caller.
        self.listing = listing
        self.cursor = DirectoryCursor(listing)
        if self.verbose:
            print(f"[GopherSession] {url}: {len(listing)} entries")
        return listing

    def read_next(self) -> Optional[DirectoryEntry]:
        if self.cursor is None:
            return None
        return self.cursor.read_next()

    def rewind(self):
        if self.cursor is not None:
            self.cursor.rewind()

    def close_directory(self):
        if self.cursor is not None:
            self.cursor.invalidate()
        self.cursor = None
        self.listing = None

    # ---------- Internals ----------

    def _connect(self, host: str, port: int) -> GopherConnection:
        if self.verbose:
            print(f"[GopherSession] Connecting to {host}:{port} …")
        try:
            return GopherConnection.connect(host, port, self.timeout, self.connector)
        except GopherError as e:
            if self.verbose:
                print(f"[GopherSession] Failed to connect: {e}")
            raise

    def _stream(self) -> GopherConnection:
        if self.connection is None:
            raise TransportError("No open stream; call open() first")
        return self.connection


__all__ = ["READ_MODES", "GopherSession"]
