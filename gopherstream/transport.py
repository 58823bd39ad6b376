"""
Owned TCP connection used by a Gopher session (request line, raw reads,
line iteration, socket options).
"""

from __future__ import annotations

import enum
import os
import socket
from typing import Callable, Iterator, Optional, Tuple

from .errors import GopherConnectionError, TransportError

SOCKET_TIMEOUT = 15
READ_CHUNK = 4096
CRLF = b"\r\n"

# connect((host, port), timeout) -> socket-like object
Connector = Callable[[Tuple[str, int], Optional[float]], socket.socket]


class StreamOption(enum.IntEnum):
    BLOCKING = 1
    WRITE_BUFFER = 3
    READ_TIMEOUT = 4


def default_connector(address: Tuple[str, int], timeout: Optional[float]) -> socket.socket:
    return socket.create_connection(address, timeout=timeout)


class GopherConnection:
    def __init__(self, sock: socket.socket):
        self.sock: Optional[socket.socket] = sock
        self._position = 0
        self._eof = False

    @classmethod
    def connect(
        cls,
        host: str,
        port: int,
        timeout: Optional[float] = SOCKET_TIMEOUT,
        connector: Optional[Connector] = None,
    ) -> "GopherConnection":
        connector = connector or default_connector
        try:
            sock = connector((host, port), timeout)
        except OSError as e:
            raise GopherConnectionError(f"Unable to connect to {host}:{port}: {e}") from e
        return cls(sock)

    @property
    def closed(self) -> bool:
        return self.sock is None

    def send_request(self, selector: str):
        """
        Write the one-line Gopher request. Nothing else is ever written to
        the connection.
        """
        payload = selector.encode("utf-8", errors="replace") + CRLF
        try:
            self._socket().sendall(payload)
        except OSError as e:
            raise TransportError(f"Failed to send request: {e}") from e

    def read(self, count: int) -> bytes:
        if count <= 0 or self._eof:
            return b""
        try:
            data = self._socket().recv(count)
        except BlockingIOError:
            # Non-blocking socket with nothing buffered yet.
            return b""
        except OSError as e:
            raise TransportError(f"Read failed: {e}") from e
        if not data:
            self._eof = True
        self._position += len(data)
        return data

    def eof(self) -> bool:
        return self._eof

    def tell(self) -> int:
        return self._position

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> bool:
        # Sockets are not seekable; only a seek onto the current offset holds.
        if whence == os.SEEK_SET:
            return offset == self._position
        if whence == os.SEEK_CUR:
            return offset == 0
        return False

    def set_option(self, option: int, arg1=None, arg2=None) -> bool:
        try:
            kind = StreamOption(option)
        except (TypeError, ValueError):
            return False

        sock = self._socket()
        try:
            if kind is StreamOption.BLOCKING:
                sock.setblocking(bool(arg1))
            elif kind is StreamOption.READ_TIMEOUT:
                seconds = float(arg1 or 0) + float(arg2 or 0) / 1_000_000
                sock.settimeout(seconds)
            elif kind is StreamOption.WRITE_BUFFER:
                if arg2:
                    sock.setsockopt(socket.SOL_SOCKET, socket.SO_SNDBUF, int(arg2))
        except (TypeError, ValueError, OSError) as e:
            raise TransportError(f"Failed to set {kind.name}: {e}") from e
        return True

    def stat(self) -> os.stat_result:
        try:
            return os.fstat(self._socket().fileno())
        except OSError as e:
            raise TransportError(f"Unable to stat connection: {e}") from e

    def iter_lines(self) -> Iterator[bytes]:
        """
        Yield raw response lines (terminators included) until the server
        closes the connection. A trailing unterminated fragment is yielded
        last.
        """
        buf = b""
        while True:
            chunk = self.read(READ_CHUNK)
            if not chunk:
                break
            buf += chunk
            while b"\n" in buf:
                line, buf = buf.split(b"\n", 1)
                yield line + b"\n"
        if buf:
            yield buf

    def close(self):
        sock, self.sock = self.sock, None
        if sock is None:
            return
        try:
            sock.close()
        except OSError:
            pass

    def _socket(self) -> socket.socket:
        if self.sock is None:
            raise TransportError("Connection is closed")
        return self.sock


__all__ = [
    "SOCKET_TIMEOUT",
    "READ_CHUNK",
    "StreamOption",
    "Connector",
    "default_connector",
    "GopherConnection",
]
