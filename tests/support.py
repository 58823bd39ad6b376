# support.py
import os
import shutil
import tempfile
import unittest
from typing import List, Optional

from localgopher import start_local_gopher

HOST = "127.0.0.1"

MENU = (
    "1Article One\t/1/article1\texample.com\t70\r\n"
    "1Article Two\t/1/article2\texample.com\t70\r\n"
)


class FakeSocket:
    """
    Socket stand-in: replays a canned response in fixed-size pieces and
    records what was sent and how often it was closed.
    """
    def __init__(self, response: bytes = b"", piece: int = 5, read_error: Optional[OSError] = None):
        self.response = response
        self.piece = piece
        self.read_error = read_error
        self.sent = b""
        self.close_count = 0
        self.timeout = None
        self.blocking = True
        self.sockopts = {}

    def sendall(self, data: bytes):
        self.sent += data

    def recv(self, count: int) -> bytes:
        if not self.response and self.read_error is not None:
            raise self.read_error
        n = min(count, self.piece)
        data, self.response = self.response[:n], self.response[n:]
        return data

    def settimeout(self, value):
        self.timeout = value

    def setblocking(self, flag):
        self.blocking = flag

    def setsockopt(self, level, name, value):
        self.sockopts[(level, name)] = value

    def fileno(self) -> int:
        return -1

    def close(self):
        self.close_count += 1


class FakeConnector:
    def __init__(
        self,
        response: bytes = b"",
        error: Optional[OSError] = None,
        read_error: Optional[OSError] = None,
    ):
        self.response = response
        self.error = error
        self.read_error = read_error
        self.addresses: List[tuple] = []
        self.sockets: List[FakeSocket] = []

    def __call__(self, address, timeout):
        self.addresses.append(address)
        if self.error is not None:
            raise self.error
        sock = FakeSocket(self.response, read_error=self.read_error)
        self.sockets.append(sock)
        return sock


class LocalGopherTestCase(unittest.TestCase):
    """Serves a temporary directory over loopback for the duration of a test."""

    def setUp(self):
        self.root = tempfile.mkdtemp(prefix="gopherroot-")
        self.server = start_local_gopher(self.root, host=HOST, port=0)
        self.base = f"gopher://{HOST}:{self.server.port}"

    def tearDown(self):
        self.server.shutdown()
        self.server.server_close()
        shutil.rmtree(self.root, ignore_errors=True)

    def write_file(self, rel_path: str, content) -> str:
        path = os.path.join(self.root, rel_path)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        mode = "wb" if isinstance(content, bytes) else "w"
        with open(path, mode) as fh:
            fh.write(content)
        return path

    def write_menu(self, text: str, rel_dir: str = ""):
        self.write_file(os.path.join(rel_dir, "gophermap"), text)
