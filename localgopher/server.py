"""
Minimal file-backed Gopher server for local demos and tests.

Directories are served from their gophermap, files as raw bytes. Every
selector received is recorded on the server in arrival order.
"""

from __future__ import annotations

import os
import socketserver
import threading
from typing import Iterable, List, Optional

CRLF = "\r\n"
DEFAULT_MAP_NAMES = ("gophermap", ".gophermap")
MAX_SELECTOR = 4096


class LocalGopherServer(socketserver.ThreadingTCPServer):
    allow_reuse_address = True
    daemon_threads = True

    def __init__(self, host: str, port: int, root_dir: str):
        self.root_dir = os.path.abspath(root_dir)
        self.selectors: List[str] = []
        self._selectors_lock = threading.Lock()
        super().__init__((host, port), GopherRequestHandler)

    @property
    def port(self) -> int:
        return self.server_address[1]

    def record_selector(self, selector: str):
        with self._selectors_lock:
            self.selectors.append(selector)

    def locate(self, selector: str) -> Optional[str]:
        """
        Map a selector onto a path under root_dir. Query text after a tab is
        ignored; anything escaping the root maps to None.
        """
        rel = selector.split("\t", 1)[0].lstrip("/")
        target = os.path.normpath(os.path.join(self.root_dir, rel))
        if os.path.commonpath([self.root_dir, target]) != self.root_dir:
            return None
        return target


class GopherRequestHandler(socketserver.StreamRequestHandler):
    timeout = 10

    def handle(self):
        raw = self.rfile.readline(MAX_SELECTOR)
        selector = raw.decode("utf-8", errors="replace").rstrip("\r\n")
        server: LocalGopherServer = self.server  # type: ignore[assignment]
        server.record_selector(selector)
        try:
            self.wfile.write(self.respond(server.locate(selector), selector))
        except BrokenPipeError:
            pass

    def respond(self, target: Optional[str], selector: str) -> bytes:
        if target is None or not os.path.exists(target):
            return error_menu(f"Selector not found: {selector or '/'}")
        if os.path.isdir(target):
            return self.menu_for(target)
        # Item-mode responses end when the connection closes; no dot terminator.
        try:
            with open(target, "rb") as fh:
                return fh.read()
        except OSError as exc:
            return error_menu(f"Failed to read file: {exc}")

    def menu_for(self, directory: str) -> bytes:
        map_path = _find_gophermap(directory)
        if map_path is None:
            return error_menu(f"No gophermap in {os.path.relpath(directory)}")
        try:
            with open(map_path, "r", encoding="utf-8") as fh:
                return render_menu(fh)
        except OSError as exc:
            return error_menu(f"Failed to read menu: {exc}")


def render_menu(lines: Iterable[str]) -> bytes:
    body = [line.rstrip("\r\n") for line in lines]
    if body[-1:] != ["."]:
        body.append(".")
    return (CRLF.join(body) + CRLF).encode("utf-8")


def error_menu(message: str) -> bytes:
    return render_menu([f"3{message}\tfake\tlocalhost\t0"])


def _find_gophermap(directory: str) -> Optional[str]:
    for name in DEFAULT_MAP_NAMES:
        candidate = os.path.join(directory, name)
        if os.path.isfile(candidate):
            return candidate
    return None


def start_local_gopher(
    root_dir: str,
    host: str = "127.0.0.1",
    port: int = 7070,
) -> LocalGopherServer:
    """
    Start serving root_dir on a daemon thread. Pass port=0 to bind an
    ephemeral port (see LocalGopherServer.port).
    """
    server = LocalGopherServer(host, port, root_dir)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    return server


__all__ = ["LocalGopherServer", "start_local_gopher", "render_menu"]
