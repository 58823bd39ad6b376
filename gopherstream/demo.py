#!/usr/bin/env python3
"""
Walk a Gopher menu and print the first article it links to.

ENV (all optional):
  GOPHER_BASE       -> base URL to list (default: gopher://xn--9bi.net)
  GOPHER_TIMEOUT    -> socket timeout in seconds (default: 15)
  GOPHER_VERBOSE    -> "1" to print connection events
  LOCAL_GOPHER_ROOT -> serve this directory locally and browse it instead
  LOCAL_GOPHER_HOST -> bind address for the local server (default: 127.0.0.1)
  LOCAL_GOPHER_PORT -> port for the local server (default: 7070)
"""

import os
import sys
from typing import List, Optional

from pubsub import pub

from gopherstream import vfs
from localgopher import start_local_gopher
from gopherstream.errors import GopherError
from gopherstream.transport import SOCKET_TIMEOUT
from gopherstream.wrapper import WARNING_TOPIC, GopherStream

DEFAULT_BASE = "gopher://xn--9bi.net"
ARTICLE_PREFIXES = ("/h", "/0")


def _env_timeout() -> float:
    raw = os.getenv("GOPHER_TIMEOUT", str(SOCKET_TIMEOUT))
    try:
        return float(raw)
    except ValueError:
        return SOCKET_TIMEOUT


def _env_port(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _on_warning(message, url=""):
    sys.stderr.write(f"[Gopher] Warning: {message} ({url})\n")


def find_article(entries: List[str]) -> Optional[str]:
    # Articles are text items; everything else in the menu is navigation.
    for prefix in ARTICLE_PREFIXES:
        for path in entries:
            if path.startswith(prefix):
                return path
    return None


def _maybe_start_local_gopher():
    root = os.getenv("LOCAL_GOPHER_ROOT")
    if not root:
        return None
    if not os.path.isdir(root):
        print(f"[LocalGopher] Root path not found: {root}")
        return None
    host = os.getenv("LOCAL_GOPHER_HOST", "127.0.0.1")
    port = _env_port("LOCAL_GOPHER_PORT", 7070)
    server = start_local_gopher(root, host=host, port=port)
    print(f"[LocalGopher] Serving {root} on gopher://{host}:{port}/")
    return server


def run(base: str, out=sys.stdout) -> int:
    try:
        articles = vfs.listdir(base)
    except GopherError as e:
        out.write(f"Unable to get directory listing: {e}\n")
        return 1

    out.write("ARTICLES:\n")
    out.write("\n".join(articles))
    out.write("\n\n")

    article = find_article(articles)
    if not article:
        out.write("Unable to find latest article.\n")
        return 1

    try:
        content = vfs.read_url(base.rstrip("/") + article)
    except GopherError as e:
        out.write(f"Unable to fetch {article}: {e}\n")
        return 1
    out.write(content.decode("utf-8", errors="replace"))
    return 0


def main() -> int:
    timeout = _env_timeout()
    verbose = os.getenv("GOPHER_VERBOSE") == "1"
    vfs.register_wrapper("gopher", lambda: GopherStream(timeout=timeout, verbose=verbose))
    pub.subscribe(_on_warning, WARNING_TOPIC)

    local_gopher = _maybe_start_local_gopher()
    base = os.getenv("GOPHER_BASE", DEFAULT_BASE)
    if local_gopher:
        host, port = local_gopher.server_address[:2]
        base = f"gopher://{host}:{port}"

    try:
        return run(base)
    except KeyboardInterrupt:
        print("Exiting.")
        return 130
    finally:
        vfs.unregister_wrapper("gopher")
        if local_gopher:
            local_gopher.shutdown()
            local_gopher.server_close()


if __name__ == "__main__":
    sys.exit(main())
