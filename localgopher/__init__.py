"""
Local file-backed Gopher server used by the demo and the test suite.
"""

from .server import LocalGopherServer, start_local_gopher

__all__ = ["LocalGopherServer", "start_local_gopher"]
