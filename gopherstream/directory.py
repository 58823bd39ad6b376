"""
Gopher menu parsing and the cursor used to walk a parsed listing.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple, Union

from .errors import MalformedListingError

DirectoryEntry = str
DirectoryListing = Tuple[DirectoryEntry, ...]

MENU_TERMINATOR = "."


def make_entry(type_char: str, selector: str) -> DirectoryEntry:
    """
    Build the addressable path for a menu item: "/" + type + selector.

    Selectors that already carry this item's "/<type>/" prefix are kept as
    they are, and relative selectors get a separating slash, so that
    normalize_selector() on the entry gives back a usable request.
    """
    prefix = "/" + type_char
    if selector.startswith(prefix + "/"):
        return selector
    if not selector.startswith("/"):
        return prefix + "/" + selector
    return prefix + selector


def parse_listing(lines: Iterable[Union[bytes, str]]) -> DirectoryListing:
    """
    Parse menu lines into entries. Blank lines are skipped and a line holding
    only "." ends the menu; any other line with fewer than two tab-separated
    fields fails the whole listing.
    """
    entries: List[DirectoryEntry] = []
    for lineno, raw in enumerate(lines, 1):
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8", errors="replace")
        line = raw.strip()
        if not line:
            continue
        if line == MENU_TERMINATOR:
            break
        fields = line.split("\t")
        if len(fields) < 2:
            raise MalformedListingError(f"Bad index line {lineno} in input: {line!r}")
        entries.append(make_entry(fields[0][0], fields[1]))
    return tuple(entries)


class DirectoryCursor:
    def __init__(self, listing: DirectoryListing):
        self.listing: Optional[DirectoryListing] = listing
        self.index = 0

    @property
    def valid(self) -> bool:
        return self.listing is not None

    def read_next(self) -> Optional[DirectoryEntry]:
        if self.listing is None or self.index >= len(self.listing):
            return None
        entry = self.listing[self.index]
        self.index += 1
        return entry

    def rewind(self):
        self.index = 0

    def invalidate(self):
        self.listing = None
        self.index = 0


__all__ = [
    "DirectoryEntry",
    "DirectoryListing",
    "DirectoryCursor",
    "make_entry",
    "parse_listing",
]
