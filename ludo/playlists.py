"""Playlists of scanned games, stored as tab-separated files per system."""

from __future__ import annotations

import csv
import fnmatch
import logging
import os
import re
from dataclasses import dataclass

from ludo import settings

logger = logging.getLogger(__name__)

_HEX = re.compile(r"[0-9a-fA-F]+")


@dataclass
class Entry:
    """A game in a playlist."""

    path: str
    name: str
    crc32: int = 0


playlists: dict[str, list[Entry]] = {}
"""Loaded playlists keyed by the path of their file."""


# Systems shown as "<vendor> <model>".
_VENDOR_KEPT = {
    "Atari": ("2600", "5200", "7800", "Jaguar", "Lynx", "ST"),
    "Commodore": ("64",),
}

# Systems shown by their model alone.
_VENDOR_DROPPED = {
    "Bandai": ("WonderSwan Color", "WonderSwan"),
    "Coleco": ("ColecoVision",),
    "GCE": ("Vectrex",),
    "Microsoft": ("MSX", "MSX2"),
    "NEC": ("PC-FX",),
    "Nintendo": ("Game Boy Advance", "Game Boy Color", "Game Boy", "Pokemon Mini", "Virtual Boy"),
    "Sega": ("32X", "Game Gear", "Saturn", "SG-1000"),
    "Sharp": ("X68000",),
    "Sinclair": ("ZX Spectrum +3", "ZX Spectrum"),
    "SNK": ("Neo Geo CD", "Neo Geo Pocket Color", "Neo Geo Pocket"),
    "Sony": ("PlayStation",),
    "The 3DO Company": ("3DO",),
}

# Systems whose display name differs from their database name.
_RENAMED = {
    ("FB Alpha", "Arcade Games"): "Arcade (FB Alpha)",
    ("Magnavox", "Odyssey2"): "Magnavox Odyssey²",
    ("NEC", "PC Engine - TurboGrafx 16"): "TurboGrafx-16",
    ("NEC", "PC Engine CD - TurboGrafx-CD"): "TurboGrafx-CD",
    ("NEC", "PC Engine SuperGrafx"): "SuperGrafx",
    ("Nintendo", "Family Computer Disk System"): "Famicom Disk System",
    ("Nintendo", "Nintendo Entertainment System"): "NES / Famicom",
    ("Nintendo", "Super Nintendo Entertainment System"): "Super Nintendo",
    ("Sega", "Master System - Mark III"): "Master System",
    ("Sega", "Mega Drive - Genesis"): "Mega Drive / Genesis",
    ("Sega", "PICO"): "Pico",
    ("Sinclair", "ZX 81"): "ZX81",
}

_SHORT_NAMES = (
    {
        f"{vendor} - {model}": f"{vendor} {model}"
        for vendor, models in _VENDOR_KEPT.items()
        for model in models
    }
    | {
        f"{vendor} - {model}": model
        for vendor, models in _VENDOR_DROPPED.items()
        for model in models
    }
    | {f"{vendor} - {model}": short for (vendor, model), short in _RENAMED.items()}
)


def _clean(path: str) -> str:
    cleaned = os.path.normpath(path)
    if os.sep == "/" and cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def _parse_crc(text: str) -> int:
    if not text:
        return 0
    if not _HEX.fullmatch(text) or int(text, 16) > 0xFFFFFFFFFFFFFFFF:
        logger.error("invalid CRC32 %r", text)
        return 0
    return int(text, 16) & 0xFFFFFFFF


def _read_playlist(path: str) -> list[Entry]:
    entries: list[Entry] = []
    with open(path, encoding="utf-8", newline="") as fd:
        rows = csv.reader(fd, delimiter="\t")
        expected: int | None = None
        while True:
            try:
                row = next(rows)
            except StopIteration:
                break
            except csv.Error as err:
                logger.error("%s: %s", path, err)
                continue
            if not row:
                continue
            if expected is None:
                expected = len(row)
            if len(row) != expected:
                logger.error("%s: wrong number of fields", path)
                continue
            if len(row) < 3:
                logger.error("%s: expected 3 fields, got %d", path, len(row))
                continue
            entries.append(Entry(path=_clean(row[0]), name=row[1], crc32=_parse_crc(row[2])))
    return entries


def load() -> None:
    """Load every playlist file of the playlists directory into memory."""
    directory = settings.current.playlists_directory
    try:
        names = sorted(os.listdir(directory))
    except OSError:
        names = []
    playlists.clear()
    for name in names:
        if not fnmatch.fnmatchcase(name, "*.csv"):
            continue
        path = _clean(os.path.join(directory, name))
        try:
            playlists[path] = _read_playlist(path)
        except (OSError, UnicodeDecodeError) as err:
            logger.error("%s", err)


def contains(csv_path: str, path: str, crc32: int) -> bool:
    """Tell whether a playlist already holds a game, by path or non-zero checksum."""
    wanted = _clean(path)
    return any(
        _clean(entry.path) == wanted or (crc32 != 0 and entry.crc32 == crc32)
        for entry in playlists.get(_clean(csv_path), [])
    )


def count(path: str) -> int:
    """Return the number of games in a loaded playlist."""
    return len(playlists.get(_clean(path), []))


def short_name(name: str) -> str:
    """Return a shorter display name for a system, or the name unchanged."""
    return _SHORT_NAMES.get(name, name)