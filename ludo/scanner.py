"""Build game playlists by matching a game collection against the database.

Zip archives and plain ROM files are matched by CRC32 checksum, cue sheets
by file name.
"""

from __future__ import annotations

import os
import threading
import zipfile
import zlib
from typing import Callable, Iterator, Sequence

from ludo import notifications, playlists, settings
from ludo.notifications import Severity
from ludo.rdb import Database, Game, parse
from ludo.state import global_state
from ludo.utils import all_files_in, file_name

_ROM_EXTENSIONS = frozenset({
    ".32x", "a52", ".a78", ".col", ".crt", ".d64", ".pce", ".fds", ".gb", ".gba",
    ".gbc", ".gen", ".gg", ".ipf", ".j64", ".jag", ".lnx", ".md", ".n64", ".nes",
    ".ngc", ".nds", ".rom", ".sfc", ".sg", ".smc", ".smd", ".sms", ".ws", ".wsc",
})


def _extension(path: str) -> str:
    name = os.path.basename(path)
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def load_db(directory: str) -> Database:
    """Parse every rdb file of a directory into a database keyed by system name."""
    db = Database()
    for name in sorted(os.listdir(directory)):
        if ".rdb" not in name:
            continue
        try:
            with open(os.path.join(directory, name), "rb") as fd:
                data = fd.read()
        except OSError:
            continue
        db[name[:-4]] = parse(data)
    return db


def scan(directory: str, roms: Sequence[str], nid: str) -> Iterator[Game]:
    """Yield a database match for every recognised game among ``roms``.

    Progress and errors are reported on the notification ``nid``.
    """
    db = global_state.db
    total = len(roms)
    for index, rom in enumerate(roms):
        progress = f"{index}/{total} {rom}"
        extension = _extension(rom)
        if extension == ".zip":
            try:
                archive = zipfile.ZipFile(rom)
            except (OSError, zipfile.BadZipFile) as err:
                notifications.update(nid, Severity.ERROR, str(err))
                continue
            with archive:
                for member in archive.infolist():
                    if member.CRC > 0:
                        yield from db.find_by_crc(rom, member.filename, member.CRC)
                        notifications.update(nid, Severity.INFO, progress)
        elif extension == ".cue":
            yield from db.find_by_rom_name(rom, os.path.basename(rom), 0)
            notifications.update(nid, Severity.INFO, progress)
        elif extension in _ROM_EXTENSIONS:
            try:
                with open(rom, "rb") as fd:
                    checksum = zlib.crc32(fd.read())
            except OSError as err:
                notifications.update(nid, Severity.ERROR, str(err))
                continue
            yield from db.find_by_crc(rom, file_name(rom), checksum)
            notifications.update(nid, Severity.INFO, progress)


def write_game(game: Game) -> bool:
    """Append a game to its system's playlist file unless already listed.

    Returns whether a line was written.
    """
    directory = settings.current.playlists_directory
    os.makedirs(directory, exist_ok=True)
    csv_path = os.path.join(directory, game.system + ".csv")
    if playlists.contains(csv_path, game.path, game.crc32):
        return False
    crc = format(game.crc32, "x") if game.crc32 > 0 else ""
    with open(csv_path, "a", encoding="utf-8", newline="") as fd:
        fd.write(f"{game.path}\t{game.name}\t{crc}\n")
    return True


def scan_dir(directory: str, done_cb: Callable[[], None]) -> threading.Thread | None:
    """Scan a whole directory in the background and write the playlists.

    Returns the worker thread, or None when the directory cannot be listed.
    """
    nid = notifications.display_and_log(Severity.INFO, "Menu", "Scanning %s", directory)
    try:
        roms = all_files_in(directory)
    except OSError as err:
        notifications.update(nid, Severity.ERROR, str(err))
        return None

    def work() -> None:
        for game in scan(directory, roms, nid):
            write_game(game)
        done_cb()
        notifications.update(nid, Severity.SUCCESS, "Done scanning.")

    thread = threading.Thread(target=work, daemon=True)
    thread.start()
    return thread