"""Persist the game's battery-backed save RAM to the filesystem."""

from __future__ import annotations

import os
import threading

from ludo import settings
from ludo.state import global_state
from ludo.utils import file_name

MEMORY_SAVE_RAM = 0
"""Memory region identifier of the save RAM in the libretro API."""

_lock = threading.Lock()


def sram_path() -> str:
    """Return the save RAM file path for the current game."""
    return os.path.join(
        settings.current.savefiles_directory, file_name(global_state.game_path) + ".srm"
    )


def _sram() -> memoryview:
    if not global_state.core_running:
        raise RuntimeError("core not running")
    core = global_state.core
    size = core.get_memory_size(MEMORY_SAVE_RAM)
    data = core.get_memory_data(MEMORY_SAVE_RAM)
    if data is None or size == 0:
        raise RuntimeError("unable to get SRAM address")
    return memoryview(data).cast("B")[:size]


def save_sram() -> None:
    """Write the game's save RAM to its file."""
    with _lock:
        content = bytes(_sram())
        os.makedirs(settings.current.savefiles_directory, exist_ok=True)
        with open(sram_path(), "wb") as fd:
            fd.write(content)
            fd.flush()
            os.fsync(fd.fileno())


def load_sram() -> None:
    """Copy the save RAM file into the game's memory, as far as both reach."""
    with _lock:
        destination = _sram()
        with open(sram_path(), "rb") as fd:
            source = fd.read()
        length = min(len(destination), len(source))
        destination[:length] = source[:length]