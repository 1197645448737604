"""Serialize the emulated machine's state to files and restore it."""

from __future__ import annotations

import os
from typing import Any

from ludo import settings
from ludo.state import global_state


def _core() -> Any:
    core = global_state.core
    if core is None:
        raise RuntimeError("no core loaded")
    return core


def save(name: str) -> None:
    """Save the current state as ``<name>.state`` in the savestates directory."""
    core = _core()
    data = core.serialize(core.serialize_size())
    directory = settings.current.savestates_directory
    os.makedirs(directory, exist_ok=True)
    with open(os.path.join(directory, name + ".state"), "wb") as fd:
        fd.write(data)


def load(path: str) -> None:
    """Restore the state stored in the file at ``path``."""
    core = _core()
    size = core.serialize_size()
    with open(path, "rb") as fd:
        data = fd.read()
    core.unserialize(data, size)