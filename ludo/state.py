"""Global runtime state of the application."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from ludo.rdb import Database


@dataclass
class State:
    """Runtime state shared by the whole application."""

    core: Any = None
    core_running: bool = False
    menu_active: bool = False
    verbose: bool = False
    core_path: str = ""
    game_path: str = ""
    db: Database = field(default_factory=Database)
    ludos: bool = False
    fast_forward: bool = False
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def reset(self) -> None:
        """Restore every field to its default value."""
        self.core = None
        self.core_running = False
        self.menu_active = False
        self.verbose = False
        self.core_path = ""
        self.game_path = ""
        self.db = Database()
        self.ludos = False
        self.fast_forward = False

    def __enter__(self) -> State:
        self._lock.acquire()
        return self

    def __exit__(self, *exc_info) -> None:
        self._lock.release()


global_state = State()