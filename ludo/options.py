"""Core options: the variables a libretro core exposes, with their saved choices."""

from __future__ import annotations

import json
import os
import threading
from dataclasses import dataclass, field
from typing import Iterable

from ludo.settings import config_dir
from ludo.state import global_state
from ludo.utils import file_name


@dataclass
class Variable:
    """One core option; ``choices[choice]`` is its current value."""

    key: str
    desc: str
    choices: list[str] = field(default_factory=list)
    choice: int = 0


def _options_path() -> str:
    return os.path.join(config_dir(), file_name(global_state.core_path) + ".json")


class Options:
    """The options of the running core, persisted per core in the config directory."""

    def __init__(self, variables: Iterable[Variable]) -> None:
        """Copy the core's variables and apply the saved choices, if any.

        A missing options file leaves every variable on its first choice;
        an unreadable or invalid one raises.
        """
        self.vars = [Variable(v.key, v.desc, list(v.choices)) for v in variables]
        self.updated = True
        self._lock = threading.Lock()
        try:
            self._load()
        except FileNotFoundError:
            pass

    def save(self) -> None:
        """Write the current choices to the core's options file."""
        with self._lock:
            values = {v.key: v.choices[v.choice] for v in self.vars}
            data = json.dumps(values, indent=2, sort_keys=True, ensure_ascii=False)
            with open(_options_path(), "w", encoding="utf-8") as fd:
                fd.write(data)
                fd.flush()
                os.fsync(fd.fileno())

    def _load(self) -> None:
        with self._lock:
            with open(_options_path(), encoding="utf-8") as fd:
                saved = json.load(fd)
            if not isinstance(saved, dict) or not all(
                isinstance(value, str) for value in saved.values()
            ):
                raise ValueError("core options must be a JSON object of strings")
            for key, value in saved.items():
                for variable in self.vars:
                    if variable.key != key:
                        continue
                    for index, choice in enumerate(variable.choices):
                        if choice == value:
                            variable.choice = index