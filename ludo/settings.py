"""Application settings, with their defaults and their JSON persistence."""

from __future__ import annotations

import copy
import json
import logging
import os
import platform
from dataclasses import dataclass, field, fields
from typing import Any

from ludo.utils import core_ext

logger = logging.getLogger(__name__)

SYSTEM_SETTINGS_PATH = "/etc/ludo.json"
"""System-wide file whose values override the defaults when it exists."""


def _setting(default: Any, json_key: str, kind: type, **ui: str) -> Any:
    metadata = {"json": json_key, "kind": kind, **ui}
    if isinstance(default, dict):
        return field(default_factory=dict, metadata=metadata)
    return field(default=default, metadata=metadata)


@dataclass
class Settings:
    """Every user-facing setting; field metadata carries its JSON key and UI hints."""

    video_fullscreen: bool = _setting(
        False, "video_fullscreen", bool,
        hide="ludos", label="Video Fullscreen", fmt="%t", widget="switch",
    )
    video_monitor_index: int = _setting(
        0, "video_monitor_index", int, label="Video Monitor Index", fmt="%d",
    )
    video_filter: str = _setting("", "video_filter", str, label="Video Filter", fmt="<%s>")

    gl_version: str = _setting("", "video_gl_version", str, hide="always")
    audio_volume: float = _setting(
        0.0, "audio_volume", float, label="Audio Volume", fmt="%.1f", widget="range",
    )
    show_hidden_files: bool = _setting(
        False, "menu_showhiddenfiles", bool,
        label="Show Hidden Files", fmt="%t", widget="switch",
    )
    core_for_playlist: dict = _setting({}, "core_for_playlist", dict, hide="always")

    cores_directory: str = _setting(
        "", "cores_dir", str, hide="ludos", label="Cores Directory", fmt="%s", widget="dir",
    )
    assets_directory: str = _setting(
        "", "assets_dir", str, hide="ludos", label="Assets Directory", fmt="%s", widget="dir",
    )
    database_directory: str = _setting(
        "", "database_dir", str,
        hide="ludos", label="Database Directory", fmt="%s", widget="dir",
    )
    savestates_directory: str = _setting(
        "", "savestates_dir", str,
        hide="ludos", label="Savestates Directory", fmt="%s", widget="dir",
    )
    savefiles_directory: str = _setting(
        "", "savefiles_dir", str,
        hide="ludos", label="Savefiles Directory", fmt="%s", widget="dir",
    )
    screenshots_directory: str = _setting(
        "", "screenshots_dir", str,
        hide="ludos", label="Screenshots Directory", fmt="%s", widget="dir",
    )
    system_directory: str = _setting(
        "", "system_dir", str, hide="ludos", label="System Directory", fmt="%s", widget="dir",
    )
    playlists_directory: str = _setting(
        "", "playlists_dir", str,
        hide="ludos", label="Playlists Directory", fmt="%s", widget="dir",
    )
    thumbnails_directory: str = _setting(
        "", "thumbnail_dir", str,
        hide="ludos", label="Thumbnails Directory", fmt="%s", widget="dir",
    )

    ssh_service: bool = _setting(
        False, "ssh_service", bool, hide="app", label="SSH", widget="switch",
        service="sshd.service", path="/storage/.cache/services/sshd.conf",
    )
    samba_service: bool = _setting(
        False, "samba_service", bool, hide="app", label="Samba", widget="switch",
        service="smbd.service", path="/storage/.cache/services/samba.conf",
    )
    bluetooth_service: bool = _setting(
        False, "bluetooth_service", bool, hide="app", label="Bluetooth", widget="switch",
        service="bluetooth.service", path="/storage/.cache/services/bluez.conf",
    )

    def to_dict(self) -> dict[str, Any]:
        """Return the settings keyed by their JSON names."""
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, dict):
                value = dict(sorted(value.items()))
            result[f.metadata["json"]] = value
        return result

    def update_from_dict(self, data: dict[str, Any]) -> None:
        """Apply the values of a JSON object; unknown keys and nulls are ignored.

        Raises ValueError when a value has the wrong type.
        """
        if not isinstance(data, dict):
            raise ValueError("settings must be a JSON object")
        for f in fields(self):
            key = f.metadata["json"]
            value = data.get(key)
            if value is None:
                continue
            setattr(self, f.name, _coerce(key, f.metadata["kind"], value, getattr(self, f.name)))


def _coerce(key: str, kind: type, value: Any, current: Any) -> Any:
    if kind is bool:
        if isinstance(value, bool):
            return value
    elif kind is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif kind is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    elif kind is str:
        if isinstance(value, str):
            return value
    elif kind is dict:
        if isinstance(value, dict):
            merged = dict(current)
            for name, item in value.items():
                if item is None:
                    item = ""
                if not isinstance(item, str):
                    raise ValueError(f"invalid value for {key}[{name!r}]: {item!r}")
                merged[name] = item
            return merged
    raise ValueError(f"invalid value for {key}: {value!r}")


def _playstation_core() -> str:
    machine = platform.machine().lower()
    if machine.startswith("arm") and machine != "arm64":
        return "pcsx_rearmed_libretro"
    return "mednafen_psx_libretro"


def _home_dir() -> str:
    return os.path.expanduser("~")


def config_dir() -> str:
    """Return the directory holding the user's configuration files."""
    return os.path.join(_home_dir(), ".ludo")


def default_settings() -> Settings:
    """Build the default settings for the current user."""
    base = config_dir()
    return Settings(
        video_fullscreen=False,
        video_monitor_index=0,
        video_filter="sharp-bilinear",
        audio_volume=0.5,
        show_hidden_files=False,
        gl_version="3.2",
        core_for_playlist={
            "Atari - 2600": "stella_libretro",
            "Atari - 5200": "atari800_libretro",
            "Atari - 7800": "prosystem_libretro",
            "Atari - Jaguar": "virtualjaguar_libretro",
            "Atari - Lynx": "handy_libretro",
            "Atari - ST": "hatari_libretro",
            "Bandai - WonderSwan Color": "mednafen_wswan_libretro",
            "Bandai - WonderSwan": "mednafen_wswan_libretro",
            "Cave Story": "nxengine_libretro",
            "ChaiLove": "chailove_libretro",
            "Coleco - ColecoVision": "bluemsx_libretro",
            "FB Alpha - Arcade Games": "fbneo_libretro",
            "GCE - Vectrex": "vecx_libretro",
            "Magnavox - Odyssey2": "o2em_libretro",
            "Microsoft - MSX": "bluemsx_libretro",
            "Microsoft - MSX2": "bluemsx_libretro",
            "NEC - PC Engine SuperGrafx": "mednafen_supergrafx_libretro",
            "NEC - PC Engine - TurboGrafx 16": "mednafen_pce_fast_libretro",
            "Nintendo - Family Computer Disk System": "fceumm_libretro",
            "Nintendo - Game Boy Advance": "mgba_libretro",
            "Nintendo - Game Boy Color": "gambatte_libretro",
            "Nintendo - Game Boy": "gambatte_libretro",
            "Nintendo - Nintendo Entertainment System": "fceumm_libretro",
            "Nintendo - Pokemon Mini": "pokemini_libretro",
            "Nintendo - Super Nintendo Entertainment System": "snes9x_libretro",
            "Nintendo - Virtual Boy": "mednafen_vb_libretro",
            "Sega - 32X": "picodrive_libretro",
            "Sega - Game Gear": "genesis_plus_gx_libretro",
            "Sega - Master System - Mark III": "genesis_plus_gx_libretro",
            "Sega - Mega Drive - Genesis": "genesis_plus_gx_libretro",
            "Sega - PICO": "picodrive_libretro",
            "Sega - Saturn": "mednafen_saturn_libretro",
            "Sega - SG-1000": "genesis_plus_gx_libretro",
            "SNK - Neo Geo Pocket Color": "mednafen_ngp_libretro",
            "SNK - Neo Geo Pocket": "mednafen_ngp_libretro",
            "Sony - PlayStation": _playstation_core(),
        },
        cores_directory="./cores",
        assets_directory="./assets",
        database_directory="./database",
        savestates_directory=os.path.join(base, "savestates"),
        savefiles_directory=os.path.join(base, "savefiles"),
        screenshots_directory=os.path.join(base, "screenshots"),
        system_directory=os.path.join(base, "system"),
        playlists_directory=os.path.join(base, "playlists"),
        thumbnails_directory=os.path.join(base, "thumbnails"),
    )


defaults = default_settings()
current = default_settings()


def _settings_path() -> str:
    return os.path.join(config_dir(), "settings.json")


def _read_json(path: str) -> Any:
    with open(path, encoding="utf-8") as fd:
        return json.load(fd)


def load() -> None:
    """Reset to the defaults, then apply the system and user settings files.

    Raises when the user file is missing or invalid; the settings are saved
    back to the user file in every case.
    """
    try:
        for f in fields(current):
            setattr(current, f.name, copy.deepcopy(getattr(defaults, f.name)))
        if os.path.exists(SYSTEM_SETTINGS_PATH):
            current.update_from_dict(_read_json(SYSTEM_SETTINGS_PATH))
        current.update_from_dict(_read_json(_settings_path()))
    finally:
        try:
            save()
        except OSError as err:
            logger.error("%s", err)


def save() -> None:
    """Write the current settings to the user's settings file."""
    os.makedirs(config_dir(), exist_ok=True)
    data = json.dumps(current.to_dict(), indent=2, ensure_ascii=False)
    with open(_settings_path(), "w", encoding="utf-8") as fd:
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())


def core_for_playlist(playlist: str) -> str:
    """Return the path of the default core for a playlist.

    Raises LookupError when no core is configured for it.
    """
    core = current.core_for_playlist.get(playlist, "")
    if not core:
        raise LookupError("default core not set")
    return os.path.join(current.cores_directory, core + core_ext())