"""Parser for rdb files, the binary game databases of libretro."""

from __future__ import annotations

from dataclasses import dataclass

_FIX_MAP = 0x80
_FIX_ARRAY = 0x90
_FIX_STR = 0xA0
_NIL = 0xC0
_BIN8, _BIN16, _BIN32 = 0xC4, 0xC5, 0xC6
_UINT8, _UINT16, _UINT32, _UINT64 = 0xCC, 0xCD, 0xCE, 0xCF
_STR8, _STR16, _STR32 = 0xD9, 0xDA, 0xDB
_MAP16, _MAP32 = 0xDE, 0xDF

_HEADER_SIZE = 0x10
_UINT32_MAX = 0xFFFFFFFF

_TEXT_FIELDS = {
    "name": "name",
    "description": "description",
    "genre": "genre",
    "developer": "developer",
    "publisher": "publisher",
    "franchise": "franchise",
    "origin": "origin",
    "serial": "serial",
    "rom_name": "rom_name",
}

_NUMBER_FIELDS = {
    "size": "size",
    "releasemonth": "release_month",
    "releaseyear": "release_year",
    "crc": "crc32",
}


def _to_uint32(value: bytes) -> int:
    if not value:
        return 0
    return min(int.from_bytes(value, "big"), _UINT32_MAX)


@dataclass
class Game:
    """A game entry of the database."""

    path: str = ""
    name: str = ""
    description: str = ""
    genre: str = ""
    developer: str = ""
    publisher: str = ""
    franchise: str = ""
    origin: str = ""
    rumble: bool = False
    serial: str = ""
    rom_name: str = ""
    release_month: int = 0
    release_year: int = 0
    size: int = 0
    crc32: int = 0
    system: str = ""

    def set_field(self, key: str, value: bytes | str) -> None:
        """Set the field named by an rdb key from its raw value."""
        if isinstance(value, str):
            value = value.encode("utf-8")
        if key in _TEXT_FIELDS:
            setattr(self, _TEXT_FIELDS[key], value.decode("utf-8", errors="replace"))
        elif key == "rumble":
            self.rumble = True
        elif key in _NUMBER_FIELDS:
            setattr(self, _NUMBER_FIELDS[key], _to_uint32(value))

    def is_empty(self) -> bool:
        """Tell whether no field has been set."""
        return self == Game()


class _Reader:
    def __init__(self, data: bytes) -> None:
        self.data = data
        self.pos = _HEADER_SIZE

    def byte(self) -> int:
        if self.pos >= len(self.data):
            raise ValueError(f"truncated rdb data at offset {self.pos}")
        return self.data[self.pos]

    def take(self, length: int) -> bytes:
        end = self.pos + length
        if length < 0 or end > len(self.data):
            raise ValueError(f"truncated rdb data at offset {self.pos}")
        chunk = bytes(self.data[self.pos:end])
        self.pos = end
        return chunk


def parse(data: bytes) -> list[Game]:
    """Parse the content of an rdb file into a list of games."""
    reader = _Reader(data)
    output: list[Game] = []
    is_key = False
    key = ""
    game = Game()

    while (field_type := reader.byte()) != _NIL:
        value = b""
        if field_type < _FIX_MAP:
            raise ValueError(f"unsupported rdb field type 0x{field_type:02x}")
        if field_type < _FIX_ARRAY:
            if not game.is_empty():
                output.append(game)
            game = Game()
            reader.pos += 1
            is_key = True
            continue
        if field_type < _FIX_STR:
            raise ValueError(f"unsupported rdb field type 0x{field_type:02x}")
        if field_type < _NIL:
            reader.pos += 1
            value = reader.take(field_type - _FIX_STR)
        elif field_type in (_STR8, _STR16, _STR32):
            reader.pos += 1
            length_size = field_type - _STR8 + 1
            length = int.from_bytes(reader.take(length_size), "big")
            value = reader.take(length)
        elif field_type in (_UINT8, _UINT16, _UINT32, _UINT64):
            reader.pos += 1
            value = reader.take(2 ** (field_type - 0xC9) // 8)
        elif field_type in (_BIN8, _BIN16, _BIN32):
            reader.pos += 1
            length = reader.byte()
            reader.pos += 1
            value = reader.take(length)
        elif field_type in (_MAP16, _MAP32):
            reader.pos += 1
            value = reader.take(4 if field_type == _MAP32 else 2)
            is_key = True
        else:
            raise ValueError(f"unsupported rdb field type 0x{field_type:02x}")

        if is_key:
            key = value.decode("utf-8", errors="replace")
        else:
            game.set_field(key, value)
        is_key = not is_key

    if not game.is_empty():
        output.append(game)
    return output


class Database(dict):
    """Game lists of several systems, keyed by system name."""

    def _matches(self, rom_path: str, rom_name: str, crc32: int, predicate) -> list[Game]:
        return [
            Game(path=rom_path, rom_name=rom_name, name=game.name, crc32=crc32, system=system)
            for system, games in self.items()
            for game in games
            if predicate(game)
        ]

    def find_by_crc(self, rom_path: str, rom_name: str, crc32: int) -> list[Game]:
        """Return a match for every database game with the given checksum."""
        return self._matches(rom_path, rom_name, crc32, lambda game: game.crc32 == crc32)

    def find_by_rom_name(self, rom_path: str, rom_name: str, crc32: int) -> list[Game]:
        """Return a match for every database game with the given ROM name."""
        return self._matches(rom_path, rom_name, crc32, lambda game: game.rom_name == rom_name)