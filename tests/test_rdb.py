import pytest

from ludo.rdb import Database, Game, parse

HEADER = b"RARCHDB\x00" + b"\x00" * 8


def fixstr(text: str) -> bytes:
    raw = text.encode()
    return bytes([0xA0 + len(raw)]) + raw


def test_parse_single_game():
    data = (
        HEADER
        + b"\x82"
        + fixstr("name")
        + fixstr("Foo")
        + fixstr("crc")
        + b"\xc4\x04\x01\x02\x03\x04"
        + b"\xc0"
    )
    assert parse(data) == [Game(name="Foo", crc32=0x01020304)]


def test_parse_two_games_with_numbers_and_str8():
    data = (
        HEADER
        + b"\x83"
        + fixstr("name")
        + fixstr("First")
        + fixstr("releaseyear")
        + b"\xcc\x07"
        + fixstr("rumble")
        + fixstr("x")
        + b"\x82"
        + fixstr("rom_name")
        + b"\xd9\x08second.a"
        + fixstr("size")
        + b"\xcd\x01\x00"
        + b"\xc0"
    )
    games = parse(data)
    assert games == [
        Game(name="First", release_year=7, rumble=True),
        Game(rom_name="second.a", size=0x0100),
    ]


def test_parse_empty_database():
    assert parse(HEADER + b"\xc0") == []


def test_parse_truncated_raises():
    with pytest.raises(ValueError):
        parse(HEADER + b"\x81" + fixstr("name") + b"\xa5ab")


def test_parse_unsupported_type_raises():
    with pytest.raises(ValueError):
        parse(HEADER + b"\x81" + fixstr("name") + b"\xc3")


def test_set_field_text_and_unknown_key():
    game = Game()
    game.set_field("genre", b"Platform")
    game.set_field("unknown", b"ignored")
    assert game == Game(genre="Platform")


def test_set_field_number_empty_is_zero():
    game = Game(crc32=5)
    game.set_field("crc", b"")
    assert game.crc32 == 0


def test_set_field_number_clamps_to_32_bits():
    game = Game()
    game.set_field("size", b"\x01\x00\x00\x00\x00")
    assert game.size == 0xFFFFFFFF


def test_is_empty():
    assert Game().is_empty()
    assert not Game(rumble=True).is_empty()


def make_db() -> Database:
    return Database(
        {
            "Sega - Game Gear": [Game(name="Alpha", crc32=10, rom_name="alpha.gg")],
            "Sega - 32X": [
                Game(name="Beta", crc32=20, rom_name="beta.32x"),
                Game(name="Gamma", crc32=10, rom_name="gamma.32x"),
            ],
        }
    )


def test_find_by_crc():
    matches = make_db().find_by_crc("/roms/x.zip", "x.gg", 10)
    assert sorted(matches, key=lambda g: g.name) == [
        Game(path="/roms/x.zip", rom_name="x.gg", name="Alpha", crc32=10, system="Sega - Game Gear"),
        Game(path="/roms/x.zip", rom_name="x.gg", name="Gamma", crc32=10, system="Sega - 32X"),
    ]


def test_find_by_crc_no_match():
    assert make_db().find_by_crc("/roms/x.zip", "x.gg", 99) == []


def test_find_by_rom_name():
    matches = make_db().find_by_rom_name("/roms/beta.32x", "beta.32x", 0)
    assert matches == [
        Game(path="/roms/beta.32x", rom_name="beta.32x", name="Beta", crc32=0, system="Sega - 32X")
    ]