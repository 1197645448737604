import os

import pytest

from ludo import playlists, settings

ROMS = "/home/player/testroms/Sega - Master System - Mark III"
CSV_NAME = "Sega - Master System - Mark III.csv"
CSV_PATH = os.path.join("testdata", CSV_NAME)

GAMES = [
    (ROMS + "/Aleste (Japan).zip", "Aleste (Japan)", 3636729435),
    (
        ROMS + "/Alex Kidd in Miracle World (USA, Europe) (Rev 1).zip",
        "Alex Kidd in Miracle World (USA, Europe, Brazil) (Rev 1)",
        2933500612,
    ),
    (
        ROMS + "/Aztec Adventure - The Golden Road to Paradise (World).zip",
        "Aztec Adventure (World)",
        4284567219,
    ),
]


@pytest.fixture
def playlist_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    directory = tmp_path / "testdata"
    directory.mkdir()
    lines = "".join(f"{path}\t{name}\t{crc:x}\n" for path, name, crc in GAMES)
    (directory / CSV_NAME).write_text(lines, encoding="utf-8")
    monkeypatch.setattr(settings.current, "playlists_directory", "./testdata")
    playlists.load()
    yield directory
    playlists.playlists.clear()


def test_load(playlist_dir):
    assert playlists.playlists == {
        CSV_PATH: [
            playlists.Entry(os.path.normpath(path), name, crc) for path, name, crc in GAMES
        ]
    }


def test_contains_by_path(playlist_dir):
    assert playlists.contains(
        "testdata/Sega - Master System - Mark III.csv",
        ROMS + "/Alex Kidd in Miracle World (USA, Europe) (Rev 1).zip",
        0,
    )


def test_contains_by_crc(playlist_dir):
    assert playlists.contains("testdata/Sega - Master System - Mark III.csv", "", 2933500612)


def test_contains_no_false_positive(playlist_dir):
    assert not playlists.contains("testdata/Sega - Master System - Mark III.csv", "", 2933500613)


def test_count(playlist_dir):
    assert playlists.count("testdata/Sega - Master System - Mark III.csv") == 3


def test_count_unknown_playlist(playlist_dir):
    assert playlists.count("testdata/Unknown.csv") == 0


def test_invalid_crc_becomes_zero(playlist_dir):
    (playlist_dir / "Other.csv").write_text("/roms/a.zip\tA\tnothex\n", encoding="utf-8")
    playlists.load()
    assert playlists.playlists[os.path.join("testdata", "Other.csv")] == [
        playlists.Entry("/roms/a.zip", "A", 0)
    ]


def test_missing_directory_empties_playlists(playlist_dir, monkeypatch):
    monkeypatch.setattr(settings.current, "playlists_directory", "./missing")
    playlists.load()
    assert playlists.count(CSV_PATH) == 0
    assert not playlists.contains(CSV_PATH, "", 2933500612)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Sega - 32X", "32X"),
        ("FB Alpha - Arcade Games", "Arcade (FB Alpha)"),
        ("NEC - PC Engine - TurboGrafx 16", "TurboGrafx-16"),
        ("Nintendo - Super Nintendo Entertainment System", "Super Nintendo"),
        ("Atari - Lynx", "Atari Lynx"),
        ("Magnavox - Odyssey2", "Magnavox Odyssey²"),
        ("Uzebox", "Uzebox"),
        ("Unknown System", "Unknown System"),
    ],
)
def test_short_name(name, expected):
    assert playlists.short_name(name) == expected