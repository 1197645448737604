"""Game database parsing, ROM scanning, playlists, settings, core options and save data for a libretro frontend."""

__version__ = "0.1.0"