# ludo

A library for the bookkeeping side of a libretro-based emulator frontend.
It reads the game database and scans a ROM collection against it. It keeps
playlists, persists settings and core options, and stores save RAM and
savestates. It has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `ludo.rdb`

This module parses `.rdb` game database files.

- `parse(data)` takes the bytes of a file and returns a list of `Game`
  records. It raises `ValueError` on truncated data or an unsupported field
  type.
- `Game` is a dataclass with fields such as `name`, `rom_name`, `crc32`,
  `serial`, `release_year` and `system`. `set_field(key, value)` sets a field
  from its rdb key, and `is_empty()` tells whether no field is set.
- `Database` is a `dict` that maps system names to lists of games.
  `find_by_crc(rom_path, rom_name, crc32)` and
  `find_by_rom_name(rom_path, rom_name, crc32)` return a new `Game` for
  every match. Each result carries the ROM path, the ROM name, the matched
  game's name, the checksum and the system.

### `ludo.scanner`

- `load_db(directory)` parses every `.rdb` file in a directory into a
  `Database`. The file name, without its extension, is the key.
- `scan(directory, roms, nid)` is a generator over the paths in `roms`. It
  yields the database matches found in `ludo.state.global_state.db`:
  - `.zip` archives and known ROM extensions are matched by CRC32.
  - `.cue` sheets are matched by file name.
  
  Progress and errors are reported on the notification `nid`.
- `write_game(game)` appends `path<TAB>name<TAB>crc` to
  `<playlists_directory>/<system>.csv`. It skips games that the loaded
  playlist already holds and returns whether it wrote a line.
- `scan_dir(directory, done_cb)` lists the files of a directory. It then
  scans them and writes the playlists on a background thread, and calls
  `done_cb` when finished. It returns the thread, or `None` when the
  directory cannot be listed.

### `ludo.playlists`

Playlists are tab-separated files with one game per line: path, name and
hexadecimal CRC32.

- `load()` reads every `*.csv` file in the configured playlists directory
  into the `playlists` dict, keyed by file path. Each value is a list of
  `Entry` records.
- `contains(csv_path, path, crc32)` tells whether a playlist holds a game.
  It matches on the path, or on the checksum when the checksum is not zero.
- `count(path)` returns the number of games in a loaded playlist.
- `short_name(name)` returns a shorter display name for a system, for
  example `"Sega - Mega Drive - Genesis"` becomes `"Mega Drive / Genesis"`.
  It returns the name unchanged when it has no shorter one.

### `ludo.settings`

- `Settings` is a dataclass of every setting. Its field metadata carries the
  JSON key and display hints. `to_dict()` returns the settings keyed by JSON
  name. `update_from_dict(data)` applies a JSON object and raises
  `ValueError` when a value has the wrong type.
- `default_settings()` builds the defaults. The user directories live under
  `~/.ludo`.
- `current` holds the settings in use and `defaults` holds the defaults.
- `load()` resets `current` to the defaults and then applies two files:
  - `/etc/ludo.json`, when it exists;
  - `~/.ludo/settings.json`.
  
  It raises when the user file is missing or invalid. In every case it then
  writes the settings back with `save()`.
- `save()` writes `current` to `~/.ludo/settings.json`.
- `core_for_playlist(playlist)` returns the path of the default core for a
  system, including the platform's library extension. It raises
  `LookupError` when no core is set.
- `config_dir()` returns `~/.ludo`.

### `ludo.options`

- `Variable` is one core option. Its current value is
  `choices[choice]`.
- `Options(variables)` copies a core's variables and applies the choices
  saved in `~/.ludo/<core name>.json`. The core is named after
  `global_state.core_path`. A missing file leaves every variable on its
  first choice.
- `save()` writes the current choices back to that file.

### `ludo.notifications`

This module keeps toast messages, each with a `Severity` (`INFO`, `SUCCESS`,
`WARNING`, `ERROR`) and a lifetime in seconds.

- `display(severity, message, duration)` returns the new notification's id.
- `display_and_log(severity, prefix, message, *args)` formats the message
  with `%` and shows it for `MEDIUM` (4) seconds. In verbose mode it also
  logs the message.
- `update(nid, severity, message, *args)` changes a notification and
  restarts its timer.
- `process(dt)` ages every notification by `dt` and drops the expired ones.
- `list_all()` returns the current notifications and `clear()` removes them.

### `ludo.savefiles` and `ludo.savestates`

These modules work on the core object in `global_state.core`.

- `savefiles.save_sram()` and `savefiles.load_sram()` write and read the save
  RAM of the running game at `savefiles.sram_path()`, which is
  `<game name>.srm` in the savefiles directory. The core must provide
  `get_memory_size(kind)` and `get_memory_data(kind)`, the latter returning a
  writable buffer. Both functions raise `RuntimeError` when no core is
  running or no save RAM is available.
- `savestates.save(name)` writes `<name>.state` to the savestates directory.
  `savestates.load(path)` restores a state from a file. The core must provide
  `serialize_size()`, `serialize(size)` and `unserialize(data, size)`.

### `ludo.geometry`

This module holds the layout maths used for drawing:

- `xywh_to_4points(x, y, w, h, fbh)` returns the corners of a rectangle.
- `vertex_array(x, y, w, h, scale, fb_width, fb_height)` returns the clip
  space X, Y, U, V triangle strip.
- `core_ratio_viewport(fb_width, fb_height, aspect_ratio, base_width, base_height)`
  returns the centred area that keeps the game's aspect ratio.
- `glsl_version(gl_version)` returns the GLSL version for an OpenGL version.
- `filter_mode(name)` returns the texture filter and shader program for a
  video filter name.
- `Color` is an RGBA value.

### `ludo.state` and `ludo.utils`

- `ludo.state.global_state` is the application-wide `State`. It holds the
  loaded core, the game path, the database and the verbose flag. It is usable
  as a context manager for locking, and `reset()` restores every field to its
  default.
- `ludo.utils` has these helpers:
  - `file_name`
  - `dated_name`
  - `index_of_string`
  - `all_files_in`
  - `core_ext`
  - `lines_in_file`

## Example

```python
from ludo import rdb, playlists

with open("database/Sega - Master System - Mark III.rdb", "rb") as fh:
    games = rdb.parse(fh.read())

print(len(games), "games")
print(playlists.short_name("Sega - Mega Drive - Genesis"))  # Mega Drive / Genesis
```

## What this package does not do

- It does not load or run libretro cores. Save RAM and savestates work
  through a core object that you supply.
- It does not open a window, render video, play audio or read input.
  `ludo.geometry` only computes coordinates and picks names.
- It provides no menu and no command-line program.