[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ludo"
version = "0.1.0"
description = "Game library bookkeeping for a libretro frontend: game database parsing, ROM scanning, playlists, settings, core options and save data"
requires-python = ">=3.10"
dependencies = []
keywords = ["emulation", "libretro", "rdb", "playlists", "roms", "savestates"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ludo"]

[tool.pytest.ini_options]
addopts = "-ra"
