[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minigfx"
version = "0.1.0"
description = "An in-memory windowing and image library with X11 colour names, XPM loading, event hooks and a tile-map renderer"
requires-python = ">=3.10"
dependencies = []
keywords = ["graphics", "xpm", "window", "events", "tilemap", "colors"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["minigfx"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
