"""Tile maps for a small collect-and-exit game, and drawing them on a display."""

from __future__ import annotations

from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

from minigfx.display import Display, Window
from minigfx.image import Image
from minigfx.xpm import XpmError

TILE_SIZE = 64
MAX_MAP_BYTES = 9999
WINDOW_TITLE = "so_long"
TEXT_COLOR = 0xA832A2

# Texture names and the files they are loaded from, in loading order.
TEXTURE_FILES: dict[str, str] = {
    "player_left": "player_l.xpm",
    "player_right": "player_r.xpm",
    "one": "one.xpm",
    "enemy": "enemy.xpm",
    "exit1": "exit1.xpm",
    "exit2": "exit2.xpm",
    "exit3": "exit3.xpm",
    "zero": "zero.xpm",
    "collect": "collect.xpm",
}

_TILE_TEXTURES = {"1": "one", "0": "zero", "E": "zero", "C": "collect", "N": "enemy"}


class MapError(Exception):
    """Raised when a map cannot be read or a game resource cannot be loaded."""


def has_two_newlines(text: str) -> bool:
    """Tell whether the map text holds an empty line between its first and last rows."""
    return "\n\n" in text.strip("\n")


def read_map(path: str | PathLike[str]) -> list[str]:
    """Read a map file and return its non-empty rows.

    Only the first 9999 bytes of the file are read.
    """
    try:
        with open(path, "rb") as stream:
            raw = stream.read(MAX_MAP_BYTES)
    except OSError as exc:
        raise MapError("read error!") from exc
    if not raw:
        raise MapError("read error!")
    text = raw.decode("latin-1")
    if has_two_newlines(text):
        raise MapError("newline founded inside the map!")
    return [row for row in text.split("\n") if row]


@dataclass(eq=False)
class Game:
    """Game state: the tile grid, the player, counters and display resources."""

    grid: list[list[str]] = field(default_factory=list)
    player_count: int = 0
    collect_count: int = 0
    exit_count: int = 0
    enemy_count: int = 0
    collected: int = 0
    img_pxl: int = TILE_SIZE
    player_x: int = 0
    player_y: int = 0
    exit_x: int = 0
    exit_y: int = 0
    moves: int = 0
    direction: int = 1
    frame: int = -1
    cords: list[tuple[int, int]] | None = None
    display: Display | None = None
    window: Window | None = None
    textures: dict[str, Image] = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str | PathLike[str]) -> Game:
        """Create a game from a map file."""
        return cls(grid=[list(row) for row in read_map(path)])

    def map_height(self) -> int:
        """Number of rows in the map."""
        return len(self.grid)

    def map_width(self) -> int:
        """Length of the first row of the map, or 0 for an empty map."""
        return len(self.grid[0]) if self.grid else 0

    def open_window(self, display: Display) -> Window:
        """Open a window one tile per map cell on ``display``."""
        self.display = display
        self.window = display.new_window(
            self.map_width() * TILE_SIZE, self.map_height() * TILE_SIZE, WINDOW_TITLE
        )
        return self.window

    def load_textures(self, image_dir: str | PathLike[str] = "img") -> None:
        """Load every tile texture from ``image_dir`` and draw the map."""
        display, _ = self._require_window()
        directory = Path(image_dir)
        for name, filename in TEXTURE_FILES.items():
            try:
                self.textures[name] = display.xpm_file_to_image(directory / filename)
            except (OSError, XpmError) as exc:
                raise MapError("Failed to load texture!") from exc
        self.draw_map()

    def draw_map(self) -> None:
        """Draw every tile of the map and the move counter."""
        display, window = self._require_window()
        if not self.textures:
            raise RuntimeError("textures are not loaded")
        width = self.map_width()
        for y, row in enumerate(self.grid):
            for x, tile in enumerate(row[:width]):
                name = self._texture_for(tile)
                if name is not None:
                    display.put_image(window, self.textures[name],
                                      x * TILE_SIZE, y * TILE_SIZE)
        self.print_move()

    def print_move(self) -> None:
        """Write the move counter into the window."""
        display, window = self._require_window()
        display.string_put(window, 32, 32, TEXT_COLOR, "MOVES:")
        display.string_put(window, 80, 32, TEXT_COLOR, str(self.moves))

    def _texture_for(self, tile: str) -> str | None:
        if tile == "P":
            if self.direction == 1:
                return "player_right"
            if self.direction == 0:
                return "player_left"
            return None
        return _TILE_TEXTURES.get(tile)

    def _require_window(self) -> tuple[Display, Window]:
        if self.display is None or self.window is None:
            raise RuntimeError("the game window is not open")
        return self.display, self.window