"""In-memory windows and images, colour names, XPM loading, event hooks and tile-map drawing."""

__version__ = "0.1.0"
__all__ = ["colors", "wordtab", "image", "xpm", "events", "display", "game"]