"""Selection algebra and set operations for Kakoune multi-selections."""

__all__ = [
    "selection",
    "host",
    "commands",
    "runtime",
    "cli",
    "config",
]

__version__ = "0.1.0"
