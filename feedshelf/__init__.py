"""feedshelf - a personal RSS/Atom reader."""

__version__ = "0.1.0"
