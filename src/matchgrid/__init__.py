"""matchgrid — headless core of a memory-matching ("pairs") game."""

__version__ = "0.1.0"
