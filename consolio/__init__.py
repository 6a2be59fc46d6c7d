"""Terminal styling, ANSI code handling, text measurement and terminal access."""

__version__ = "0.15.11"