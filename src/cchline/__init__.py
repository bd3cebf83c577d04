"""cchline - a configurable status line for Claude Code."""

__version__ = "0.3.0"
