"""Utility subpackage for the TSB homebank client."""

from .trace import DebugTrace, save_file

__all__ = [
    "DebugTrace",
    "save_file",
]
