"""Output formatting for terminal tables."""

from poker_analyzer.formatters.table import TableFormatter

__all__ = ["TableFormatter"]
