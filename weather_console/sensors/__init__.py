"""History source interfaces (remote bulk fetch)."""

from .history import HistoryFetchError, HistoryResult, HistoryRow, HistorySource, StaticHistorySource

__all__ = ["HistoryFetchError", "HistoryResult", "HistoryRow", "HistorySource", "StaticHistorySource"]
