"""Reading-history domain: the persisted read log and the insights derived from it."""

from brightside.reading.insights import (
    calculate_badges,
    calculate_streak,
    count_categories,
    get_reading_stats,
)
from brightside.reading.models import (
    Badge,
    CategoryCount,
    HistoryLoadResult,
    ReadingEntry,
    ReadingStats,
    StreakSummary,
    TrackResult,
)
from brightside.reading.store import (
    HISTORY_FILENAME,
    HistoryStorage,
    JsonFileStorage,
    MemoryStorage,
    ReadingHistory,
    build_reading_calendar,
)

__all__ = [
    # models
    "Badge",
    "CategoryCount",
    "HistoryLoadResult",
    "ReadingEntry",
    "ReadingStats",
    "StreakSummary",
    "TrackResult",
    # store
    "HISTORY_FILENAME",
    "HistoryStorage",
    "JsonFileStorage",
    "MemoryStorage",
    "ReadingHistory",
    "build_reading_calendar",
    # insights
    "calculate_badges",
    "calculate_streak",
    "count_categories",
    "get_reading_stats",
]
