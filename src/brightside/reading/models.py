"""Pure data models for the reading-history domain.

All Pydantic models live here. No I/O, no business logic.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from brightside.news.models import Category


class ReadingEntry(BaseModel):
    """One "article read" event.

    Serialized with camelCase keys (``articleId``) so history files written
    by the web front end load unchanged. ``date`` is the local calendar
    date of ``timestamp`` (epoch milliseconds).
    """

    model_config = ConfigDict(populate_by_name=True)

    article_id: str = Field(alias="articleId")
    title: str = ""
    source: str = ""
    categories: list[Category] = Field(default_factory=list)
    timestamp: int
    date: str


class HistoryLoadResult(BaseModel):
    """Result of reading the persisted history.

    ``success`` is False when storage was unreadable; ``entries`` is then
    empty and ``error`` says why. Individual records that fail validation
    are skipped with ``success`` still True and a count in ``error``.
    """

    entries: list[ReadingEntry] = Field(default_factory=list)
    success: bool = True
    error: str = ""


class TrackResult(BaseModel):
    """Result of a ``track_article_read`` call."""

    created: bool = False
    entry: ReadingEntry | None = None
    error: str = ""


class Badge(BaseModel):
    """A reading achievement."""

    id: str
    name: str
    description: str
    earned: bool = False
    earned_date: str | None = None


class CategoryCount(BaseModel):
    category: Category
    count: int


class StreakSummary(BaseModel):
    current: int = 0
    longest: int = 0


class ReadingStats(BaseModel):
    """Aggregate reading statistics derived from history."""

    total_articles_read: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    articles_this_week: int = 0
    articles_this_month: int = 0
    top_categories: list[CategoryCount] = Field(default_factory=list)
    reading_history: list[ReadingEntry] = Field(default_factory=list)
    last_read_date: str | None = None
    badges: list[Badge] = Field(default_factory=list)

    @property
    def earned_badges(self) -> list[Badge]:
        return [b for b in self.badges if b.earned]
