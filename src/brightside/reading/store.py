"""Append-only reading history persisted under a single storage key.

:class:`ReadingHistory` owns the read-modify-write cycle; the raw records
live behind a :class:`HistoryStorage` so the same logic runs against a JSON
file on disk or an in-memory list in tests. Nothing here raises on bad or
missing data: reads come back as :class:`HistoryLoadResult` and writes as
:class:`TrackResult`.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from brightside.clock import date_key, local_date, resolve_now, to_millis
from brightside.news.models import Category
from brightside.reading.insights import get_reading_stats
from brightside.reading.models import (
    HistoryLoadResult,
    ReadingEntry,
    ReadingStats,
    TrackResult,
)

logger = logging.getLogger(__name__)

HISTORY_FILENAME = ".reading-history.json"
DEFAULT_CALENDAR_DAYS = 90


class HistoryStorage(ABC):
    """Where the serialized history sequence lives."""

    @abstractmethod
    def load(self) -> Any:
        """Return the stored payload (a list of dicts), ``[]`` if nothing is stored."""

    @abstractmethod
    def save(self, records: list[dict[str, Any]]) -> None:
        """Replace the stored sequence with *records*."""


class JsonFileStorage(HistoryStorage):
    """History stored as a JSON array in one file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @classmethod
    def in_directory(cls, data_dir: Path, filename: str = HISTORY_FILENAME) -> JsonFileStorage:
        return cls(data_dir / filename)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Any:
        if not self._path.exists():
            return []
        return json.loads(self._path.read_text(encoding="utf-8"))

    def save(self, records: list[dict[str, Any]]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(records, indent=2), encoding="utf-8")


class MemoryStorage(HistoryStorage):
    """History held in process memory."""

    def __init__(self, records: list[dict[str, Any]] | None = None) -> None:
        self.records: list[dict[str, Any]] = list(records or [])

    def load(self) -> Any:
        return list(self.records)

    def save(self, records: list[dict[str, Any]]) -> None:
        self.records = list(records)


class ReadingHistory:
    """Device-local log of article reads, most recent first."""

    def __init__(self, storage: HistoryStorage) -> None:
        self._storage = storage

    def load(self) -> HistoryLoadResult:
        """Read and validate the stored history.

        Records that fail validation are skipped and counted in ``error``;
        the rest still load. Only an unreadable or non-list payload fails
        the whole load.
        """
        return self._load()[1]

    def _load(self) -> tuple[list[Any], HistoryLoadResult]:
        try:
            raw = self._storage.load()
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
            logger.warning("Unreadable reading history, treating as empty: %s", exc)
            return [], HistoryLoadResult(success=False, error=f"Unreadable history: {exc}")

        if not isinstance(raw, list):
            logger.warning("Reading history is not a list, treating as empty")
            return [], HistoryLoadResult(success=False, error="History payload is not a list")

        entries: list[ReadingEntry] = []
        skipped = 0
        for index, record in enumerate(raw):
            try:
                entries.append(ReadingEntry.model_validate(record))
            except ValidationError as exc:
                skipped += 1
                logger.warning(
                    "Skipping invalid reading history entry %d: %s", index, exc.errors()[:1]
                )

        if skipped:
            return raw, HistoryLoadResult(
                entries=entries, error=f"Skipped {skipped} invalid history entries"
            )
        return raw, HistoryLoadResult(entries=entries)

    def get_reading_history(self) -> list[ReadingEntry]:
        """All entries, most recent first; empty if storage is unreadable."""
        return self.load().entries

    def track_article_read(
        self,
        article_id: str,
        title: str,
        source: str,
        categories: list[Category],
        *,
        now: datetime | None = None,
    ) -> TrackResult:
        """Record that an article was opened.

        At most one entry is kept per article per local calendar day. An
        unreadable history is left untouched rather than overwritten, and
        stored records that fail validation are written back unchanged.
        """
        raw, loaded = self._load()
        if not loaded.success:
            return TrackResult(error=loaded.error)

        moment = resolve_now(now)
        today = date_key(local_date(moment))

        for entry in loaded.entries:
            if entry.article_id == article_id and entry.date == today:
                return TrackResult(created=False, entry=entry)

        entry = ReadingEntry(
            article_id=article_id,
            title=title,
            source=source,
            categories=list(dict.fromkeys(categories)),
            timestamp=to_millis(moment),
            date=today,
        )

        try:
            self._storage.save([entry.model_dump(mode="json", by_alias=True), *raw])
        except OSError as exc:
            logger.warning("Could not persist reading history: %s", exc)
            return TrackResult(entry=entry, error=f"Save failed: {exc}")

        logger.debug("Tracked read of %s on %s", article_id, today)
        return TrackResult(created=True, entry=entry)

    def get_reading_calendar(
        self, days: int = DEFAULT_CALENDAR_DAYS, *, today: date | None = None
    ) -> dict[str, int]:
        """Reads per day for the trailing *days* days, today first."""
        return build_reading_calendar(self.get_reading_history(), days, today=today)

    def get_reading_stats(self, *, now: datetime | None = None) -> ReadingStats:
        """Streaks, badges and counts for the stored history."""
        return get_reading_stats(self.get_reading_history(), now=now)


def build_reading_calendar(
    history: list[ReadingEntry], days: int = DEFAULT_CALENDAR_DAYS, *, today: date | None = None
) -> dict[str, int]:
    """Zero-filled date -> read count map for the trailing *days* days."""
    day = today if today is not None else local_date(resolve_now())
    calendar = {date_key(day - timedelta(days=offset)): 0 for offset in range(max(days, 0))}
    for entry in history:
        if entry.date in calendar:
            calendar[entry.date] += 1
    return calendar
