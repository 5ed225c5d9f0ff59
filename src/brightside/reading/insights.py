"""Streaks, badges and category breakdowns derived from reading history."""

from __future__ import annotations

from collections import Counter
from datetime import date, datetime, timedelta

from brightside.clock import local_date, resolve_now, to_millis
from brightside.reading.models import (
    Badge,
    CategoryCount,
    ReadingEntry,
    ReadingStats,
    StreakSummary,
)

TOP_CATEGORY_LIMIT = 5
RECENT_HISTORY_LIMIT = 50

_DAY = timedelta(days=1)


def _distinct_dates(history: list[ReadingEntry]) -> list[date]:
    """Distinct entry dates, newest first. Unparseable dates are skipped."""
    dates: set[date] = set()
    for entry in history:
        try:
            dates.add(date.fromisoformat(entry.date))
        except ValueError:
            continue
    return sorted(dates, reverse=True)


def calculate_streak(history: list[ReadingEntry], *, today: date | None = None) -> StreakSummary:
    """Current and longest runs of consecutive reading days.

    The current streak only counts if the newest read was today or
    yesterday. The longest streak is the longest run anywhere in history.
    """
    dates = _distinct_dates(history)
    if not dates:
        return StreakSummary()

    day = today if today is not None else local_date(resolve_now())

    current = 0
    if dates[0] in (day, day - _DAY):
        current = 1
        for newer, older in zip(dates, dates[1:]):
            if newer - older != _DAY:
                break
            current += 1

    longest = 1
    run = 1
    for newer, older in zip(dates, dates[1:]):
        run = run + 1 if newer - older == _DAY else 1
        longest = max(longest, run)

    return StreakSummary(current=current, longest=max(longest, current))


def calculate_badges(
    total_read: int,
    current_streak: int,
    longest_streak: int,
    weekly_read: int,
) -> list[Badge]:
    """Evaluate every badge independently against the given counters."""
    return [
        Badge(
            id="first_article",
            name="First Steps",
            description="Read your first article",
            earned=total_read >= 1,
        ),
        Badge(
            id="streak_3",
            name="Consistent Reader",
            description="Maintain a 3-day reading streak",
            earned=current_streak >= 3,
        ),
        Badge(
            id="streak_7",
            name="Week Warrior",
            description="Maintain a 7-day reading streak",
            earned=current_streak >= 7,
        ),
        Badge(
            id="streak_30",
            name="Monthly Master",
            description="Maintain a 30-day reading streak",
            earned=longest_streak >= 30,
        ),
        Badge(
            id="articles_10",
            name="Getting Started",
            description="Read 10 articles",
            earned=total_read >= 10,
        ),
        Badge(
            id="articles_50",
            name="Knowledgeable",
            description="Read 50 articles",
            earned=total_read >= 50,
        ),
        Badge(
            id="articles_100",
            name="News Enthusiast",
            description="Read 100 articles",
            earned=total_read >= 100,
        ),
        Badge(
            id="weekly_10",
            name="Weekly Reader",
            description="Read 10 articles in a week",
            earned=weekly_read >= 10,
        ),
    ]


def count_categories(history: list[ReadingEntry]) -> list[CategoryCount]:
    """Category read counts, highest first; ties keep first-seen order."""
    counts: Counter[str] = Counter()
    for entry in history:
        counts.update(entry.categories)
    return [CategoryCount(category=cat, count=n) for cat, n in counts.most_common()]


def get_reading_stats(history: list[ReadingEntry], *, now: datetime | None = None) -> ReadingStats:
    """Summarize *history* (most recent first) as of *now*."""
    moment = resolve_now(now)
    now_ms = to_millis(moment)
    week_ago = now_ms - 7 * 24 * 60 * 60 * 1000
    month_ago = now_ms - 30 * 24 * 60 * 60 * 1000

    streaks = calculate_streak(history, today=local_date(moment))
    this_week = sum(1 for e in history if e.timestamp > week_ago)
    this_month = sum(1 for e in history if e.timestamp > month_ago)

    return ReadingStats(
        total_articles_read=len(history),
        current_streak=streaks.current,
        longest_streak=streaks.longest,
        articles_this_week=this_week,
        articles_this_month=this_month,
        top_categories=count_categories(history)[:TOP_CATEGORY_LIMIT],
        reading_history=history[:RECENT_HISTORY_LIMIT],
        last_read_date=history[0].date if history else None,
        badges=calculate_badges(len(history), streaks.current, streaks.longest, this_week),
    )
