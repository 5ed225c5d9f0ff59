"""Personalized scoring of candidate articles from local reading history.

The score for an unread candidate is::

    sum over its categories of (weight * 40 + recent_boost * 20)
    + source_weight * 15
    + recency bonus + diversity bonus + streak bonus

clamped to 100. Weights are the share of all reads in that category or
source; ``recent_boost`` is the share of last-7-day reads in the category.
Everything is a pure function of (history, candidates, now).
"""

from __future__ import annotations

from collections import Counter
from datetime import date, datetime, timedelta

from brightside.clock import date_key, ensure_aware, local_date, resolve_now, to_millis
from brightside.news.models import Article, Category
from brightside.reading.models import CategoryCount, ReadingEntry
from brightside.reading.store import ReadingHistory
from brightside.recommend.models import (
    CategoryPreference,
    RecommendationInsights,
    RecommendationScore,
    SourcePreference,
)

# Module-level defaults -------------------------------------------------------

CATEGORY_WEIGHT = 40.0
RECENT_CATEGORY_WEIGHT = 20.0
SOURCE_WEIGHT = 15.0
MAX_SCORE = 100.0
RECENT_WINDOW = timedelta(days=7)

COLD_START_SCORE = 0.5
COLD_START_REASON = "New user - showing popular articles"
FALLBACK_REASON = "Recommended based on your reading profile"

# (hours since publish upper bound, bonus); first strict match wins
RECENCY_BONUSES: tuple[tuple[float, float], ...] = ((6, 10), (24, 7), (48, 4), (72, 2))

DIVERSITY_BONUS = 5.0
DIVERSITY_MIN_HISTORY = 5

STREAK_CONTINUE_BONUS = 8.0
STREAK_RESTART_BONUS = 3.0

# Components must exceed these to produce a reason
_CATEGORY_REASON_THRESHOLD = 5.0
_SOURCE_REASON_THRESHOLD = 3.0
_RECENCY_REASON_THRESHOLD = 5.0

TOP_REASON_LIMIT = 3


# -- preferences ---------------------------------------------------------------


def calculate_category_preferences(
    history: list[ReadingEntry], *, now: datetime | None = None
) -> list[CategoryPreference]:
    """Per-category share of all reads and of reads in the last 7 days."""
    if not history:
        return []

    week_ago = to_millis(resolve_now(now) - RECENT_WINDOW)
    counts: Counter[Category] = Counter()
    recent_counts: Counter[Category] = Counter()
    recent_reads = 0

    for entry in history:
        is_recent = entry.timestamp > week_ago
        if is_recent:
            recent_reads += 1
        for category in entry.categories:
            counts[category] += 1
            if is_recent:
                recent_counts[category] += 1

    total = len(history)
    return [
        CategoryPreference(
            category=category,
            weight=count / total,
            recent_boost=recent_counts[category] / recent_reads if recent_reads else 0.0,
        )
        for category, count in counts.items()
    ]


def calculate_source_preferences(history: list[ReadingEntry]) -> list[SourcePreference]:
    """Per-source share of all reads."""
    if not history:
        return []
    counts = Counter(entry.source for entry in history)
    total = len(history)
    return [SourcePreference(source=source, weight=n / total) for source, n in counts.items()]


# -- bonuses -------------------------------------------------------------------


def calculate_recency_bonus(published_at: datetime, *, now: datetime | None = None) -> float:
    """Bonus for fresh articles: 10 under 6h, 7 under 24h, 4 under 48h, 2 under 72h."""
    reference = ensure_aware(resolve_now(now))
    hours = (reference - ensure_aware(published_at)).total_seconds() / 3600.0
    for limit, bonus in RECENCY_BONUSES:
        if hours < limit:
            return bonus
    return 0.0


def calculate_diversity_bonus(
    article: Article,
    history: list[ReadingEntry],
    *,
    read_categories: set[Category] | None = None,
) -> float:
    """Bonus for articles that introduce a category the reader has never read.

    Only applies once the reader has more than a handful of reads.
    """
    if len(history) <= DIVERSITY_MIN_HISTORY:
        return 0.0
    seen = read_categories
    if seen is None:
        seen = {cat for entry in history for cat in entry.categories}
    if any(cat not in seen for cat in article.categories):
        return DIVERSITY_BONUS
    return 0.0


def calculate_streak_bonus(history: list[ReadingEntry], *, today: date | None = None) -> float:
    """0 if already read today, 8 if read yesterday (keep the streak), else 3."""
    if not history:
        return 0.0
    day = today if today is not None else local_date(resolve_now())
    today_key = date_key(day)
    yesterday_key = date_key(day - timedelta(days=1))
    dates = {entry.date for entry in history}
    if today_key in dates:
        return 0.0
    if yesterday_key in dates:
        return STREAK_CONTINUE_BONUS
    return STREAK_RESTART_BONUS


# -- scoring -------------------------------------------------------------------


def score_article(
    article: Article,
    category_preferences: dict[Category, CategoryPreference],
    source_preferences: dict[str, SourcePreference],
    *,
    recency_bonus: float,
    diversity_bonus: float,
    streak_bonus: float,
) -> RecommendationScore:
    """Combine preference components and bonuses into a scored candidate."""
    reasons: list[str] = []

    category_scores: list[tuple[Category, float]] = []
    for category in article.categories:
        pref = category_preferences.get(category)
        if pref is None:
            category_scores.append((category, 0.0))
        else:
            category_scores.append(
                (category, pref.weight * CATEGORY_WEIGHT + pref.recent_boost * RECENT_CATEGORY_WEIGHT)
            )
    score = sum(s for _, s in category_scores)

    if category_scores:
        top_category, top_score = sorted(category_scores, key=lambda cs: cs[1], reverse=True)[0]
        if top_score > _CATEGORY_REASON_THRESHOLD:
            reasons.append(f"Matches your interest in {top_category}")

    source_pref = source_preferences.get(article.source)
    if source_pref is not None:
        source_score = source_pref.weight * SOURCE_WEIGHT
        score += source_score
        if source_score > _SOURCE_REASON_THRESHOLD:
            reasons.append(f"From {article.source}, a source you read often")

    score += recency_bonus
    if recency_bonus > _RECENCY_REASON_THRESHOLD:
        reasons.append("Recently published")

    score += diversity_bonus
    if diversity_bonus > 0:
        reasons.append("Explores new topics for you")

    score += streak_bonus

    if not reasons:
        reasons.append(FALLBACK_REASON)

    return RecommendationScore(article=article, score=min(score, MAX_SCORE), reasons=reasons)


def generate_recommendations(
    history: list[ReadingEntry],
    candidates: list[Article],
    limit: int = 10,
    *,
    now: datetime | None = None,
) -> list[RecommendationScore]:
    """Rank unread candidates for the reader, best first, at most *limit*.

    With no history, the first *limit* candidates are returned in input
    order at a flat score. Ties keep their input order.
    """
    if limit <= 0:
        return []

    if not history:
        return [
            RecommendationScore(article=article, score=COLD_START_SCORE, reasons=[COLD_START_REASON])
            for article in candidates[:limit]
        ]

    moment = resolve_now(now)
    category_prefs = {
        p.category: p for p in calculate_category_preferences(history, now=moment)
    }
    source_prefs = {p.source: p for p in calculate_source_preferences(history)}
    read_ids = {entry.article_id for entry in history}
    read_categories = {cat for entry in history for cat in entry.categories}
    streak_bonus = calculate_streak_bonus(history, today=local_date(moment))

    scored = [
        score_article(
            article,
            category_prefs,
            source_prefs,
            recency_bonus=calculate_recency_bonus(article.published_at, now=moment),
            diversity_bonus=calculate_diversity_bonus(
                article, history, read_categories=read_categories
            ),
            streak_bonus=streak_bonus,
        )
        for article in candidates
        if article.id not in read_ids
    ]
    scored.sort(key=lambda rec: rec.score, reverse=True)
    return scored[:limit]


def get_recommendation_insights(
    recommendations: list[RecommendationScore],
) -> RecommendationInsights:
    """Most common reasons, mean score and category mix of a recommendation list."""
    reason_counts: Counter[str] = Counter()
    category_counts: Counter[Category] = Counter()
    for rec in recommendations:
        reason_counts.update(rec.reasons)
        category_counts.update(rec.article.categories)

    avg_score = (
        sum(rec.score for rec in recommendations) / len(recommendations)
        if recommendations
        else 0.0
    )
    return RecommendationInsights(
        top_reasons=[reason for reason, _ in reason_counts.most_common(TOP_REASON_LIMIT)],
        avg_score=avg_score,
        category_distribution=[
            CategoryCount(category=cat, count=n) for cat, n in category_counts.most_common()
        ],
    )


class RecommendationEngine:
    """Recommendations backed by a :class:`ReadingHistory`.

    Reads history fresh on every call; nothing is cached between calls.
    """

    def __init__(self, history: ReadingHistory, *, now: datetime | None = None) -> None:
        self._history = history
        self._now = now

    def recommend(
        self, candidates: list[Article], limit: int = 10, *, now: datetime | None = None
    ) -> list[RecommendationScore]:
        return generate_recommendations(
            self._history.get_reading_history(),
            candidates,
            limit,
            now=now or self._now,
        )

    def insights(
        self, candidates: list[Article], limit: int = 10, *, now: datetime | None = None
    ) -> RecommendationInsights:
        return get_recommendation_insights(self.recommend(candidates, limit, now=now))
