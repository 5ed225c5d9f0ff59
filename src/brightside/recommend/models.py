"""Pure data models for recommendations. Derived per call, never persisted."""

from __future__ import annotations

from pydantic import BaseModel, Field

from brightside.news.models import Article, Category
from brightside.reading.models import CategoryCount


class CategoryPreference(BaseModel):
    """Share of reads in a category, overall and over the last week."""

    category: Category
    weight: float
    recent_boost: float = 0.0


class SourcePreference(BaseModel):
    source: str
    weight: float


class RecommendationScore(BaseModel):
    """A scored candidate and the reasons behind the score."""

    article: Article
    score: float
    reasons: list[str] = Field(default_factory=list)


class RecommendationInsights(BaseModel):
    top_reasons: list[str] = Field(default_factory=list)
    avg_score: float = 0.0
    category_distribution: list[CategoryCount] = Field(default_factory=list)
