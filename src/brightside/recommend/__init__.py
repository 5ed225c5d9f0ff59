"""Recommendation domain: history-driven scoring of candidate articles."""

from brightside.recommend.engine import (
    RecommendationEngine,
    calculate_category_preferences,
    calculate_diversity_bonus,
    calculate_recency_bonus,
    calculate_source_preferences,
    calculate_streak_bonus,
    generate_recommendations,
    get_recommendation_insights,
    score_article,
)
from brightside.recommend.models import (
    CategoryPreference,
    RecommendationInsights,
    RecommendationScore,
    SourcePreference,
)

__all__ = [
    "CategoryPreference",
    "RecommendationEngine",
    "RecommendationInsights",
    "RecommendationScore",
    "SourcePreference",
    "calculate_category_preferences",
    "calculate_diversity_bonus",
    "calculate_recency_bonus",
    "calculate_source_preferences",
    "calculate_streak_bonus",
    "generate_recommendations",
    "get_recommendation_insights",
    "score_article",
]
