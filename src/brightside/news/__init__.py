"""News domain: article models, keyword classification and content cleanup.

Public API re-exports for the news domain.
"""

from brightside.news.classifier import (
    DEFAULT_CLASSIFIER_CONFIG,
    ClassifierConfig,
    calculate_positivity_score,
    detect_categories,
    is_from_trusted_domain,
    is_quality_article,
    is_sports_or_entertainment,
)
from brightside.news.models import Article, Category, FetchResult
from brightside.news.reading_time import (
    ReadingSpeed,
    estimate_reading_time,
    get_word_count,
    words_per_minute,
)
from brightside.news.sanitizer import clean_article_content

__all__ = [
    # models
    "Article",
    "Category",
    "FetchResult",
    # classifier
    "ClassifierConfig",
    "DEFAULT_CLASSIFIER_CONFIG",
    "calculate_positivity_score",
    "detect_categories",
    "is_from_trusted_domain",
    "is_quality_article",
    "is_sports_or_entertainment",
    # sanitizer
    "clean_article_content",
    # reading time
    "ReadingSpeed",
    "estimate_reading_time",
    "get_word_count",
    "words_per_minute",
]
