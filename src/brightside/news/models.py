"""Pure data models for news articles.

No I/O and no business logic. Classifier, sanitizer and source modules
import from here; this module only imports from stdlib and pydantic.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class Category(StrEnum):
    """Closed set of topical categories an article can belong to."""

    SCIENCE_INNOVATION = "science-innovation"
    ENVIRONMENT = "environment"
    COMMUNITY = "community"
    KINDNESS = "kindness"
    HEALTH_RECOVERY = "health-recovery"
    EDUCATION = "education"
    GLOBAL_PROGRESS = "global-progress"
    TECHNOLOGY = "technology"


class Article(BaseModel):
    """A fetched news article.

    ``id`` is stable per provider (usually the article URL) and is the key
    used for deduplication and read tracking.
    """

    id: str
    title: str
    description: str = ""
    url: str
    image_url: str | None = None
    published_at: datetime
    source: str
    author: str | None = None
    categories: list[Category] = Field(default_factory=list)

    @property
    def text(self) -> str:
        """Title and description joined, the text classified by keyword rules."""
        return f"{self.title} {self.description}"


class FetchResult(BaseModel):
    """Result of fetching an article's full text."""

    content: str = ""
    success: bool = False
    error: str = ""
