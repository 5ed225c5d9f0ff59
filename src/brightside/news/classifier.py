"""Keyword heuristics for positivity, topical categories and source trust.

All matching is lowercase substring containment against fixed keyword
lists; there is no tokenization, so ``"goal"`` also matches inside
``"goalkeeper"``. Every function takes an optional :class:`ClassifierConfig`
so tests and callers can swap the lists without touching module state.
"""

from __future__ import annotations

from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field

from brightside.news.models import Category

# Keyword lists ----------------------------------------------------------------

CATEGORY_KEYWORDS: dict[Category, tuple[str, ...]] = {
    Category.SCIENCE_INNOVATION: (
        "science", "research", "study", "discovery", "breakthrough",
        "scientists", "university", "laboratory",
    ),
    Category.ENVIRONMENT: (
        "climate", "environment", "renewable", "solar", "wind",
        "sustainable", "conservation", "wildlife", "ocean", "forest",
    ),
    Category.COMMUNITY: (
        "community", "neighborhood", "local", "volunteer", "initiative",
        "together", "grassroots",
    ),
    Category.KINDNESS: (
        "kindness", "generosity", "donation", "charity", "helped",
        "rescued", "saved", "compassion",
    ),
    Category.HEALTH_RECOVERY: (
        "health", "medical", "treatment", "therapy", "recovery", "cure",
        "patient", "hospital",
    ),
    Category.EDUCATION: (
        "education", "school", "student", "teacher", "learning",
        "scholarship", "university", "literacy",
    ),
    Category.GLOBAL_PROGRESS: (
        "global", "international", "world", "nations", "progress",
        "development", "poverty", "peace",
    ),
    Category.TECHNOLOGY: (
        "technology", "innovation", "ai", "artificial intelligence",
        "startup", "app", "digital", "software",
    ),
}

TRUSTED_DOMAINS: tuple[str, ...] = (
    "bbc.com", "bbc.co.uk",
    "theguardian.com",
    "nytimes.com",
    "washingtonpost.com",
    "reuters.com",
    "apnews.com",
    "npr.org",
    "pbs.org",
    "theatlantic.com",
    "nature.com",
    "scientificamerican.com",
    "newscientist.com",
    "science.org",
    "nationalgeographic.com",
    "smithsonianmag.com",
    "wired.com",
    "arstechnica.com",
    "techcrunch.com",
    "theverge.com",
    "mit.edu",
    "stanford.edu",
    "harvard.edu",
    "time.com",
    "economist.com",
    "forbes.com",
    "bloomberg.com",
    "axios.com",
    "propublica.org",
    "usatoday.com",
    "csmonitor.com",
    "popsci.com",
    "grist.org",
    "motherjones.com",
    "vox.com",
    "theconversation.com",
)

POSITIVE_KEYWORDS: tuple[str, ...] = (
    "breakthrough", "innovation", "discovery", "achievement", "recovery",
    "cure", "solution", "improvement", "progress", "kindness", "generosity",
    "volunteer", "help", "support", "community", "together", "unity",
    "hope", "inspiring", "uplifting", "celebration",
    "overcome", "resilience", "donated", "saved", "rescued",
    "renewable", "sustainable", "conservation", "restore", "protect",
    "scholarship", "education", "learning", "research", "scientific",
    "medical advance", "treatment", "therapy", "healing",
)

NEGATIVE_KEYWORDS: tuple[str, ...] = (
    "death", "murder", "war", "violence", "crash", "disaster", "terrorism",
    "crime", "scandal", "controversy", "conflict", "shooting", "attack",
    "fraud", "corruption", "lawsuit", "bankruptcy", "fired", "layoffs",
)

SPORTS_KEYWORDS: tuple[str, ...] = (
    "game", "match", "score", "playoff", "championship", "tournament",
    "league", "season", "team wins", "defeats", "beat", "vs", "versus",
    "quarterback", "touchdown", "goal", "basket", "home run", "inning",
    "nfl", "nba", "mlb", "nhl", "premier league", "world cup",
    "soccer", "football", "basketball", "baseball", "hockey",
)

ENTERTAINMENT_KEYWORDS: tuple[str, ...] = (
    "movie", "film", "actor", "actress", "celebrity", "red carpet",
    "box office", "premiere", "trailer", "netflix", "streaming",
    "album", "song", "concert", "tour", "grammy", "oscar", "emmy",
)

# Articles must score at least this to pass the quality gate.
MIN_POSITIVITY = 1


class ClassifierConfig(BaseModel):
    """Keyword lists and thresholds used by the classifier."""

    model_config = ConfigDict(frozen=True)

    positive_keywords: tuple[str, ...] = POSITIVE_KEYWORDS
    negative_keywords: tuple[str, ...] = NEGATIVE_KEYWORDS
    sports_keywords: tuple[str, ...] = SPORTS_KEYWORDS
    entertainment_keywords: tuple[str, ...] = ENTERTAINMENT_KEYWORDS
    trusted_domains: tuple[str, ...] = TRUSTED_DOMAINS
    category_keywords: dict[Category, tuple[str, ...]] = Field(
        default_factory=lambda: dict(CATEGORY_KEYWORDS)
    )
    min_positivity: int = MIN_POSITIVITY


DEFAULT_CLASSIFIER_CONFIG = ClassifierConfig()


def _count_matches(text: str, keywords: tuple[str, ...]) -> int:
    """Number of distinct keywords contained in *text* (already lowercased)."""
    return sum(1 for keyword in keywords if keyword in text)


def calculate_positivity_score(text: str, config: ClassifierConfig | None = None) -> int:
    """Positive keyword matches minus negative keyword matches.

    Each keyword counts once no matter how often it appears.
    """
    cfg = config or DEFAULT_CLASSIFIER_CONFIG
    lower = text.lower()
    return _count_matches(lower, cfg.positive_keywords) - _count_matches(
        lower, cfg.negative_keywords
    )


def is_sports_or_entertainment(text: str, config: ClassifierConfig | None = None) -> bool:
    """True if any sports or entertainment exclusion keyword appears in *text*."""
    cfg = config or DEFAULT_CLASSIFIER_CONFIG
    lower = text.lower()
    return any(k in lower for k in cfg.sports_keywords) or any(
        k in lower for k in cfg.entertainment_keywords
    )


def is_from_trusted_domain(url: str, config: ClassifierConfig | None = None) -> bool:
    """Check the URL's hostname against the trusted publisher allow-list.

    A host matches a trusted domain exactly or as a subdomain of it.
    Anything that does not parse to a hostname is untrusted.
    """
    cfg = config or DEFAULT_CLASSIFIER_CONFIG
    try:
        hostname = urlsplit(url).hostname
    except (ValueError, TypeError, AttributeError):
        return False
    if not hostname:
        return False
    hostname = hostname.lower()
    return any(
        hostname == trusted or hostname.endswith(f".{trusted}")
        for trusted in cfg.trusted_domains
    )


def detect_categories(
    title: str,
    description: str | None = "",
    config: ClassifierConfig | None = None,
) -> list[Category]:
    """Return every category whose keywords appear in title + description.

    Falls back to ``[Category.GLOBAL_PROGRESS]`` so the result is never empty.
    """
    cfg = config or DEFAULT_CLASSIFIER_CONFIG
    text = f"{title} {description or ''}".lower()
    categories = [
        category
        for category, keywords in cfg.category_keywords.items()
        if any(keyword in text for keyword in keywords)
    ]
    return categories or [Category.GLOBAL_PROGRESS]


def is_quality_article(
    title: str,
    description: str | None,
    url: str,
    config: ClassifierConfig | None = None,
) -> bool:
    """Admission gate for externally fetched articles.

    The article must come from a trusted domain, must not look like sports
    or entertainment, and must reach the minimum positivity score.
    """
    cfg = config or DEFAULT_CLASSIFIER_CONFIG
    if not is_from_trusted_domain(url, cfg):
        return False

    text = f"{title} {description or ''}"
    if is_sports_or_entertainment(text, cfg):
        return False

    return calculate_positivity_score(text, cfg) >= cfg.min_positivity
