"""News provider fetchers, aggregation and the daily pick.

Each provider has a pure ``normalize_*`` function that maps its JSON
payload to :class:`Article` objects (applying the quality gate and
category detection) and a ``fetch_*`` wrapper that performs the HTTP call.
Fetchers never raise: a missing key or any network/parse error yields an
empty list, and malformed items inside a valid payload are skipped.
"""

from __future__ import annotations

import json
import logging
import urllib.request
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Any
from urllib.error import URLError
from urllib.parse import urlencode

from pydantic import ValidationError

from brightside.news.classifier import (
    ClassifierConfig,
    DEFAULT_CLASSIFIER_CONFIG,
    calculate_positivity_score,
    detect_categories,
    is_quality_article,
)
from brightside.news.models import Article, FetchResult

logger = logging.getLogger(__name__)

NEWSAPI_URL = "https://newsapi.org/v2/everything"
GUARDIAN_URL = "https://content.guardianapis.com/search"
NYT_URL = "https://api.nytimes.com/svc/search/v2/articlesearch.json"
NYT_IMAGE_BASE = "https://www.nytimes.com/"
READER_URL = "https://r.jina.ai/"

GUARDIAN_SOURCE = "The Guardian"
NYT_SOURCE = "The New York Times"

_USER_AGENT = "brightside/0.1"
_NEWSAPI_DOMAIN_LIMIT = 20


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parse_datetime(value: object) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.strptime(value, "%Y-%m-%dT%H:%M:%S%z")
    except ValueError:
        return None


def _get_json(url: str, timeout: int) -> Any:
    request = urllib.request.Request(url, headers={"User-Agent": _USER_AGENT})
    with urllib.request.urlopen(request, timeout=timeout) as resp:  # noqa: S310
        return json.loads(resp.read().decode("utf-8"))


def _as_dict(value: object) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: object) -> str | None:
    return value if isinstance(value, str) else None


def _items(container: dict[str, Any], key: str) -> list[dict[str, Any]]:
    """Dict entries of ``container[key]``; anything else is dropped."""
    items = container.get(key)
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]


def _build_article(
    *,
    article_id: str | None,
    title: str | None,
    description: str | None,
    url: str | None,
    image_url: str | None,
    published: object,
    source: str,
    author: str | None,
    config: ClassifierConfig,
) -> Article | None:
    """Apply the quality gate and build an Article, or None if it is rejected."""
    if not title or not url:
        return None
    if not is_quality_article(title, description, url, config):
        return None
    published_at = _parse_datetime(published)
    if published_at is None:
        logger.debug("Skipping article with unparseable date: %s", url)
        return None
    try:
        return Article(
            id=article_id or url,
            title=title,
            description=description or "",
            url=url,
            image_url=image_url or None,
            published_at=published_at,
            source=source,
            author=author or None,
            categories=detect_categories(title, description, config),
        )
    except ValidationError as exc:
        logger.debug("Skipping malformed article %s: %s", url, exc)
        return None


# ---------------------------------------------------------------------------
# Normalizers
# ---------------------------------------------------------------------------


def normalize_newsapi(
    payload: dict[str, Any], config: ClassifierConfig | None = None
) -> list[Article]:
    """Map a NewsAPI ``/v2/everything`` response to quality articles.

    Malformed items are skipped rather than failing the whole batch.
    """
    cfg = config or DEFAULT_CLASSIFIER_CONFIG
    if payload.get("status") != "ok":
        return []

    articles: list[Article] = []
    for raw in _items(payload, "articles"):
        url = _as_str(raw.get("url"))
        article = _build_article(
            article_id=url,
            title=_as_str(raw.get("title")),
            description=_as_str(raw.get("description")),
            url=url,
            image_url=_as_str(raw.get("urlToImage")),
            published=raw.get("publishedAt"),
            source=_as_str(_as_dict(raw.get("source")).get("name")) or "",
            author=_as_str(raw.get("author")),
            config=cfg,
        )
        if article is not None:
            articles.append(article)
    return articles


def normalize_guardian(
    payload: dict[str, Any], config: ClassifierConfig | None = None
) -> list[Article]:
    """Map a Guardian content API search response to quality articles."""
    cfg = config or DEFAULT_CLASSIFIER_CONFIG
    response = _as_dict(payload.get("response"))
    if response.get("status") != "ok":
        return []

    articles: list[Article] = []
    for raw in _items(response, "results"):
        fields = _as_dict(raw.get("fields"))
        article = _build_article(
            article_id=_as_str(raw.get("id")),
            title=_as_str(raw.get("webTitle")),
            description=_as_str(fields.get("trailText")),
            url=_as_str(raw.get("webUrl")),
            image_url=_as_str(fields.get("thumbnail")),
            published=raw.get("webPublicationDate"),
            source=GUARDIAN_SOURCE,
            author=None,
            config=cfg,
        )
        if article is not None:
            articles.append(article)
    return articles


def normalize_nyt(
    payload: dict[str, Any], config: ClassifierConfig | None = None
) -> list[Article]:
    """Map an NYT article search response to quality articles."""
    cfg = config or DEFAULT_CLASSIFIER_CONFIG
    if payload.get("status") != "OK":
        return []

    articles: list[Article] = []
    for raw in _items(_as_dict(payload.get("response")), "docs"):
        multimedia = _items(raw, "multimedia")
        image_path = _as_str(multimedia[0].get("url")) if multimedia else None
        description = _as_str(raw.get("abstract")) or _as_str(raw.get("snippet"))
        article = _build_article(
            article_id=_as_str(raw.get("_id")),
            title=_as_str(_as_dict(raw.get("headline")).get("main")),
            description=_as_str(raw.get("abstract")),
            url=_as_str(raw.get("web_url")),
            image_url=f"{NYT_IMAGE_BASE}{image_path}" if image_path else None,
            published=raw.get("pub_date"),
            source=NYT_SOURCE,
            author=_as_str(_as_dict(raw.get("byline")).get("original")),
            config=cfg,
        )
        if article is not None:
            article.description = description or ""
            articles.append(article)
    return articles


# ---------------------------------------------------------------------------
# Fetchers
# ---------------------------------------------------------------------------


def _fetch_provider(
    name: str,
    url: str,
    normalize: Callable[[dict[str, Any], ClassifierConfig | None], list[Article]],
    *,
    timeout: int,
    config: ClassifierConfig | None,
) -> list[Article]:
    try:
        payload = _get_json(url, timeout)
    except (URLError, TimeoutError, OSError, ValueError) as exc:
        logger.warning("%s fetch failed: %s", name, exc)
        return []
    if not isinstance(payload, dict):
        logger.warning("%s returned an unexpected payload", name)
        return []
    articles = normalize(payload, config)
    logger.info("%s: %d quality articles", name, len(articles))
    return articles


def fetch_newsapi(
    api_key: str, *, timeout: int = 15, config: ClassifierConfig | None = None
) -> list[Article]:
    """Fetch recent articles from trusted domains via NewsAPI."""
    if not api_key:
        return []
    cfg = config or DEFAULT_CLASSIFIER_CONFIG
    query = urlencode(
        {
            "domains": ",".join(cfg.trusted_domains[:_NEWSAPI_DOMAIN_LIMIT]),
            "language": "en",
            "sortBy": "publishedAt",
            "pageSize": 100,
            "apiKey": api_key,
        }
    )
    return _fetch_provider(
        "NewsAPI", f"{NEWSAPI_URL}?{query}", normalize_newsapi, timeout=timeout, config=cfg
    )


def fetch_guardian(
    api_key: str, *, timeout: int = 15, config: ClassifierConfig | None = None
) -> list[Article]:
    """Fetch the newest Guardian articles."""
    if not api_key:
        return []
    query = urlencode(
        {
            "show-fields": "thumbnail,trailText",
            "page-size": 50,
            "order-by": "newest",
            "api-key": api_key,
        }
    )
    return _fetch_provider(
        "Guardian", f"{GUARDIAN_URL}?{query}", normalize_guardian, timeout=timeout, config=config
    )


def fetch_nyt(
    api_key: str, *, timeout: int = 15, config: ClassifierConfig | None = None
) -> list[Article]:
    """Fetch the newest NYT science, health, climate and technology articles."""
    if not api_key:
        return []
    query = urlencode(
        {
            "sort": "newest",
            "fq": 'news_desk:("Science" "Health" "Climate" "Technology")',
            "api-key": api_key,
        }
    )
    return _fetch_provider(
        "NYT", f"{NYT_URL}?{query}", normalize_nyt, timeout=timeout, config=config
    )


def merge_articles(batches: list[list[Article]]) -> list[Article]:
    """Dedup by URL and sort newest first.

    A later duplicate replaces an earlier one but keeps its position, so
    the sort's tie order stays deterministic.
    """
    by_url: dict[str, Article] = {}
    for batch in batches:
        for article in batch:
            by_url[article.url] = article
    return sorted(by_url.values(), key=lambda a: a.published_at.timestamp(), reverse=True)


def aggregate_articles(
    *,
    newsapi_key: str = "",
    guardian_api_key: str = "",
    nyt_api_key: str = "",
    timeout: int = 15,
    config: ClassifierConfig | None = None,
) -> list[Article]:
    """Fetch every configured provider in parallel and merge the results."""
    jobs: list[tuple[str, Callable[..., list[Article]], str]] = [
        ("NewsAPI", fetch_newsapi, newsapi_key),
        ("Guardian", fetch_guardian, guardian_api_key),
        ("NYT", fetch_nyt, nyt_api_key),
    ]

    batches: list[list[Article]] = []
    with ThreadPoolExecutor(max_workers=len(jobs)) as executor:
        futures = [
            (name, executor.submit(fetch, key, timeout=timeout, config=config))
            for name, fetch, key in jobs
        ]
        for name, future in futures:
            try:
                batches.append(future.result())
            except Exception:
                logger.warning("%s fetch raised unexpectedly", name, exc_info=True)
                batches.append([])

    return merge_articles(batches)


def fetch_article_content(
    url: str, *, reader_url: str = READER_URL, timeout: int = 30
) -> FetchResult:
    """Fetch an article's full text through the reader proxy.

    The returned text is raw reader output; pass it through
    :func:`brightside.news.sanitizer.clean_article_content` before use.
    """
    if not url:
        return FetchResult(error="Empty URL")
    try:
        request = urllib.request.Request(
            f"{reader_url}{url}", headers={"User-Agent": _USER_AGENT}
        )
        with urllib.request.urlopen(request, timeout=timeout) as resp:  # noqa: S310
            content = resp.read().decode("utf-8", errors="replace")
    except (URLError, TimeoutError, OSError) as exc:
        logger.debug("Failed to fetch %s: %s", url, exc)
        return FetchResult(error=f"Fetch failed: {exc}")
    return FetchResult(content=content, success=True)


def pick_daily_article(
    articles: list[Article], skip: int = 0, config: ClassifierConfig | None = None
) -> Article | None:
    """Most positive article, or the ``skip``-th next one (wrapping around)."""
    if not articles:
        return None
    ranked = sorted(
        articles,
        key=lambda a: calculate_positivity_score(a.text, config),
        reverse=True,
    )
    return ranked[skip % len(ranked)]
