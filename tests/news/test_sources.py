import json
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch
from urllib.error import URLError

from brightside.news.models import Article, Category
from brightside.news.sources import (
    GUARDIAN_SOURCE,
    NYT_SOURCE,
    aggregate_articles,
    fetch_article_content,
    fetch_newsapi,
    merge_articles,
    normalize_guardian,
    normalize_newsapi,
    normalize_nyt,
    pick_daily_article,
)


NEWSAPI_RESPONSE = {
    "status": "ok",
    "articles": [
        {
            "title": "Scientists celebrate coral reef recovery",
            "description": "Researchers report progress restoring reefs.",
            "url": "https://www.bbc.com/news/science-1",
            "urlToImage": "https://img.example/1.jpg",
            "publishedAt": "2026-02-14T10:00:00Z",
            "source": {"name": "BBC News"},
            "author": "Jane Doe",
        },
        {
            "title": "Scientists celebrate coral reef recovery",
            "description": "Copied from elsewhere.",
            "url": "https://example.com/copy",
            "publishedAt": "2026-02-14T10:00:00Z",
            "source": {"name": "Example"},
        },
        {
            "title": "Team wins championship",
            "description": "A great day for the city.",
            "url": "https://www.bbc.com/sport/1",
            "publishedAt": "2026-02-14T11:00:00Z",
            "source": {"name": "BBC Sport"},
        },
    ],
}

GUARDIAN_RESPONSE = {
    "response": {
        "status": "ok",
        "results": [
            {
                "id": "environment/2026/feb/14/wetland",
                "webTitle": "Volunteers restore wetland habitat",
                "webUrl": "https://www.theguardian.com/environment/2026/feb/14/wetland",
                "webPublicationDate": "2026-02-14T09:00:00Z",
                "fields": {
                    "trailText": "Local groups help wildlife return",
                    "thumbnail": "https://i.guim.example/wetland.jpg",
                },
            }
        ],
    }
}

NYT_RESPONSE = {
    "status": "OK",
    "response": {
        "docs": [
            {
                "_id": "nyt://article/1",
                "headline": {"main": "Hospital trial shows new therapy helps patients"},
                "abstract": None,
                "snippet": "A promising treatment.",
                "web_url": "https://www.nytimes.com/2026/02/14/health/therapy.html",
                "pub_date": "2026-02-14T08:00:00+0000",
                "multimedia": [{"url": "images/2026/02/14/therapy.jpg"}],
                "byline": {"original": "By Sam Lee"},
            }
        ]
    },
}


def _response(payload) -> MagicMock:
    response = MagicMock()
    body = payload if isinstance(payload, str) else json.dumps(payload)
    response.read.return_value = body.encode()
    response.__enter__ = lambda s: s
    response.__exit__ = MagicMock(return_value=False)
    return response


def _article(article_id: str, title: str, published: datetime, **kwargs) -> Article:
    defaults = {
        "id": article_id,
        "title": title,
        "url": f"https://www.bbc.com/news/{article_id}",
        "published_at": published,
        "source": "BBC News",
        "categories": [Category.GLOBAL_PROGRESS],
    }
    defaults.update(kwargs)
    return Article(**defaults)


def test_normalize_newsapi_applies_quality_gate():
    articles = normalize_newsapi(NEWSAPI_RESPONSE)

    assert len(articles) == 1
    article = articles[0]
    assert article.id == "https://www.bbc.com/news/science-1"
    assert article.source == "BBC News"
    assert article.author == "Jane Doe"
    assert article.image_url == "https://img.example/1.jpg"
    assert article.published_at == datetime(2026, 2, 14, 10, 0, tzinfo=timezone.utc)
    assert Category.SCIENCE_INNOVATION in article.categories


def test_normalize_newsapi_rejects_error_status():
    assert normalize_newsapi({"status": "error", "message": "bad key"}) == []


def test_normalize_guardian():
    articles = normalize_guardian(GUARDIAN_RESPONSE)

    assert len(articles) == 1
    assert articles[0].id == "environment/2026/feb/14/wetland"
    assert articles[0].source == GUARDIAN_SOURCE
    assert articles[0].description == "Local groups help wildlife return"
    assert articles[0].image_url == "https://i.guim.example/wetland.jpg"


def test_normalize_guardian_rejects_missing_response():
    assert normalize_guardian({}) == []


def test_normalize_nyt_uses_snippet_and_builds_image_url():
    articles = normalize_nyt(NYT_RESPONSE)

    assert len(articles) == 1
    article = articles[0]
    assert article.id == "nyt://article/1"
    assert article.source == NYT_SOURCE
    assert article.description == "A promising treatment."
    assert article.image_url == "https://www.nytimes.com/images/2026/02/14/therapy.jpg"
    assert article.author == "By Sam Lee"


def test_normalize_nyt_requires_ok_status():
    assert normalize_nyt({"status": "ERROR", "response": NYT_RESPONSE["response"]}) == []


def test_fetch_newsapi_without_key_skips_request():
    with patch("urllib.request.urlopen") as mock_urlopen:
        assert fetch_newsapi("") == []
    mock_urlopen.assert_not_called()


def test_fetch_newsapi_parses_response():
    with patch("urllib.request.urlopen", return_value=_response(NEWSAPI_RESPONSE)):
        articles = fetch_newsapi("key")
    assert [a.id for a in articles] == ["https://www.bbc.com/news/science-1"]


def test_fetch_newsapi_handles_error():
    with patch("urllib.request.urlopen", side_effect=URLError("timeout")):
        assert fetch_newsapi("key") == []


def test_fetch_newsapi_handles_invalid_json():
    with patch("urllib.request.urlopen", return_value=_response("<html>oops</html>")):
        assert fetch_newsapi("key") == []


def test_merge_articles_dedups_by_url_and_sorts_newest_first():
    older = _article("a", "Older", datetime(2026, 2, 13, tzinfo=timezone.utc))
    newer = _article("b", "Newer", datetime(2026, 2, 14, tzinfo=timezone.utc))
    duplicate = _article("a", "Older again", datetime(2026, 2, 13, tzinfo=timezone.utc))

    merged = merge_articles([[older, newer], [duplicate]])

    assert [a.title for a in merged] == ["Newer", "Older again"]


def test_aggregate_articles_survives_failing_provider():
    guardian = [_article("g", "Guardian piece", datetime(2026, 2, 14, tzinfo=timezone.utc))]
    nyt = [_article("n", "NYT piece", datetime(2026, 2, 15, tzinfo=timezone.utc))]

    with (
        patch("brightside.news.sources.fetch_newsapi", side_effect=RuntimeError("boom")),
        patch("brightside.news.sources.fetch_guardian", return_value=guardian),
        patch("brightside.news.sources.fetch_nyt", return_value=nyt),
    ):
        articles = aggregate_articles(newsapi_key="a", guardian_api_key="b", nyt_api_key="c")

    assert [a.title for a in articles] == ["NYT piece", "Guardian piece"]


def test_fetch_article_content_success():
    with patch("urllib.request.urlopen", return_value=_response("Markdown Content:\nBody")) as m:
        result = fetch_article_content("https://www.bbc.com/news/1")

    assert result.success is True
    assert result.content == "Markdown Content:\nBody"
    request = m.call_args.args[0]
    assert request.full_url == "https://r.jina.ai/https://www.bbc.com/news/1"


def test_fetch_article_content_error():
    with patch("urllib.request.urlopen", side_effect=URLError("refused")):
        result = fetch_article_content("https://www.bbc.com/news/1")
    assert result.success is False
    assert "refused" in result.error


def test_fetch_article_content_empty_url():
    result = fetch_article_content("")
    assert result.success is False
    assert result.error == "Empty URL"


def test_pick_daily_article_prefers_most_positive():
    when = datetime(2026, 2, 14, tzinfo=timezone.utc)
    plain = _article("p", "Council meeting today", when)
    upbeat = _article("u", "Breakthrough research brings hope", when)

    assert pick_daily_article([plain, upbeat]).id == "u"
    assert pick_daily_article([plain, upbeat], skip=1).id == "p"
    assert pick_daily_article([plain, upbeat], skip=2).id == "u"


def test_pick_daily_article_empty():
    assert pick_daily_article([]) is None


def test_fetch_newsapi_skips_malformed_items():
    payload = {
        "status": "ok",
        "articles": [
            "not an object",
            {
                "url": "https://www.bbc.com/news/hope",
                "title": "Hope rises as volunteers rebuild",
                "publishedAt": "2026-01-01T00:00:00Z",
                "source": "BBC",
            },
            {"url": 42, "title": ["Hope"], "publishedAt": "2026-01-01T00:00:00Z"},
            NEWSAPI_RESPONSE["articles"][0],
        ],
    }
    with patch("urllib.request.urlopen", return_value=_response(payload)):
        articles = fetch_newsapi("key")

    assert [a.url for a in articles] == [
        "https://www.bbc.com/news/hope",
        "https://www.bbc.com/news/science-1",
    ]
    assert articles[0].source == ""


def test_normalize_guardian_tolerates_odd_shapes():
    payload = {
        "response": {
            "status": "ok",
            "results": [
                {**GUARDIAN_RESPONSE["response"]["results"][0], "fields": "none"},
                None,
            ],
        }
    }
    articles = normalize_guardian(payload)

    assert len(articles) == 1
    assert articles[0].description == ""
    assert articles[0].image_url is None


def test_normalize_nyt_tolerates_odd_shapes():
    doc = {
        **NYT_RESPONSE["response"]["docs"][0],
        "byline": "By Sam Lee",
        "multimedia": "images/x.jpg",
    }
    assert normalize_nyt({"status": "OK", "response": {"docs": [doc, "x"]}})[0].author is None
    assert normalize_nyt({"status": "OK", "response": {"docs": {"oops": 1}}}) == []
    assert normalize_nyt({"status": "OK", "response": [doc]}) == []
