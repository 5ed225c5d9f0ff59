"""Short, upbeat article summaries from an LLM."""

from __future__ import annotations

import logging

from brightside.llm import LLMError, call_llm
from brightside.news.sanitizer import clean_article_content

logger = logging.getLogger(__name__)

SUMMARY_SYSTEM_PROMPT = (
    "You are a helpful assistant that creates concise, positive news article "
    "summaries. Focus on key facts and beneficial outcomes. Keep summaries to "
    "2-3 sentences maximum. Ignore any website navigation, metadata, or "
    "formatting elements and focus only on the actual article content."
)

# Content shorter than this (after cleaning) is not worth summarizing.
MIN_CONTENT_CHARS = 100
MAX_CONTENT_CHARS = 3000


def build_summary_prompt(content: str, title: str, max_chars: int = MAX_CONTENT_CHARS) -> str:
    """User prompt for a 2-3 sentence summary of the first *max_chars* of content."""
    return (
        "Please create a concise 2-3 sentence summary of this news article. "
        "Focus on the key facts and positive aspects. The summary should be "
        "informative yet engaging for quick scanning. Ignore any website "
        "navigation elements or metadata.\n\n"
        f"Article Title: {title}\n\n"
        f"Article Content: {content[:max_chars]}"
    )


def summarize_article(
    content: str,
    title: str,
    *,
    model: str | None = None,
    timeout: int = 120,
    min_chars: int = MIN_CONTENT_CHARS,
    max_chars: int = MAX_CONTENT_CHARS,
) -> str:
    """Summarize raw article text, returning ``""`` when no summary is possible.

    The text is cleaned first. Too-short content and LLM failures both
    yield an empty string; failures are logged.
    """
    cleaned = clean_article_content(content)
    if len(cleaned.strip()) < min_chars:
        logger.warning("Article content too short for summary: %r", title)
        return ""

    prompt = f"{SUMMARY_SYSTEM_PROMPT}\n\n{build_summary_prompt(cleaned, title, max_chars)}"
    try:
        return call_llm(prompt, model=model, timeout=timeout)
    except LLMError as exc:
        logger.warning("Summary generation failed for %r: %s", title, exc)
        return ""
