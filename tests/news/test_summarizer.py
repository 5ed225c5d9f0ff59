"""Tests for LLM article summaries."""

from unittest.mock import patch

from brightside.llm import LLMError
from brightside.news.summarizer import (
    SUMMARY_SYSTEM_PROMPT,
    build_summary_prompt,
    summarize_article,
)

LONG_CONTENT = (
    "Markdown Content:\n"
    "Menu\n"
    "Volunteers in the valley planted more than ten thousand native trees this spring, "
    "restoring a hillside that had been bare for decades and giving local wildlife a new home."
)


class TestBuildSummaryPrompt:
    def test_includes_title_and_content(self):
        prompt = build_summary_prompt("Body text", "Trees return")
        assert "Article Title: Trees return" in prompt
        assert "Article Content: Body text" in prompt

    def test_truncates_content(self):
        prompt = build_summary_prompt("x" * 50, "T", max_chars=10)
        assert "Article Content: " + "x" * 10 in prompt
        assert "x" * 11 not in prompt


class TestSummarizeArticle:
    @patch("brightside.news.summarizer.call_llm")
    def test_returns_llm_output(self, mock_llm):
        mock_llm.return_value = "Volunteers replanted a valley."
        result = summarize_article(LONG_CONTENT, "Trees return", model="haiku")

        assert result == "Volunteers replanted a valley."
        (prompt,) = mock_llm.call_args.args
        assert prompt.startswith(SUMMARY_SYSTEM_PROMPT + "\n\n")
        assert "Article Title: Trees return" in prompt
        assert "Markdown Content:" not in prompt
        assert "Menu" not in prompt
        assert mock_llm.call_args.kwargs == {"model": "haiku", "timeout": 120}

    @patch("brightside.news.summarizer.call_llm")
    def test_short_content_skips_llm(self, mock_llm):
        assert summarize_article("Too short.", "T") == ""
        mock_llm.assert_not_called()

    @patch("brightside.news.summarizer.call_llm")
    def test_llm_error_returns_empty(self, mock_llm):
        mock_llm.side_effect = LLMError("boom")
        assert summarize_article(LONG_CONTENT, "Trees return") == ""
