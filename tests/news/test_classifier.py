"""Tests for the keyword classifier."""

import pytest

from brightside.news.classifier import (
    ClassifierConfig,
    calculate_positivity_score,
    detect_categories,
    is_from_trusted_domain,
    is_quality_article,
    is_sports_or_entertainment,
)
from brightside.news.models import Category


class TestPositivityScore:
    def test_counts_positive_keywords(self):
        assert calculate_positivity_score("A breakthrough in research") == 2

    def test_each_keyword_counts_once(self):
        assert calculate_positivity_score("hope hope hope") == 1

    def test_negative_keywords_subtract(self):
        assert calculate_positivity_score("war and violence") == -2

    def test_case_insensitive(self):
        assert calculate_positivity_score("BREAKTHROUGH") == 1

    def test_substring_matching(self):
        """'software' contains 'war'; matching is not word-boundary aware."""
        assert calculate_positivity_score("software") == -1

    def test_empty_text(self):
        assert calculate_positivity_score("") == 0

    def test_custom_config(self):
        cfg = ClassifierConfig(positive_keywords=("sunny",), negative_keywords=("rain",))
        assert calculate_positivity_score("Sunny with a chance of rain", cfg) == 0
        assert calculate_positivity_score("Sunny all week", cfg) == 1


class TestDetectCategories:
    def test_single_category(self):
        assert detect_categories("Solar farm opens") == [Category.ENVIRONMENT]

    def test_multiple_categories_in_enum_order(self):
        assert detect_categories("University students win scholarship") == [
            Category.SCIENCE_INNOVATION,
            Category.EDUCATION,
        ]

    def test_uses_description(self):
        assert detect_categories("Good news", "Doctors find a new cure") == [
            Category.HEALTH_RECOVERY
        ]

    def test_fallback_is_global_progress(self):
        assert detect_categories("Quiet afternoon") == [Category.GLOBAL_PROGRESS]

    def test_never_empty(self):
        assert detect_categories("", None) == [Category.GLOBAL_PROGRESS]

    def test_substring_false_positive(self):
        """'ai' inside 'painting' tags the article as technology."""
        assert detect_categories("Painting class") == [Category.TECHNOLOGY]


class TestTrustedDomain:
    @pytest.mark.parametrize(
        "url",
        [
            "https://www.bbc.co.uk/news/x",
            "https://theguardian.com/a",
            "https://news.mit.edu/2026/x",
            "https://WWW.NPR.ORG/sections/x",
        ],
    )
    def test_trusted(self, url):
        assert is_from_trusted_domain(url) is True

    @pytest.mark.parametrize(
        "url",
        [
            "https://notbbc.com/x",
            "https://bbc.com.evil.example/x",
            "https://example.com/bbc.com",
            "not a url",
            "",
            "http://[broken",
        ],
    )
    def test_untrusted(self, url):
        assert is_from_trusted_domain(url) is False


class TestSportsOrEntertainment:
    def test_sports(self):
        assert is_sports_or_entertainment("Championship final tonight") is True

    def test_entertainment(self):
        assert is_sports_or_entertainment("New film festival opens") is True

    def test_neither(self):
        assert is_sports_or_entertainment("Scientists map coral reef") is False


class TestQualityArticle:
    URL = "https://www.bbc.com/news/1"

    def test_accepts_positive_trusted_article(self):
        assert is_quality_article("Volunteers restore wetland habitat", "", self.URL) is True

    def test_rejects_untrusted_domain(self):
        assert (
            is_quality_article("Volunteers restore wetland habitat", "", "https://example.com/x")
            is False
        )

    def test_sports_exclusion_dominates(self):
        assert (
            is_quality_article("Community championship celebration", "Hope and unity", self.URL)
            is False
        )

    def test_rejects_negative_article(self):
        assert is_quality_article("Crash on highway", None, self.URL) is False

    def test_rejects_neutral_article(self):
        assert is_quality_article("Council meeting today", "", self.URL) is False

    def test_threshold_is_configurable(self):
        cfg = ClassifierConfig(min_positivity=0)
        assert is_quality_article("Council meeting today", "", self.URL, cfg) is True
