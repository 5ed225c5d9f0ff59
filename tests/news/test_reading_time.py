"""Tests for word counts and reading time estimates."""

from brightside.news.reading_time import (
    ReadingSpeed,
    estimate_reading_time,
    get_word_count,
    words_per_minute,
)


class TestWordCount:
    def test_plain_text(self):
        assert get_word_count("one two three") == 3

    def test_strips_html_tags(self):
        assert get_word_count("<p>Hello <b>there</b> friend</p>") == 3

    def test_punctuation_is_not_a_word(self):
        assert get_word_count("Wait ... what ?!") == 2

    def test_keeps_apostrophes_and_hyphens(self):
        assert get_word_count("it's a well-known fact") == 4

    def test_empty(self):
        assert get_word_count("") == 0


class TestWordsPerMinute:
    def test_speeds(self):
        assert words_per_minute(ReadingSpeed.SLOW) == 180
        assert words_per_minute("normal") == 220
        assert words_per_minute(ReadingSpeed.FAST) == 260

    def test_unknown_speed_falls_back_to_normal(self):
        assert words_per_minute("sprint") == 220


class TestEstimateReadingTime:
    def test_rounds_up(self):
        text = " ".join(["word"] * 221)
        assert estimate_reading_time(text, 220) == 2

    def test_short_text_is_one_minute(self):
        assert estimate_reading_time("just a few words", 220) == 1

    def test_empty_text(self):
        assert estimate_reading_time("", 220) == 0

    def test_punctuation_only(self):
        assert estimate_reading_time("...", 220) == 0
