from datetime import datetime, timedelta, timezone

from blog_backend.utils.text import (
    calculate_reading_time, count_words, format_date, generate_excerpt, generate_share_url, get_current_url,
    to_iso_string,
)


def test_reading_time_floors():
    assert calculate_reading_time("") == 1
    assert calculate_reading_time(" ".join(["word"] * 200)) == 1
    assert calculate_reading_time(" ".join(["word"] * 250)) == 2
    assert calculate_reading_time(" ".join(["word"] * 401)) == 3


def test_count_words_splits_on_whitespace():
    assert count_words("one  two\nthree\tfour") == 4
    assert count_words("") == 0


def test_excerpt_strips_markup():
    assert generate_excerpt("**Hello** <b>world</b>\n\nAgain") == "Hello world Again"


def test_excerpt_truncates_at_word_boundary():
    assert generate_excerpt("word " * 50, max_length=20) == "word word word word..."


def test_format_date():
    assert format_date(datetime(2024, 1, 15)) == "January 15, 2024"


def test_iso_string_matches_browser_format():
    value = datetime(2024, 1, 15, 10, 30, 0, 123456, tzinfo=timezone.utc)
    assert to_iso_string(value) == "2024-01-15T10:30:00.123Z"
    shifted = datetime(2024, 1, 15, 2, 0, tzinfo=timezone(timedelta(hours=2)))
    assert to_iso_string(shifted) == "2024-01-15T00:00:00.000Z"


def test_share_url_is_encoded():
    assert generate_share_url("Hi", "Jane", "Blog") == "%22Hi%22%20-%20by%20Jane%20%7C%20Blog"


def test_current_url():
    assert get_current_url("https://blog.test", "/blog/post") == "https://blog.test/blog/post"
