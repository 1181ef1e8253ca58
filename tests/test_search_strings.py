# tests/test_search_strings.py

import pytest

from common.utils import utc_instant
from calc.event_windows import DEFAULT_WINDOWS, EventWindow
from calc.search_strings import (
    age_keyword, is_known_lang, norm_lang, range_string, build_search_strings, combined_search_string, DEFAULT_LANG,
)


class TestKeywords:

    @pytest.mark.parametrize("tag,expected", [
        ("en", "age"), ("en-US", "age"), ("EN_gb", "age"),
        ("ja", "経過日数"), ("ja-JP", "経過日数"), ("de", "alter"),
    ])
    def test_known_tags(self, tag, expected):
        assert age_keyword(tag) == expected

    @pytest.mark.parametrize("tag", ["xx", "", None, "   ", "-", "klingon"])
    def test_unknown_tags_fall_back(self, tag):
        assert norm_lang(tag) == DEFAULT_LANG
        assert age_keyword(tag) == "age"


class TestRangeString:

    def test_days_since_end_and_start(self, weekend_window, fixed_now):
        assert range_string(weekend_window, "en", fixed_now) == "age2-4"

    def test_whole_days_are_floored(self, weekend_window):
        # one second short of four days since the start
        now = utc_instant(2024, 11, 26, 23, 59, 59)
        assert range_string(weekend_window, "en", now) == "age2-3"

    def test_language_changes_only_the_keyword(self, weekend_window, fixed_now):
        assert range_string(weekend_window, "ja", fixed_now) == "経過日数2-4"

    def test_unknown_language_never_raises(self, weekend_window, fixed_now):
        assert range_string(weekend_window, "zz-ZZ", fixed_now) == "age2-4"

    def test_before_window_starts_is_negative(self, weekend_window):
        now = utc_instant(2024, 11, 20, 12)
        assert range_string(weekend_window, "en", now) == "age-5--3"

    def test_during_window(self, weekend_window):
        now = utc_instant(2024, 11, 24, 6)
        assert range_string(weekend_window, "en", now) == "age-1-1"

    @pytest.mark.parametrize("day", range(10, 40))
    def test_min_never_exceeds_max(self, weekend_window, day):
        now = utc_instant(2024, 11, 1) + day * 86_400_000 + 3_600_000
        rows = build_search_strings([weekend_window], "en", now)
        assert rows[0]["Min Days"] <= rows[0]["Max Days"]

    def test_single_instant_window(self):
        t = utc_instant(2024, 11, 23, 12)
        w = EventWindow("flash", t, t)
        assert range_string(w, "en", utc_instant(2024, 11, 25, 13)) == "age2-2"


class TestBuild:

    def test_rows_follow_table_order(self, fixed_now):
        rows = build_search_strings(DEFAULT_WINDOWS, "en", fixed_now)
        assert [r["Event"] for r in rows] == ["wild_area_global", "wild_area_weekend"]
        assert [r["Search String"] for r in rows] == ["age9-11", "age2-4"]
        assert rows[1]["Start"] == "2024-11-23T00:00:00Z"
        assert rows[1]["End"] == "2024-11-24T23:59:59Z"

    def test_combined_is_comma_or(self, fixed_now):
        rows = build_search_strings(DEFAULT_WINDOWS, "en", fixed_now)
        assert combined_search_string(rows) == "age9-11,age2-4"

    def test_empty_table(self, fixed_now):
        assert build_search_strings([], "en", fixed_now) == []
        assert combined_search_string([]) == ""

    def test_reads_clock_once(self, monkeypatch):
        import calc.search_strings as mod
        ticks = iter([utc_instant(2024, 11, 27), utc_instant(2024, 12, 27)])
        monkeypatch.setattr(mod, "now_ms", lambda: next(ticks))
        rows = build_search_strings(DEFAULT_WINDOWS, "en")
        assert [r["Search String"] for r in rows] == ["age9-11", "age2-4"]


@pytest.mark.parametrize("tag,known,norm", [("ja_JP", True, "ja"), ("fr", True, "fr"), ("pt-BR", False, "en"), (None, False, "en")])
def test_is_known_lang_agrees_with_norm_lang(tag, known, norm):
    assert is_known_lang(tag) is known
    assert norm_lang(tag) == norm
