"""Tests for core cadence arithmetic."""

from datetime import date, datetime

import pytest

from touchbase.core.cadence import (
    CADENCES,
    UnrecognizedCadence,
    add_months,
    is_overdue,
    is_recognized_cadence,
    next_touch_date,
    normalize_cadence,
)


@pytest.fixture
def anchor():
    return date(2025, 6, 1)


class TestNextTouchDate:
    @pytest.mark.parametrize(
        "cadence,expected",
        [
            ("monthly", date(2025, 7, 1)),
            ("quarterly", date(2025, 9, 1)),
            ("semi-annual", date(2025, 12, 1)),
            ("annual", date(2026, 6, 1)),
        ],
    )
    def test_each_cadence(self, anchor, cadence, expected):
        assert next_touch_date(anchor, cadence) == expected

    def test_yearly_alias_matches_annual(self, anchor):
        assert next_touch_date(anchor, "yearly") == next_touch_date(anchor, "annual")

    def test_month_overflow_carries_into_year(self):
        assert next_touch_date(date(2025, 12, 15), "monthly") == date(2026, 1, 15)
        assert next_touch_date(date(2025, 10, 5), "semi-annual") == date(2026, 4, 5)

    def test_end_of_month_clamps_in_non_leap_year(self):
        assert next_touch_date(date(2025, 1, 31), "monthly") == date(2025, 2, 28)

    def test_end_of_month_clamps_in_leap_year(self):
        assert next_touch_date(date(2024, 1, 31), "monthly") == date(2024, 2, 29)

    def test_thirty_day_month_clamps(self):
        assert next_touch_date(date(2025, 3, 31), "monthly") == date(2025, 4, 30)

    def test_leap_day_monthly_keeps_day(self):
        assert next_touch_date(date(2024, 2, 29), "monthly") == date(2024, 3, 29)

    def test_leap_day_annual_clamps_to_feb_28(self):
        assert next_touch_date(date(2024, 2, 29), "annual") == date(2025, 2, 28)

    def test_quarterly_from_nov_30_clamps_to_feb(self):
        assert next_touch_date(date(2025, 11, 30), "quarterly") == date(2026, 2, 28)

    def test_semi_annual_into_leap_february(self):
        assert next_touch_date(date(2023, 8, 31), "semi-annual") == date(2024, 2, 29)

    def test_time_of_day_is_ignored(self):
        late = datetime(2025, 6, 1, 23, 59, 59)
        assert next_touch_date(late, "monthly") == date(2025, 7, 1)

    def test_returns_plain_date(self):
        result = next_touch_date(datetime(2025, 6, 1, 9, 30), "monthly")
        assert type(result) is date

    @pytest.mark.parametrize("cadence", CADENCES)
    def test_always_advances(self, cadence):
        for anchor in (date(2025, 1, 31), date(2024, 2, 29), date(2025, 12, 31)):
            assert next_touch_date(anchor, cadence) > anchor


class TestUnrecognizedCadence:
    @pytest.mark.parametrize("cadence", ["bogus", "", "Monthly", " monthly", "weekly"])
    def test_raises(self, anchor, cadence):
        with pytest.raises(UnrecognizedCadence):
            next_touch_date(anchor, cadence)

    def test_carries_label(self, anchor):
        with pytest.raises(UnrecognizedCadence) as exc_info:
            next_touch_date(anchor, "bogus")
        assert exc_info.value.cadence == "bogus"
        assert "bogus" in str(exc_info.value)

    def test_is_value_error(self, anchor):
        with pytest.raises(ValueError):
            next_touch_date(anchor, "bogus")


class TestNormalizeCadence:
    def test_alias(self):
        assert normalize_cadence("yearly") == "annual"

    def test_canonical_passes_through(self):
        for cadence in CADENCES:
            assert normalize_cadence(cadence) == cadence

    def test_unknown_passes_through(self):
        assert normalize_cadence("bogus") == "bogus"

    def test_is_recognized(self):
        assert is_recognized_cadence("yearly") is True
        assert is_recognized_cadence("semi-annual") is True
        assert is_recognized_cadence("bogus") is False


class TestAddMonths:
    def test_more_than_a_year(self):
        assert add_months(date(2025, 1, 31), 13) == date(2026, 2, 28)

    def test_zero(self):
        assert add_months(date(2025, 5, 17), 0) == date(2025, 5, 17)


class TestIsOverdue:
    def test_due_exactly_now_is_overdue(self, anchor):
        assert is_overdue(anchor, "monthly", datetime(2025, 7, 1)) is True

    def test_not_yet_due(self, anchor):
        assert is_overdue(date(2025, 7, 11), "monthly", datetime(2025, 7, 1)) is False

    def test_accepts_date_for_now(self, anchor):
        assert is_overdue(anchor, "monthly", date(2025, 7, 1)) is True

    def test_raises_on_unknown_cadence(self, anchor):
        with pytest.raises(UnrecognizedCadence):
            is_overdue(anchor, "bogus", datetime(2025, 7, 1))
