"""Unit tests for numeric input guards."""
import pytest

from companion.domain.invariant import (
    coerce_int,
    clamp,
    sanitize_level,
    sanitize_stars,
    sanitize_count,
    sanitize_progress,
)


class TestCoerceInt:
    @pytest.mark.parametrize("value,expected", [
        (7, 7),
        ("12", 12),
        (" 45 ", 45),
        (2.5, 3),
        (2.4, 2),
        ("59.6", 60),
        (-1.5, -1),
    ])
    def test_numeric_values_round_half_up(self, value, expected):
        assert coerce_int(value) == expected

    @pytest.mark.parametrize("value", [None, "", "   ", "abc", True, False, [], {}, float("nan"), float("inf")])
    def test_non_numeric_returns_none(self, value):
        assert coerce_int(value) is None


class TestClamp:
    def test_inside_range_unchanged(self):
        assert clamp(5, 0, 10) == 5

    def test_low_and_high_bounds(self):
        assert clamp(-3, 0, 10) == 0
        assert clamp(99, 0, 10) == 10


class TestSanitizeLevel:
    def test_level_above_max_clamped_to_60(self):
        assert sanitize_level(9999) == 60

    def test_level_below_min_clamped_to_1(self):
        assert sanitize_level(0) == 1
        assert sanitize_level(-20) == 1

    def test_non_numeric_uses_default(self):
        assert sanitize_level("abc") == 1
        assert sanitize_level("abc", default=42) == 42


class TestSanitizeStars:
    def test_range_is_zero_to_six(self):
        assert sanitize_stars(-1) == 0
        assert sanitize_stars(9) == 6
        assert sanitize_stars("4") == 4

    def test_non_numeric_defaults_to_zero(self):
        assert sanitize_stars(None) == 0


class TestSanitizeCount:
    def test_negative_becomes_zero(self):
        assert sanitize_count(-50) == 0

    def test_non_numeric_becomes_zero(self):
        assert sanitize_count("lots") == 0

    def test_numeric_string_accepted(self):
        assert sanitize_count("2800000") == 2800000


class TestSanitizeProgress:
    def test_bounds(self):
        assert sanitize_progress(150) == 100
        assert sanitize_progress(-5) == 0
        assert sanitize_progress("x") == 0
        assert sanitize_progress(55) == 55
