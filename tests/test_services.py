import locale

import pytest

from piechart.core.models import RGB
from piechart.core.services import (
    DecimalNumberFormatter,
    color_components,
    strip_zero_fraction,
)

US_CONV = {"decimal_point": ".", "thousands_sep": ",", "grouping": [3, 0]}
DE_CONV = {"decimal_point": ",", "thousands_sep": ".", "grouping": [3, 0]}


class TestDecimalNumberFormatter:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (2.5, "2.5"),
            (2.0, "2"),
            (0, "0"),
            (10, "10"),
            (3.14159, "3.1"),
            (-0.01, "0"),
        ],
    )
    def test_one_fraction_digit_without_trailing_zero(self, value, expected):
        assert DecimalNumberFormatter().format(value) == expected

    def test_more_fraction_digits(self):
        assert DecimalNumberFormatter(max_fraction_digits=2).format(1.50) == "1.5"
        assert DecimalNumberFormatter(max_fraction_digits=2).format(1.25) == "1.25"

    def test_groups_thousands_with_locale_separator(self, monkeypatch):
        monkeypatch.setattr(locale, "_override_localeconv", US_CONV)

        assert DecimalNumberFormatter().format(1234.5) == "1,234.5"
        assert DecimalNumberFormatter().format(1234567.0) == "1,234,567"

    def test_uses_locale_decimal_point(self, monkeypatch):
        monkeypatch.setattr(locale, "_override_localeconv", DE_CONV)

        assert DecimalNumberFormatter().format(1234.5) == "1.234,5"
        assert DecimalNumberFormatter().format(1000.0) == "1.000"
        assert DecimalNumberFormatter().format(2.5) == "2,5"


def test_strip_zero_fraction():
    assert strip_zero_fraction("2.50", ".") == "2.5"
    assert strip_zero_fraction("1.000,0", ",") == "1.000"
    assert strip_zero_fraction("-0.0", ".") == "0"
    assert strip_zero_fraction("120", ".") == "120"


class TestColorComponents:
    def test_rgb_passes_through(self):
        color = RGB(0.1, 0.2, 0.3)
        assert color_components(color) is color

    @pytest.mark.parametrize(
        "color, expected",
        [
            ("#ff0000", RGB(1.0, 0.0, 0.0)),
            ("#F00", RGB(1.0, 0.0, 0.0)),
            ("#0000ff80", RGB(0.0, 0.0, 1.0)),
            ("  White ", RGB(1.0, 1.0, 1.0)),
            ("blue", RGB(0.0, 0.0, 1.0)),
            ((1.0, 0.5, 0.0), RGB(1.0, 0.5, 0.0)),
            ([0.0, 1.0, 0.0, 0.5], RGB(0.0, 1.0, 0.0)),
        ],
    )
    def test_resolves(self, color, expected):
        assert color_components(color) == expected

    def test_grayscale_pair_expands_to_three_channels(self):
        assert color_components((0.25, 1.0)) == RGB(0.25, 0.25, 0.25)

    @pytest.mark.parametrize(
        "color",
        [
            None,
            "teal",
            "#12345",
            "#zzzzzz",
            (1.0,),
            (),
            (2.0, 0.0, 0.0),
            (float("nan"), 0.0, 0.0),
            (True, False, False),
            RGB(1.5, 0.0, 0.0),
            42,
        ],
    )
    def test_unresolvable(self, color):
        assert color_components(color) is None
