"""Tests for display formatting."""

from milkcoop.core import units


class TestFormatLiters:
    def test_thousands_separator(self):
        assert units.format_liters(1250.5) == "1,250.5 l"

    def test_decimals(self):
        assert units.format_liters(3, decimals=0) == "3 l"

    def test_negative_stock(self):
        assert units.format_liters(-3) == "-3.0 l"


class TestFormatCurrency:
    def test_uses_configured_currency(self, monkeypatch):
        monkeypatch.setattr(units.settings, "currency", "KES")
        assert units.format_currency(1234.5) == "KES 1,234.50"


class TestFormatStatus:
    """Tests for enum display text."""

    def test_multi_word(self):
        assert units.format_status("UNDER_TREATMENT") == "Under treatment"

    def test_single_word(self):
        assert units.format_status("HEALTHY") == "Healthy"


def test_yes_no():
    assert units.yes_no(True) == "Yes"
    assert units.yes_no(False) == "No"
