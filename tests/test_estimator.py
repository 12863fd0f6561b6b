"""
Unit tests for print cost estimation and quotes.
"""

import pytest

from core.exceptions import ValidationError
from models.print_settings import ColorMode, PrintSettings, Quality, Sides, TokenType
from modules.estimator import PriceQuoter, estimate


class TestEstimate:
    """The pure per-page price formula."""

    def test_color_standard_single_sided(self):
        assert estimate(10, ColorMode.COLOR, Quality.STANDARD, False, 1) == 2.50

    def test_black_and_white_duplex(self):
        assert estimate(10, ColorMode.BLACK_AND_WHITE, Quality.STANDARD, True, 1) == 0.90

    def test_accepts_string_choices(self):
        assert estimate(10, "Color", "High", False, 2) == 7.50

    def test_draft_discount(self):
        assert estimate(100, ColorMode.BLACK_AND_WHITE, Quality.DRAFT, False, 1) == 8.00

    def test_rounds_half_up(self):
        # 1 x 0.25 x 0.9 = 0.225
        assert estimate(1, ColorMode.COLOR, Quality.STANDARD, True, 1) == 0.23

    def test_zero_pages_costs_nothing(self):
        assert estimate(0, ColorMode.COLOR, Quality.HIGH, False, 3) == 0.0

    def test_monotonic_in_pages_and_copies(self):
        previous = 0.0
        for pages in range(1, 30):
            price = estimate(pages, ColorMode.COLOR, Quality.STANDARD, False, 1)
            assert price >= previous
            previous = price
        assert estimate(10, ColorMode.COLOR, Quality.STANDARD, False, 3) > estimate(10, ColorMode.COLOR, Quality.STANDARD, False, 2)

    def test_unknown_color_mode_rejected(self):
        with pytest.raises(ValidationError):
            estimate(10, "Sepia", Quality.STANDARD, False, 1)


class TestPriceQuoter:
    """Quotes add the token fee on top of the estimate."""

    def test_normal_token_has_no_fee(self, quoter):
        result = quoter.quote(10, PrintSettings(color_mode=ColorMode.COLOR), TokenType.NORMAL)
        assert result["subtotal"] == 2.50
        assert result["tokenFee"] == 0.0
        assert result["total"] == 2.50

    def test_priority_token_adds_flat_fee(self, quoter):
        settings = PrintSettings(color_mode=ColorMode.BLACK_AND_WHITE, sides=Sides.TWO_SIDED_LONG_EDGE)
        result = quoter.quote(10, settings, "priority")
        assert result["subtotal"] == 0.90
        assert result["tokenFee"] == 1.50
        assert result["total"] == 2.40

    def test_priority_fee_is_exact_for_any_settings(self, quoter):
        for quality in Quality:
            settings = PrintSettings(color_mode=ColorMode.COLOR, quality=quality, copies=3)
            normal = quoter.quote(7, settings, TokenType.NORMAL)["total"]
            priority = quoter.quote(7, settings, TokenType.PRIORITY)["total"]
            assert priority == pytest.approx(normal + 1.50)

    def test_billable_pages_and_currency(self, quoter):
        result = quoter.quote(4, PrintSettings(copies=3))
        assert result["billablePages"] == 12
        assert result["currency"] == "INR"
        assert result["reasoning"]

    def test_configurable_fee(self):
        quoter = PriceQuoter(priority_token_fee=2.0)
        assert quoter.token_fee("priority") == 2.0
        assert quoter.token_fee(TokenType.NORMAL) == 0.0
