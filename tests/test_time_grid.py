"""
Tests for calendar and inflation helpers.

This module tests financial-year parsing, growth factors and inflation
adjustment between calendar years.
"""

import pytest

from household_planner.models.time_grid import (
    InflationAdjuster,
    financial_year_label,
    growth_factor,
    parse_financial_year,
)


class TestFinancialYear:
    """Test financial year labels."""

    def test_parse_financial_year(self):
        assert parse_financial_year("2025-26") == 2025
        assert parse_financial_year("1999-00") == 1999

    def test_parse_invalid_financial_year(self):
        for label in ["2025", "25-26", "abcd-ef", "2025-", ""]:
            with pytest.raises(ValueError, match="Invalid financial year"):
                parse_financial_year(label)

    def test_financial_year_label(self):
        assert financial_year_label(2025) == "2025-26"
        assert financial_year_label(2099) == "2099-00"
        assert financial_year_label(2008) == "2008-09"


class TestGrowthFactor:
    """Test compound growth factors."""

    def test_year_zero(self):
        assert growth_factor(3, 0) == 1

    def test_compounding(self):
        assert growth_factor(3, 2) == pytest.approx(1.0609)

    def test_negative_years(self):
        assert growth_factor(2.5, -1) == pytest.approx(1 / 1.025)

    def test_zero_rate(self):
        assert growth_factor(0, 40) == 1


class TestInflationAdjuster:
    """Test InflationAdjuster functionality."""

    def test_inflation_adjustment(self):
        """Test basic inflation adjustment."""
        adjuster = InflationAdjuster(inflation_rate=2.5, base_year=2026)

        adjusted = adjuster.adjust_for_inflation(1000, 2026, 2028)

        # 1000 * 1.025^2
        assert adjusted == pytest.approx(1050.625)

    def test_same_year(self):
        adjuster = InflationAdjuster(inflation_rate=2.5, base_year=2026)

        assert adjuster.adjust_for_inflation(1000, 2030, 2030) == 1000

    def test_nominal_and_real(self):
        """Test conversion between base-year and nominal dollars."""
        adjuster = InflationAdjuster(inflation_rate=2.5, base_year=2026)

        nominal = adjuster.to_nominal_value(1000, 2028)
        real = adjuster.to_real_value(nominal, 2028)

        assert nominal == pytest.approx(1050.625)
        assert real == pytest.approx(1000)

    def test_invalid_rate(self):
        with pytest.raises(ValueError):
            InflationAdjuster(inflation_rate=150, base_year=2026)
