"""
Calendar and inflation helpers for household forecasting.

This module provides financial-year parsing, year-zero growth factors and
inflation adjustment between calendar years.
"""

from pydantic import BaseModel, ConfigDict, Field


def parse_financial_year(financial_year: str) -> int:
    """
    Get the calendar year a financial year starts in.

    Args:
        financial_year: Financial year label, e.g. "2025-26"

    Returns:
        The starting calendar year (2025 for "2025-26")

    Raises:
        ValueError: If the label is not of the form YYYY-YY
    """
    head, _, tail = financial_year.partition("-")
    if not head.isdigit() or len(head) != 4 or not tail.isdigit():
        raise ValueError(f"Invalid financial year: {financial_year!r}")
    return int(head)


def financial_year_label(start_year: int) -> str:
    """Get the financial year label starting in the given calendar year."""
    return f"{start_year}-{(start_year + 1) % 100:02d}"


def growth_factor(rate_percent: float, years: float) -> float:
    """
    Compound growth factor for a percentage rate over a number of years.

    Args:
        rate_percent: Annual rate as a percentage (2.5 for 2.5%)
        years: Number of years (may be negative)

    Returns:
        (1 + rate)^years
    """
    return (1 + rate_percent / 100) ** years


class InflationAdjuster(BaseModel):
    """Moves amounts between calendar years at a constant inflation rate."""

    model_config = ConfigDict(frozen=True)

    inflation_rate: float = Field(
        ..., ge=-100, le=100, description="Annual inflation rate (%)"
    )
    base_year: int = Field(
        ..., ge=1900, le=2200, description="Year amounts are expressed in"
    )

    def adjust_for_inflation(
        self, amount: float, from_year: int, to_year: int
    ) -> float:
        """
        Restate an amount from one year's dollars in another's.

        Moving forward in time inflates the amount; moving back deflates it.
        """
        if from_year == to_year:
            return amount
        return amount * growth_factor(self.inflation_rate, to_year - from_year)

    def to_nominal_value(self, real_amount: float, year: int) -> float:
        """Base-year dollars restated in the given year's dollars."""
        return self.adjust_for_inflation(real_amount, self.base_year, year)

    def to_real_value(self, nominal_amount: float, year: int) -> float:
        """The given year's dollars restated in base-year dollars."""
        return self.adjust_for_inflation(nominal_amount, year, self.base_year)
