"""
Forecast result model.

This module provides the per-year projection record and the result model
that collects the full trajectory with lifetime summary totals.

The ForecastResult serves as the unified output format that:
1. Holds one immutable YearProjection per simulated calendar year
2. Provides helper methods for series extraction and common queries
3. Supports serialization for storage, export and prompt assembly
"""

import json
from typing import Any, Dict, List, Optional

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field, model_validator


class YearProjection(BaseModel):
    """Household state for one simulated year."""

    model_config = ConfigDict(frozen=True)

    year: int = Field(..., ge=1, description="Sequential year (1-based)")
    calendar_year: int = Field(..., description="Calendar year")
    primary_age: int
    partner_age: int
    primary_retired: bool
    partner_retired: bool

    # Income (taxable, after pre-tax lease)
    primary_gross_income: float
    partner_gross_income: float
    combined_gross_income: float

    # Tax
    primary_tax: float
    partner_tax: float
    combined_tax: float

    # Super contributions
    primary_super: float
    partner_super: float
    combined_super: float

    # After-tax income
    primary_after_tax: float
    partner_after_tax: float
    combined_after_tax: float

    # Expenses (inflated); per-person figures exclude education
    primary_expenses: float
    partner_expenses: float
    combined_expenses: float
    education_expenses: float

    # Expense breakdown
    regular_expenses: float
    mortgage_expenses: float
    dependents_expenses: float

    # Income sources
    work_income: float = Field(..., description="Combined after-tax work income")
    super_drawdown: float = Field(default=0, ge=0)
    portfolio_drawdown: float = Field(default=0, ge=0)
    auto_invested: float = Field(default=0, ge=0)

    # Splurge (spent, not saved)
    primary_splurge: float
    partner_splurge: float
    combined_splurge: float

    cumulative_savings: float

    # Balances
    primary_super_balance: float
    partner_super_balance: float
    total_super_balance: float
    portfolio_value: float
    total_car_value: float
    other_assets_value: float
    mortgage_balance: float

    total_net_worth: float = Field(..., description="Assets minus mortgage")

    @property
    def both_retired(self) -> bool:
        return self.primary_retired and self.partner_retired


class ForecastSummary(BaseModel):
    """Lifetime totals across all projected years."""

    model_config = ConfigDict(frozen=True)

    total_years: int = Field(..., ge=1)
    total_income_earned: float
    total_tax_paid: float
    total_super_contributed: float
    total_expenses: float
    final_cumulative_savings: float
    average_annual_savings: float


class ForecastResult(BaseModel):
    """
    Ordered year-by-year projections plus summary totals.

    Example:
        ```python
        result = calculate_forecast(config)
        net_worth = result.get_series("total_net_worth")
        payoff = result.mortgage_payoff_year()
        ```
    """

    model_config = ConfigDict(frozen=True)

    projections: List[YearProjection] = Field(
        ..., min_length=1, description="One record per simulated year"
    )
    summary: ForecastSummary

    @model_validator(mode="after")
    def validate_calendar_order(self) -> "ForecastResult":
        """Projections must cover consecutive calendar years in order."""
        for previous, current in zip(self.projections, self.projections[1:]):
            if current.calendar_year != previous.calendar_year + 1:
                raise ValueError(
                    f"Projection for {current.calendar_year} does not follow "
                    f"{previous.calendar_year}"
                )
        return self

    @classmethod
    def from_projections(cls, projections: List[YearProjection]) -> "ForecastResult":
        """Build a result and its summary from a non-empty list of projections."""
        years = len(projections)
        cumulative_savings = projections[-1].cumulative_savings
        totals = {
            name: float(np.sum([getattr(p, name) for p in projections]))
            for name in (
                "combined_gross_income",
                "combined_tax",
                "combined_super",
                "combined_expenses",
            )
        }
        summary = ForecastSummary(
            total_years=years,
            total_income_earned=totals["combined_gross_income"],
            total_tax_paid=totals["combined_tax"],
            total_super_contributed=totals["combined_super"],
            total_expenses=totals["combined_expenses"],
            final_cumulative_savings=cumulative_savings,
            average_annual_savings=cumulative_savings / years,
        )
        return cls(projections=projections, summary=summary)

    @property
    def years(self) -> int:
        """Number of projected years."""
        return len(self.projections)

    @property
    def calendar_years(self) -> List[int]:
        return [p.calendar_year for p in self.projections]

    def get_series(self, field: str) -> NDArray[np.float64]:
        """
        Get one projection field across all years.

        Args:
            field: YearProjection field name, e.g. "total_net_worth"

        Returns:
            Array of shape (years,)

        Raises:
            ValueError: If the field is not a numeric projection field
        """
        if field not in YearProjection.model_fields:
            raise ValueError(f"Unknown projection field: {field}")
        return np.array(
            [getattr(p, field) for p in self.projections], dtype=np.float64
        )

    def get_projection(self, calendar_year: int) -> Optional[YearProjection]:
        """Get the projection for a calendar year, if simulated."""
        index = calendar_year - self.projections[0].calendar_year
        if 0 <= index < len(self.projections):
            return self.projections[index]
        return None

    def retirement_year(self) -> Optional[int]:
        """First calendar year in which both earners are retired."""
        for projection in self.projections:
            if projection.both_retired:
                return projection.calendar_year
        return None

    def mortgage_payoff_year(self) -> Optional[int]:
        """First calendar year ending with a zero mortgage balance."""
        for projection in self.projections:
            if projection.mortgage_balance <= 0:
                return projection.calendar_year
        return None

    def peak_net_worth(self) -> YearProjection:
        """Projection with the highest net worth."""
        index = int(np.argmax(self.get_series("total_net_worth")))
        return self.projections[index]

    def get_balance_statistics(self) -> Dict[str, float]:
        """Net-worth and drawdown statistics across the trajectory."""
        net_worth = self.get_series("total_net_worth")
        drawdowns = self.get_series("super_drawdown") + self.get_series(
            "portfolio_drawdown"
        )
        return {
            "final_net_worth": float(net_worth[-1]),
            "peak_net_worth": float(np.max(net_worth)),
            "min_net_worth": float(np.min(net_worth)),
            "mean_net_worth": float(np.mean(net_worth)),
            "total_drawdown": float(np.sum(drawdowns)),
            "years_in_drawdown": int(np.count_nonzero(drawdowns)),
        }

    def to_dict(self, include_projections: bool = True) -> Dict[str, Any]:
        """
        Convert result to dictionary for serialization.

        Args:
            include_projections: Whether to include every yearly record

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        result: Dict[str, Any] = {
            "summary": self.summary.model_dump(),
            "balance_statistics": self.get_balance_statistics(),
            "retirement_year": self.retirement_year(),
            "mortgage_payoff_year": self.mortgage_payoff_year(),
        }
        if include_projections:
            result["projections"] = [p.model_dump() for p in self.projections]
        return result

    def to_json(self, include_projections: bool = True, indent: int = 2) -> str:
        """Convert result to JSON string."""
        return json.dumps(
            self.to_dict(include_projections=include_projections), indent=indent
        )
