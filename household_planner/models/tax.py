"""
Resident income tax calculations.

Brackets follow the ATO resident tax rate table. Each bracket's minimum sits
one dollar above the previous bracket's maximum, and tax within a bracket is
base amount plus (income - min + 1) x marginal rate.
"""

import logging
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

# Medicare Levy (flat share of taxable income, no low-income phase-in)
MEDICARE_LEVY_RATE = 0.02


class TaxBracket(BaseModel):
    """A single marginal tax bracket."""

    model_config = ConfigDict(frozen=True)

    min: float = Field(..., ge=0, description="Lowest income in the bracket")
    max: Optional[float] = Field(None, description="Highest income (None = no limit)")
    base_amount: float = Field(..., ge=0, description="Tax owed at the bracket floor")
    rate: float = Field(..., ge=0, le=1, description="Marginal rate (0-1)")

    def contains(self, income: float) -> bool:
        return income >= self.min and (self.max is None or income <= self.max)


TAX_BRACKETS_2025_26: List[TaxBracket] = [
    TaxBracket(min=0, max=18200, base_amount=0, rate=0),
    TaxBracket(min=18201, max=45000, base_amount=0, rate=0.19),
    TaxBracket(min=45001, max=135000, base_amount=5092, rate=0.325),
    TaxBracket(min=135001, max=190000, base_amount=34317, rate=0.37),
    TaxBracket(min=190001, max=None, base_amount=54682, rate=0.45),
]

TAX_BRACKET_TABLES: Dict[str, List[TaxBracket]] = {
    "2025-26": TAX_BRACKETS_2025_26,
}


class BracketLookup(BaseModel):
    """Bracket table resolved for a financial year."""

    model_config = ConfigDict(frozen=True)

    financial_year: str = Field(..., description="Year that was requested")
    brackets: List[TaxBracket] = Field(..., description="Bracket table used")
    fallback_used: bool = Field(
        ..., description="True when the year was unknown and the latest table was used"
    )


class TaxCalculationResult(BaseModel):
    """Tax owed on a year's taxable income."""

    model_config = ConfigDict(frozen=True)

    gross_income: float = Field(..., description="Taxable income")
    tax_payable: float = Field(..., ge=0, description="Income tax")
    medicare_levy: float = Field(..., ge=0, description="Medicare levy")
    total_tax: float = Field(..., ge=0, description="Income tax plus levy")
    after_tax_income: float = Field(..., description="Income after total tax")
    effective_tax_rate: float = Field(..., ge=0, description="Total tax / income (%)")


def lookup_tax_brackets(financial_year: Optional[str] = None) -> BracketLookup:
    """
    Resolve the bracket table for a financial year.

    Unknown years fall back to the most recent configured table.
    """
    latest_year = max(TAX_BRACKET_TABLES)
    if financial_year is None:
        return BracketLookup(
            financial_year=latest_year,
            brackets=TAX_BRACKET_TABLES[latest_year],
            fallback_used=False,
        )
    if financial_year in TAX_BRACKET_TABLES:
        return BracketLookup(
            financial_year=financial_year,
            brackets=TAX_BRACKET_TABLES[financial_year],
            fallback_used=False,
        )
    logger.warning(
        f"No tax brackets for financial year {financial_year}, using {latest_year}"
    )
    return BracketLookup(
        financial_year=financial_year,
        brackets=TAX_BRACKET_TABLES[latest_year],
        fallback_used=True,
    )


def find_bracket(income: float, brackets: List[TaxBracket]) -> TaxBracket:
    """
    Get the bracket an income falls in.

    Whole-dollar incomes match the bracket whose [min, max] contains them.
    Cents between one bracket's max and the next bracket's min stay in the
    lower bracket.
    """
    selected = brackets[0]
    for bracket in brackets:
        if bracket.contains(income):
            return bracket
        if income >= bracket.min:
            selected = bracket
    return selected


def calculate_income_tax(
    gross_income: float,
    include_medicare_levy: bool = True,
    financial_year: Optional[str] = None,
    brackets: Optional[List[TaxBracket]] = None,
) -> TaxCalculationResult:
    """
    Calculate income tax and Medicare levy on taxable income.

    Args:
        gross_income: Taxable income for the year
        include_medicare_levy: Whether to add the Medicare levy
        financial_year: Bracket table to use (latest when omitted)
        brackets: Already resolved bracket table; overrides financial_year

    Returns:
        TaxCalculationResult with tax, levy, after-tax income and effective rate
    """
    if gross_income <= 0:
        return TaxCalculationResult(
            gross_income=0,
            tax_payable=0,
            medicare_levy=0,
            total_tax=0,
            after_tax_income=0,
            effective_tax_rate=0,
        )

    if brackets is None:
        brackets = lookup_tax_brackets(financial_year).brackets

    bracket = find_bracket(gross_income, brackets)
    taxable_amount = gross_income - bracket.min + 1
    tax_payable = bracket.base_amount + taxable_amount * bracket.rate

    medicare_levy = gross_income * MEDICARE_LEVY_RATE if include_medicare_levy else 0.0
    total_tax = tax_payable + medicare_levy

    return TaxCalculationResult(
        gross_income=gross_income,
        tax_payable=tax_payable,
        medicare_levy=medicare_levy,
        total_tax=total_tax,
        after_tax_income=gross_income - total_tax,
        effective_tax_rate=total_tax / gross_income * 100,
    )


def get_tax_bracket_info(
    gross_income: float, financial_year: Optional[str] = None
) -> Tuple[TaxBracket, float]:
    """
    Get the bracket an income falls in and its marginal rate.

    Returns:
        Tuple of (bracket, marginal rate as a percentage). Incomes below
        the first bracket report the first bracket.
    """
    bracket = find_bracket(gross_income, lookup_tax_brackets(financial_year).brackets)
    return bracket, bracket.rate * 100
