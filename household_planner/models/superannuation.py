"""
Superannuation contribution calculations.

Employer Super Guarantee (SG) rates follow the ATO schedule by financial
year. Voluntary (salary-sacrificed) super is a rate applied to the same base.
"""

import logging
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

SUPER_GUARANTEE_RATES: Dict[str, float] = {
    "2024-25": 0.115,
    "2025-26": 0.12,
    "2026-27": 0.125,
    "2027-28": 0.13,
    "2028-29": 0.135,
    "2029-30": 0.14,
}


class RateLookup(BaseModel):
    """SG rate resolved for a financial year."""

    model_config = ConfigDict(frozen=True)

    financial_year: str = Field(..., description="Year that was requested")
    rate: float = Field(..., ge=0, le=1, description="SG rate (0-1)")
    fallback_used: bool = Field(
        ..., description="True when the year was unknown and the latest rate was used"
    )


class SuperCalculationResult(BaseModel):
    """Super contributions for one person and year."""

    model_config = ConfigDict(frozen=True)

    sg_base: float = Field(..., description="Earnings SG is calculated on")
    employer_sg: float = Field(..., description="Employer SG contribution")
    voluntary_super: float = Field(..., description="Voluntary contribution")
    total_super: float = Field(..., description="Employer plus voluntary")
    sg_rate: float = Field(..., description="SG rate applied (%)")


def get_available_financial_years() -> List[str]:
    """Get the financial years with a known SG rate."""
    return sorted(SUPER_GUARANTEE_RATES)


def lookup_sg_rate(financial_year: str) -> RateLookup:
    """
    Resolve the SG rate for a financial year.

    Unknown years fall back to the most recent scheduled rate.
    """
    if financial_year in SUPER_GUARANTEE_RATES:
        return RateLookup(
            financial_year=financial_year,
            rate=SUPER_GUARANTEE_RATES[financial_year],
            fallback_used=False,
        )

    latest_year = get_available_financial_years()[-1]
    logger.warning(
        f"No SG rate for financial year {financial_year}, using {latest_year}"
    )
    return RateLookup(
        financial_year=financial_year,
        rate=SUPER_GUARANTEE_RATES[latest_year],
        fallback_used=True,
    )


def get_sg_rate(financial_year: str) -> float:
    """Get the SG rate (0-1) for a financial year."""
    return lookup_sg_rate(financial_year).rate


def calculate_super(
    base_salary: float,
    bonus: float,
    allowances: float,
    voluntary_super_rate: float,
    financial_year: str,
) -> SuperCalculationResult:
    """
    Calculate employer and voluntary super contributions.

    Args:
        base_salary: Annual base salary
        bonus: Annual bonus or commission
        allowances: Annual allowances
        voluntary_super_rate: Voluntary contribution rate (0-1)
        financial_year: Financial year for the SG rate, e.g. "2025-26"

    Returns:
        SuperCalculationResult with the SG base and each contribution
    """
    sg_rate = get_sg_rate(financial_year)
    sg_base = base_salary + bonus + allowances

    employer_sg = sg_base * sg_rate
    voluntary_super = sg_base * voluntary_super_rate

    return SuperCalculationResult(
        sg_base=sg_base,
        employer_sg=employer_sg,
        voluntary_super=voluntary_super,
        total_super=employer_sg + voluntary_super,
        sg_rate=sg_rate * 100,
    )
