"""
School fee schedule for children.

Year levels are integers: -2 = ELP3, -1 = ELP4, 0 = Prep, 1..12 = Year 1..12.
A child advances one level per calendar year from the level recorded for
their reference year. Fees are quoted for a base year and inflate from there.
"""

from typing import List

from .household import Child, EducationFeeSchedule
from .time_grid import InflationAdjuster

FIRST_SCHOOL_LEVEL = -2
FINAL_SCHOOL_LEVEL = 12


def year_level_in(child: Child, year: int) -> int:
    """Get the year level a child is in during a calendar year."""
    return child.current_year_level + (year - child.current_year)


def is_in_school(year_level: int) -> bool:
    """Check whether a year level is within ELP3 to Year 12."""
    return FIRST_SCHOOL_LEVEL <= year_level <= FINAL_SCHOOL_LEVEL


def any_child_in_school(children: List[Child], year: int) -> bool:
    """Check whether at least one child is at school in a calendar year."""
    return any(is_in_school(year_level_in(child, year)) for child in children)


def describe_year_level(year_level: int) -> str:
    """Human-readable name of a year level."""
    if year_level <= -2:
        return "ELP3"
    if year_level == -1:
        return "ELP4"
    if year_level == 0:
        return "Prep"
    return f"Year {year_level}"


def fee_for_year_level(year_level: int, fees: EducationFeeSchedule) -> float:
    """Base-year annual fee for a year level (0 outside school)."""
    if not is_in_school(year_level):
        return 0.0
    if year_level == -2:
        return fees.elp3
    if year_level == -1:
        return fees.elp4
    if year_level <= 4:
        return fees.prep_to_year4
    if year_level <= 6:
        return fees.year5_and_6
    if year_level <= 9:
        return fees.year7_to_9
    return fees.year10_to_12


def child_education_fee(
    child: Child, year: int, fees: EducationFeeSchedule, inflation_rate: float
) -> float:
    """
    Annual fee for one child in a calendar year.

    Args:
        child: The child
        year: Calendar year to price
        fees: Fee schedule in base-year dollars
        inflation_rate: Annual inflation (%)

    Returns:
        Fee inflated from the schedule's base year to the given year
    """
    base_fee = fee_for_year_level(year_level_in(child, year), fees)
    if base_fee <= 0:
        return 0.0
    adjuster = InflationAdjuster(
        inflation_rate=inflation_rate, base_year=fees.base_year
    )
    return adjuster.to_nominal_value(base_fee, year)


def calculate_education_expenses(
    year: int,
    children: List[Child],
    fees: EducationFeeSchedule,
    inflation_rate: float,
) -> float:
    """Total school fees for all children in a calendar year."""
    return sum(
        child_education_fee(child, year, fees, inflation_rate) for child in children
    )
