"""
Household expense aggregation.

This module normalises expense items to a fortnightly cadence, splits each
item between the two earners by its proportions, and re-derives monthly and
annual totals. It also partitions items by how the forecast engine treats
them and computes disposable income after expenses.
"""

from typing import Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field

from .household import ExpenseFrequency, ExpenseItem, ExpenseKind

FORTNIGHTS_PER_YEAR = 26


class PartyTotals(BaseModel):
    """Amounts for each earner and the household."""

    model_config = ConfigDict(frozen=True)

    primary: float = Field(default=0.0)
    partner: float = Field(default=0.0)
    combined: float = Field(default=0.0)


class CadenceTotals(BaseModel):
    """Party totals at each reporting cadence."""

    model_config = ConfigDict(frozen=True)

    fortnightly: PartyTotals
    monthly: PartyTotals
    annual: PartyTotals


class ExpenseBreakdown(BaseModel):
    """One expense item split between the earners."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: str
    frequency: ExpenseFrequency
    total_amount: float = Field(..., description="Amount per frequency period")
    primary_share: float
    partner_share: float
    primary_percentage: float
    partner_percentage: float
    fortnightly_total: float
    fortnightly_primary: float
    fortnightly_partner: float


class ExpenseSummary(BaseModel):
    """Breakdowns for a list of expenses plus cadence totals."""

    model_config = ConfigDict(frozen=True)

    expenses: List[ExpenseBreakdown]
    totals: CadenceTotals


class ExpensePartition(BaseModel):
    """Expense items grouped by how the forecast treats them."""

    model_config = ConfigDict(frozen=True)

    regular: List[ExpenseItem] = Field(default_factory=list)
    mortgage: List[ExpenseItem] = Field(default_factory=list)
    education: List[ExpenseItem] = Field(default_factory=list)
    dependents: List[ExpenseItem] = Field(default_factory=list)


class DisposableAmounts(BaseModel):
    """Spendable income, expenses and what is left over."""

    model_config = ConfigDict(frozen=True)

    spendable_income: float
    expenses: float
    disposable: float


class PartyDisposable(BaseModel):
    """Disposable income for one party at each cadence."""

    model_config = ConfigDict(frozen=True)

    fortnightly: DisposableAmounts
    monthly: DisposableAmounts
    annual: DisposableAmounts


class DisposableIncome(BaseModel):
    """Disposable income for both earners and the household."""

    model_config = ConfigDict(frozen=True)

    primary: PartyDisposable
    partner: PartyDisposable
    combined: PartyDisposable


def to_fortnightly(amount: float, frequency: ExpenseFrequency) -> float:
    """Convert an amount at any frequency to a fortnightly amount."""
    if frequency == "weekly":
        return amount * 2
    if frequency == "fortnightly":
        return amount
    if frequency == "monthly":
        return amount * 12 / FORTNIGHTS_PER_YEAR
    if frequency == "annual":
        return amount / FORTNIGHTS_PER_YEAR
    raise ValueError(f"Unknown expense frequency: {frequency}")


def from_fortnightly(amount: float, frequency: Literal["monthly", "annual"]) -> float:
    """Convert a fortnightly amount to a monthly or annual amount."""
    if frequency == "monthly":
        return amount * FORTNIGHTS_PER_YEAR / 12
    if frequency == "annual":
        return amount * FORTNIGHTS_PER_YEAR
    raise ValueError(f"Unknown target frequency: {frequency}")


def calculate_expense_breakdown(expense: ExpenseItem) -> ExpenseBreakdown:
    """
    Split an expense item between the earners.

    Proportions are normalised to sum to 100; an item with no proportions
    is split evenly.
    """
    total_proportion = expense.primary_proportion + expense.partner_proportion
    if total_proportion > 0:
        primary_percentage = expense.primary_proportion / total_proportion * 100
        partner_percentage = expense.partner_proportion / total_proportion * 100
    else:
        primary_percentage = partner_percentage = 50.0

    primary_share = expense.amount * primary_percentage / 100
    partner_share = expense.amount * partner_percentage / 100

    return ExpenseBreakdown(
        id=expense.id,
        name=expense.name,
        category=expense.category,
        frequency=expense.frequency,
        total_amount=expense.amount,
        primary_share=primary_share,
        partner_share=partner_share,
        primary_percentage=primary_percentage,
        partner_percentage=partner_percentage,
        fortnightly_total=to_fortnightly(expense.amount, expense.frequency),
        fortnightly_primary=to_fortnightly(primary_share, expense.frequency),
        fortnightly_partner=to_fortnightly(partner_share, expense.frequency),
    )


def calculate_expense_summary(expenses: List[ExpenseItem]) -> ExpenseSummary:
    """
    Summarise a list of expenses at fortnightly, monthly and annual cadence.

    Per-party totals are summed at the fortnightly cadence and converted, so
    the parties always add up to the combined figure.
    """
    breakdowns = [calculate_expense_breakdown(expense) for expense in expenses]

    fortnightly_primary = sum(b.fortnightly_primary for b in breakdowns)
    fortnightly_partner = sum(b.fortnightly_partner for b in breakdowns)

    def _totals(primary: float, partner: float) -> PartyTotals:
        return PartyTotals(primary=primary, partner=partner, combined=primary + partner)

    return ExpenseSummary(
        expenses=breakdowns,
        totals=CadenceTotals(
            fortnightly=_totals(fortnightly_primary, fortnightly_partner),
            monthly=_totals(
                from_fortnightly(fortnightly_primary, "monthly"),
                from_fortnightly(fortnightly_partner, "monthly"),
            ),
            annual=_totals(
                from_fortnightly(fortnightly_primary, "annual"),
                from_fortnightly(fortnightly_partner, "annual"),
            ),
        ),
    )


def partition_expenses(expenses: List[ExpenseItem]) -> ExpensePartition:
    """Group expense items by kind, preserving their order."""
    groups: Dict[ExpenseKind, List[ExpenseItem]] = {kind: [] for kind in ExpenseKind}
    for expense in expenses:
        groups[expense.kind].append(expense)
    return ExpensePartition(
        regular=groups[ExpenseKind.REGULAR],
        mortgage=groups[ExpenseKind.MORTGAGE],
        education=groups[ExpenseKind.EDUCATION],
        dependents=groups[ExpenseKind.DEPENDENTS],
    )


def calculate_disposable_income(
    primary_spendable_annual: float,
    partner_spendable_annual: float,
    summary: ExpenseSummary,
) -> DisposableIncome:
    """
    Calculate income left over after expenses for each cadence.

    Args:
        primary_spendable_annual: Primary earner's annual spendable income
        partner_spendable_annual: Partner's annual spendable income
        summary: Expense summary to subtract

    Returns:
        DisposableIncome for each party and the household
    """
    spendable = {
        "fortnightly": (
            primary_spendable_annual / FORTNIGHTS_PER_YEAR,
            partner_spendable_annual / FORTNIGHTS_PER_YEAR,
        ),
        "monthly": (primary_spendable_annual / 12, partner_spendable_annual / 12),
        "annual": (primary_spendable_annual, partner_spendable_annual),
    }

    parties: Dict[str, Dict[str, DisposableAmounts]] = {
        "primary": {},
        "partner": {},
        "combined": {},
    }
    for cadence, (primary_income, partner_income) in spendable.items():
        totals: PartyTotals = getattr(summary.totals, cadence)
        primary = DisposableAmounts(
            spendable_income=primary_income,
            expenses=totals.primary,
            disposable=primary_income - totals.primary,
        )
        partner = DisposableAmounts(
            spendable_income=partner_income,
            expenses=totals.partner,
            disposable=partner_income - totals.partner,
        )
        parties["primary"][cadence] = primary
        parties["partner"][cadence] = partner
        parties["combined"][cadence] = DisposableAmounts(
            spendable_income=primary.spendable_income + partner.spendable_income,
            expenses=primary.expenses + partner.expenses,
            disposable=primary.disposable + partner.disposable,
        )

    return DisposableIncome(
        primary=PartyDisposable(**parties["primary"]),
        partner=PartyDisposable(**parties["partner"]),
        combined=PartyDisposable(**parties["combined"]),
    )
