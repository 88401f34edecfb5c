"""
Synthesized expense items.

Mortgage repayments and school fees are kept in the expense list as
generated items so that the current cash-flow view includes them. These
helpers rebuild those items from the mortgage, children and fee schedule.
Every function returns new values and leaves its inputs untouched.
"""

from typing import List

from .education import (
    child_education_fee,
    describe_year_level,
    is_in_school,
    year_level_in,
)
from .household import (
    EDUCATION_EXPENSE_PREFIX,
    MORTGAGE_EXPENSE_ID,
    MORTGAGE_EXTRA_EXPENSE_ID,
    AssetBundle,
    Child,
    EducationFeeSchedule,
    ExpenseItem,
    Mortgage,
)
from .mortgage_amortization import MortgageCalculator
from .portfolio import total_portfolio_value

HOUSING_CATEGORY = "Housing"
EDUCATION_CATEGORY = "Education"
MORTGAGE_EXPENSE_NAME = "Mortgage Payment"
MORTGAGE_EXTRA_EXPENSE_NAME = "Extra Mortgage Payment"


def _upsert(expenses: List[ExpenseItem], item: ExpenseItem) -> List[ExpenseItem]:
    """Replace the item with the same id in place, or append it."""
    for index, existing in enumerate(expenses):
        if existing.id == item.id:
            return expenses[:index] + [item] + expenses[index + 1 :]
    return expenses + [item]


def _is_named_mortgage_item(expense: ExpenseItem) -> bool:
    return (
        expense.category == HOUSING_CATEGORY and expense.name == MORTGAGE_EXPENSE_NAME
    )


def sync_mortgage_expenses(
    expenses: List[ExpenseItem], mortgage: Mortgage
) -> List[ExpenseItem]:
    """
    Keep the generated mortgage repayment items in step with the mortgage.

    The regular repayment becomes a monthly "mortgage-auto" item. An existing
    "mortgage-auto" item is updated; without one, the first Housing
    "Mortgage Payment" item is taken over. An extra repayment gets its own
    "mortgage-extra-auto" item, removed again when the extra amount is zero.
    Other Housing items mentioning a mortgage are dropped as stale duplicates.
    A mortgage with no loan amount leaves the list unchanged.

    Args:
        expenses: Current expense items
        mortgage: Mortgage to derive repayments from

    Returns:
        New list of expense items
    """
    if not mortgage.loan_amount:
        return list(expenses)

    monthly_payment = MortgageCalculator.calculate_monthly_equivalent(mortgage)
    updated = list(expenses)

    # Prefer the generated item; a legacy name match is only adopted without one
    target = next(
        (i for i, e in enumerate(updated) if e.id == MORTGAGE_EXPENSE_ID), None
    )
    if target is None:
        target = next(
            (i for i, e in enumerate(updated) if _is_named_mortgage_item(e)), None
        )

    if target is not None:
        updated[target] = updated[target].model_copy(
            update={
                "id": MORTGAGE_EXPENSE_ID,
                "amount": monthly_payment,
                "frequency": "monthly",
            }
        )
    else:
        updated.append(
            ExpenseItem(
                id=MORTGAGE_EXPENSE_ID,
                name=MORTGAGE_EXPENSE_NAME,
                category=HOUSING_CATEGORY,
                amount=monthly_payment,
                frequency="monthly",
            )
        )

    if mortgage.extra_monthly_payment > 0:
        existing = next(
            (e for e in updated if e.id == MORTGAGE_EXTRA_EXPENSE_ID), None
        )
        if existing is not None:
            extra = existing.model_copy(
                update={
                    "amount": mortgage.extra_monthly_payment,
                    "frequency": "monthly",
                }
            )
        else:
            extra = ExpenseItem(
                id=MORTGAGE_EXTRA_EXPENSE_ID,
                name=MORTGAGE_EXTRA_EXPENSE_NAME,
                category=HOUSING_CATEGORY,
                amount=mortgage.extra_monthly_payment,
                frequency="monthly",
            )
        updated = _upsert(updated, extra)
    else:
        updated = [e for e in updated if e.id != MORTGAGE_EXTRA_EXPENSE_ID]

    return [
        e
        for e in updated
        if e.id in (MORTGAGE_EXPENSE_ID, MORTGAGE_EXTRA_EXPENSE_ID)
        or not (e.category == HOUSING_CATEGORY and "mortgage" in e.name.lower())
    ]


def sync_education_expenses(
    expenses: List[ExpenseItem],
    children: List[Child],
    fees: EducationFeeSchedule,
    current_year: int,
    inflation_rate: float,
) -> List[ExpenseItem]:
    """
    Keep one generated school-fee item per child at school.

    Each child at school in ``current_year`` gets a monthly
    "education-auto-<child id>" item priced at this year's inflated fee.
    Items for children who have left school, or who are no longer listed,
    are removed.

    Args:
        expenses: Current expense items
        children: Children to price
        fees: Fee schedule in base-year dollars
        current_year: Calendar year to price fees for
        inflation_rate: Annual inflation (%)

    Returns:
        New list of expense items
    """
    updated = list(expenses)

    for child in children:
        expense_id = f"{EDUCATION_EXPENSE_PREFIX}{child.id}"
        year_level = year_level_in(child, current_year)
        annual_fee = child_education_fee(child, current_year, fees, inflation_rate)

        if not is_in_school(year_level) or annual_fee <= 0:
            updated = [e for e in updated if e.id != expense_id]
            continue

        name = f"{child.name} - {describe_year_level(year_level)} Education"
        existing = next((e for e in updated if e.id == expense_id), None)
        if existing is not None:
            item = existing.model_copy(
                update={"name": name, "amount": annual_fee / 12, "frequency": "monthly"}
            )
        else:
            item = ExpenseItem(
                id=expense_id,
                name=name,
                category=EDUCATION_CATEGORY,
                amount=annual_fee / 12,
                frequency="monthly",
            )
        updated = _upsert(updated, item)

    valid_ids = {f"{EDUCATION_EXPENSE_PREFIX}{child.id}" for child in children}
    return [
        e
        for e in updated
        if not e.id.startswith(EDUCATION_EXPENSE_PREFIX) or e.id in valid_ids
    ]


def sync_portfolio_value(assets: AssetBundle) -> AssetBundle:
    """
    Set the portfolio value to the sum of its items.

    A bundle without portfolio items keeps its entered portfolio value.
    """
    if not assets.portfolio_items:
        return assets
    return assets.model_copy(
        update={"portfolio_value": total_portfolio_value(assets.portfolio_items)}
    )
