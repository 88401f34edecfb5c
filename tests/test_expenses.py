"""Tests for household expense aggregation."""

import pytest
from pydantic import ValidationError

from household_planner.models.expenses import (
    calculate_disposable_income,
    calculate_expense_breakdown,
    calculate_expense_summary,
    from_fortnightly,
    partition_expenses,
    to_fortnightly,
)
from household_planner.models.household import ExpenseItem, ExpenseKind


@pytest.fixture
def groceries():
    return ExpenseItem(
        id="2", name="Groceries", category="Food", amount=300, frequency="weekly"
    )


@pytest.fixture
def utilities():
    return ExpenseItem(
        id="3",
        name="Utilities",
        category="Bills",
        amount=400,
        frequency="monthly",
        primary_proportion=55,
        partner_proportion=45,
    )


class TestFrequencyConversion:
    """Test cases for cadence conversion."""

    def test_to_fortnightly(self):
        assert to_fortnightly(300, "weekly") == 600
        assert to_fortnightly(250, "fortnightly") == 250
        assert to_fortnightly(1300, "monthly") == pytest.approx(600)
        assert to_fortnightly(2600, "annual") == pytest.approx(100)

    def test_unknown_frequency(self):
        with pytest.raises(ValueError):
            to_fortnightly(100, "daily")

    def test_from_fortnightly(self):
        assert from_fortnightly(600, "monthly") == pytest.approx(1300)
        assert from_fortnightly(100, "annual") == pytest.approx(2600)

    def test_unknown_target_frequency(self):
        with pytest.raises(ValueError):
            from_fortnightly(100, "weekly")

    def test_annual_round_trip(self):
        """Any frequency converted to fortnightly and back to annual."""
        assert from_fortnightly(to_fortnightly(300, "weekly"), "annual") == (
            pytest.approx(15600)
        )
        assert from_fortnightly(to_fortnightly(400, "monthly"), "annual") == (
            pytest.approx(4800)
        )


class TestExpenseBreakdown:
    """Test cases for splitting a single expense."""

    def test_uneven_split(self, utilities):
        breakdown = calculate_expense_breakdown(utilities)

        assert breakdown.primary_share == pytest.approx(220)
        assert breakdown.partner_share == pytest.approx(180)
        assert breakdown.primary_percentage == pytest.approx(55)
        assert breakdown.fortnightly_total == pytest.approx(400 * 12 / 26)

    def test_proportions_are_normalised(self):
        """Proportions that do not sum to 100 are scaled."""
        expense = ExpenseItem(
            id="x",
            name="Gym",
            amount=100,
            primary_proportion=30,
            partner_proportion=10,
        )

        breakdown = calculate_expense_breakdown(expense)

        assert breakdown.primary_percentage == pytest.approx(75)
        assert breakdown.partner_percentage == pytest.approx(25)
        assert breakdown.primary_share == pytest.approx(75)

    def test_zero_proportions_split_evenly(self):
        expense = ExpenseItem(
            id="x",
            name="Gifts",
            amount=120,
            frequency="annual",
            primary_proportion=0,
            partner_proportion=0,
        )

        breakdown = calculate_expense_breakdown(expense)

        assert breakdown.primary_share == pytest.approx(60)
        assert breakdown.partner_share == pytest.approx(60)

    def test_shares_sum_to_total(self, groceries, utilities):
        for expense in [groceries, utilities]:
            breakdown = calculate_expense_breakdown(expense)
            assert breakdown.fortnightly_primary + breakdown.fortnightly_partner == (
                pytest.approx(breakdown.fortnightly_total)
            )


class TestExpenseSummary:
    """Test cases for expense summaries."""

    def test_totals(self, groceries, utilities):
        summary = calculate_expense_summary([groceries, utilities])

        # 300 weekly + 400 monthly = 15,600 + 4,800 a year
        assert summary.totals.annual.combined == pytest.approx(20400)
        assert summary.totals.monthly.combined == pytest.approx(1700)
        assert summary.totals.annual.primary == pytest.approx(7800 + 2640)
        assert summary.totals.annual.partner == pytest.approx(7800 + 2160)

    def test_parties_sum_to_combined(self, groceries, utilities):
        """Expense conservation at every cadence."""
        summary = calculate_expense_summary([groceries, utilities])

        for totals in [
            summary.totals.fortnightly,
            summary.totals.monthly,
            summary.totals.annual,
        ]:
            assert totals.primary + totals.partner == pytest.approx(totals.combined)

    def test_empty(self):
        summary = calculate_expense_summary([])

        assert summary.expenses == []
        assert summary.totals.annual.combined == 0

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            ExpenseItem(id="x", name="Refund", amount=-10)

    def test_bad_frequency_rejected(self):
        with pytest.raises(ValidationError):
            ExpenseItem(id="x", name="Coffee", amount=5, frequency="daily")


class TestPartitionExpenses:
    """Test cases for grouping expenses by kind."""

    def test_kinds(self, groceries):
        expenses = [
            groceries,
            ExpenseItem(id="mortgage-auto", name="Mortgage Payment", amount=3000),
            ExpenseItem(id="mortgage-extra-auto", name="Extra", amount=200),
            ExpenseItem(id="education-auto-1", name="Tristan - Prep", amount=900),
            ExpenseItem(id="9", name="children", amount=500),
        ]

        partition = partition_expenses(expenses)

        assert partition.regular == [groceries]
        assert [e.id for e in partition.mortgage] == [
            "mortgage-auto",
            "mortgage-extra-auto",
        ]
        assert [e.id for e in partition.education] == ["education-auto-1"]
        assert [e.id for e in partition.dependents] == ["9"]

    def test_dependents_name_is_case_insensitive(self):
        expense = ExpenseItem(id="9", name="Children", amount=500)

        assert expense.kind == ExpenseKind.DEPENDENTS


class TestDisposableIncome:
    """Test cases for disposable income."""

    def test_annual(self, groceries, utilities):
        summary = calculate_expense_summary([groceries, utilities])

        disposable = calculate_disposable_income(60000, 50000, summary)

        assert disposable.primary.annual.disposable == pytest.approx(60000 - 10440)
        assert disposable.partner.annual.disposable == pytest.approx(50000 - 9960)
        assert disposable.combined.annual.disposable == pytest.approx(
            110000 - 20400
        )

    def test_cadences(self, groceries, utilities):
        summary = calculate_expense_summary([groceries, utilities])

        disposable = calculate_disposable_income(52000, 26000, summary)

        assert disposable.primary.fortnightly.spendable_income == pytest.approx(2000)
        assert disposable.partner.monthly.spendable_income == pytest.approx(
            26000 / 12
        )
        assert disposable.combined.monthly.expenses == pytest.approx(1700)
