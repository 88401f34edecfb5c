"""Tests for generated mortgage, school fee and portfolio figures."""

import pytest

from household_planner.models.expense_sync import (
    sync_education_expenses,
    sync_mortgage_expenses,
    sync_portfolio_value,
)
from household_planner.models.household import (
    AssetBundle,
    Child,
    ExpenseItem,
    PortfolioItem,
)


@pytest.fixture
def groceries():
    return ExpenseItem(
        id="2", name="Groceries", category="Food", amount=300, frequency="weekly"
    )


class TestSyncMortgageExpenses:
    """Test cases for sync_mortgage_expenses."""

    def test_adds_repayment_item(self, groceries, scenario_mortgage):
        expenses = sync_mortgage_expenses([groceries], scenario_mortgage)

        assert [e.id for e in expenses] == ["2", "mortgage-auto"]
        repayment = expenses[1]
        assert repayment.name == "Mortgage Payment"
        assert repayment.category == "Housing"
        assert repayment.frequency == "monthly"
        assert abs(repayment.amount - 3160.34) < 0.01

    def test_updates_existing_item(self, scenario_mortgage):
        existing = ExpenseItem(
            id="7",
            name="Mortgage Payment",
            category="Housing",
            amount=2500,
            frequency="fortnightly",
            primary_proportion=60,
            partner_proportion=40,
        )

        expenses = sync_mortgage_expenses([existing], scenario_mortgage)

        assert len(expenses) == 1
        assert expenses[0].id == "mortgage-auto"
        assert expenses[0].frequency == "monthly"
        assert expenses[0].primary_proportion == 60
        assert abs(expenses[0].amount - 3160.34) < 0.01

    def test_generated_item_preferred_over_named_item(self, scenario_mortgage):
        legacy = ExpenseItem(
            id="7", name="Mortgage Payment", category="Housing", amount=2500
        )
        generated = ExpenseItem(
            id="mortgage-auto",
            name="Mortgage Payment",
            category="Housing",
            amount=3000,
            primary_proportion=70,
            partner_proportion=30,
        )

        expenses = sync_mortgage_expenses([legacy, generated], scenario_mortgage)

        assert [e.id for e in expenses] == ["mortgage-auto"]
        assert expenses[0].primary_proportion == 70
        assert abs(expenses[0].amount - 3160.34) < 0.01

    def test_fortnightly_loan_converted_to_monthly(self, scenario_mortgage):
        fortnightly = scenario_mortgage.model_copy(update={"payments_per_year": 26})

        expenses = sync_mortgage_expenses([], fortnightly)

        # Slightly less than the monthly loan's repayment
        assert 3150 < expenses[0].amount < 3160.34

    def test_extra_repayment_added_and_removed(self, scenario_mortgage):
        with_extra = scenario_mortgage.model_copy(
            update={"extra_monthly_payment": 500}
        )

        expenses = sync_mortgage_expenses([], with_extra)
        assert [e.id for e in expenses] == ["mortgage-auto", "mortgage-extra-auto"]
        assert expenses[1].amount == 500

        expenses = sync_mortgage_expenses(expenses, scenario_mortgage)
        assert [e.id for e in expenses] == ["mortgage-auto"]

    def test_stale_housing_items_removed(self, groceries, scenario_mortgage):
        stale = ExpenseItem(
            id="8", name="Old mortgage repayment", category="Housing", amount=2000
        )
        insurance = ExpenseItem(
            id="9",
            name="Mortgage protection insurance",
            category="Insurance",
            amount=40,
        )

        expenses = sync_mortgage_expenses(
            [groceries, stale, insurance], scenario_mortgage
        )

        assert [e.id for e in expenses] == ["2", "9", "mortgage-auto"]

    def test_no_loan_leaves_expenses_unchanged(self, groceries, scenario_mortgage):
        no_loan = scenario_mortgage.model_copy(update={"loan_amount": 0})

        assert sync_mortgage_expenses([groceries], no_loan) == [groceries]

    def test_input_not_modified(self, groceries, scenario_mortgage):
        expenses = [groceries]

        sync_mortgage_expenses(expenses, scenario_mortgage)

        assert expenses == [groceries]


class TestSyncEducationExpenses:
    """Test cases for sync_education_expenses."""

    def test_adds_item_per_child_at_school(self, groceries, children, fee_schedule):
        expenses = sync_education_expenses(
            [groceries], children, fee_schedule, 2026, 2.5
        )

        assert [e.id for e in expenses] == ["2", "education-auto-1"]
        fees = expenses[1]
        assert fees.name == "Tristan - Year 1 Education"
        assert fees.category == "Education"
        assert fees.frequency == "monthly"
        assert fees.amount == pytest.approx(11500 / 12)

    def test_fees_inflated_to_current_year(self, children, fee_schedule):
        expenses = sync_education_expenses([], children, fee_schedule, 2025, 2.5)

        assert expenses[0].name == "Tristan - Prep Education"
        assert expenses[0].amount == pytest.approx(11500 / 1.025 / 12)

    def test_existing_item_updated_in_place(self, groceries, children, fee_schedule):
        first = sync_education_expenses(
            [groceries], children, fee_schedule, 2026, 2.5
        )

        second = sync_education_expenses(first, children, fee_schedule, 2030, 2.5)

        assert [e.id for e in second] == ["2", "education-auto-1"]
        assert second[1].name == "Tristan - Year 5 Education"
        assert second[1].amount == pytest.approx(15990 * 1.025**4 / 12)

    def test_removed_after_school(self, children, fee_schedule):
        expenses = sync_education_expenses([], children, fee_schedule, 2037, 2.5)
        assert len(expenses) == 1

        expenses = sync_education_expenses(expenses, children, fee_schedule, 2038, 2.5)
        assert expenses == []

    def test_removed_for_unlisted_child(self, groceries, children, fee_schedule):
        expenses = sync_education_expenses(
            [groceries], children, fee_schedule, 2026, 2.5
        )

        expenses = sync_education_expenses(expenses, [], fee_schedule, 2026, 2.5)

        assert expenses == [groceries]

    def test_several_children(self, children, fee_schedule):
        younger = Child(id="2", name="Ada", current_year_level=-2, current_year=2026)

        expenses = sync_education_expenses(
            [], children + [younger], fee_schedule, 2026, 2.5
        )

        assert [e.name for e in expenses] == [
            "Tristan - Year 1 Education",
            "Ada - ELP3 Education",
        ]


class TestSyncPortfolioValue:
    """Test cases for sync_portfolio_value."""

    def test_value_from_items(self, scenario_mortgage):
        assets = AssetBundle(
            portfolio_value=1,
            portfolio_items=[
                PortfolioItem(
                    id="1",
                    name="Index fund",
                    is_manual=False,
                    ticker="vas.ax",
                    quantity=100,
                    price_per_unit=50.5,
                ),
                PortfolioItem(id="2", name="Term deposit", current_value=1000),
            ],
            mortgage=scenario_mortgage,
        )

        synced = sync_portfolio_value(assets)

        assert synced.portfolio_value == pytest.approx(6050)
        assert assets.portfolio_value == 1

    def test_no_items_keeps_value(self, scenario_mortgage):
        assets = AssetBundle(portfolio_value=1234, mortgage=scenario_mortgage)

        assert sync_portfolio_value(assets).portfolio_value == 1234
