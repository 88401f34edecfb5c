"""
Pytest configuration and shared fixtures for the household planner tests.

The reference household: two earners aged 35 and 33 retiring at 67, a
$500,000 / 6.5% / 30-year mortgage from 2020 with $450,000 outstanding, and
one child starting school.
"""

import pytest

from household_planner.config import Settings
from household_planner.models.forecast import calculate_forecast
from household_planner.models.household import (
    AssetBundle,
    Car,
    Child,
    EducationFeeSchedule,
    ExpenseItem,
    ForecastConfig,
    IncomeInput,
    Mortgage,
    PersonProfile,
    PortfolioItem,
)
from household_planner.services.forecast_service import (
    AssetState,
    HouseholdState,
    MortgageState,
    PersonState,
)


@pytest.fixture
def primary_profile():
    """Primary earner: 35, retiring at 67 on $105,000."""
    return PersonProfile(
        name="Andy",
        current_age=35,
        retirement_age=67,
        income=IncomeInput(base_salary=90000, variable_income=10000, allowances=5000),
        voluntary_super_rate=2,
    )


@pytest.fixture
def partner_profile():
    """Partner: 33, retiring at 67 on $80,000."""
    return PersonProfile(
        name="Nadiele",
        current_age=33,
        retirement_age=67,
        income=IncomeInput(base_salary=75000, variable_income=5000),
        voluntary_super_rate=2,
    )


@pytest.fixture
def scenario_expenses():
    """Regular, mortgage and dependents expense items."""
    return [
        ExpenseItem(
            id="2", name="Groceries", category="Food", amount=300, frequency="weekly"
        ),
        ExpenseItem(
            id="3",
            name="Utilities",
            category="Bills",
            amount=400,
            frequency="monthly",
            primary_proportion=55,
            partner_proportion=45,
        ),
        ExpenseItem(
            id="mortgage-auto",
            name="Mortgage Payment",
            category="Housing",
            amount=3160.34,
            frequency="monthly",
        ),
        ExpenseItem(
            id="4", name="Children", category="Family", amount=500, frequency="monthly"
        ),
    ]


@pytest.fixture
def scenario_mortgage():
    return Mortgage(
        loan_amount=500000,
        current_balance=450000,
        interest_rate=6.5,
        loan_term_years=30,
        payments_per_year=12,
        start_year=2020,
    )


@pytest.fixture
def scenario_assets(scenario_mortgage):
    return AssetBundle(
        primary_super_balance=150000,
        partner_super_balance=120000,
        super_growth_rate=7,
        portfolio_value=50000,
        portfolio_growth_rate=7,
        portfolio_items=[
            PortfolioItem(id="1", name="General Portfolio", current_value=50000)
        ],
        cars=[Car(id="1", name="Car 1", current_value=25000, annual_depreciation=15)],
        mortgage=scenario_mortgage,
        retirement_spending_ratio=70,
    )


@pytest.fixture
def fee_schedule():
    return EducationFeeSchedule(
        elp3=6990,
        elp4=10500,
        prep_to_year4=11500,
        year5_and_6=15990,
        year7_to_9=21990,
        year10_to_12=27990,
        base_year=2026,
    )


@pytest.fixture
def children():
    """One child in Year 1 during 2026."""
    return [Child(id="1", name="Tristan", current_year_level=1, current_year=2026)]


@pytest.fixture
def scenario_config(
    primary_profile,
    partner_profile,
    scenario_expenses,
    scenario_assets,
    children,
    fee_schedule,
):
    """Complete forecast configuration for the reference household."""
    return ForecastConfig(
        primary=primary_profile,
        partner=partner_profile,
        expenses=scenario_expenses,
        assets=scenario_assets,
        annual_income_increase=3,
        annual_inflation_rate=2.5,
        financial_year="2025-26",
        start_year=2025,
        children=children,
        education_fees=fee_schedule,
    )


@pytest.fixture
def scenario_result(scenario_config):
    """Forecast for the reference household."""
    return calculate_forecast(scenario_config)


@pytest.fixture
def test_settings():
    """Settings independent of the environment and any .env file."""
    return Settings(_env_file=None, APP_ENV="testing", LOG_LEVEL="DEBUG")


@pytest.fixture
def household_state(scenario_expenses, children, fee_schedule):
    """Saved state for the reference household with gaps left unfilled."""
    return HouseholdState(
        primary=PersonState(
            name="Andy",
            current_age=35,
            retirement_age=67,
            income=IncomeInput(
                base_salary=90000, variable_income=10000, allowances=5000
            ),
            voluntary_super_rate=2,
        ),
        partner=PersonState(
            name="Nadiele",
            current_age=33,
            retirement_age=67,
            income=IncomeInput(base_salary=75000, variable_income=5000),
            voluntary_super_rate=2,
        ),
        expenses=[e for e in scenario_expenses if e.id != "mortgage-auto"],
        assets=AssetState(
            primary_super_balance=150000,
            partner_super_balance=120000,
            portfolio_value=1,
            portfolio_items=[
                PortfolioItem(id="1", name="General Portfolio", current_value=50000)
            ],
            cars=[Car(id="1", name="Car 1", current_value=25000)],
            mortgage=MortgageState(
                loan_amount=500000,
                interest_rate=6.5,
                loan_term_years=30,
                start_year=2020,
            ),
        ),
        children=children,
        education_fees=fee_schedule,
    )
