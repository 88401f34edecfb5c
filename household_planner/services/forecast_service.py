"""
Forecast service for turning saved household state into forecast runs.

The saved state is what a user has entered so far: fields may be missing,
the portfolio value may be stale and generated expense items may be out of
date. This service resolves all of that once, builds a complete
ForecastConfig, and runs the current-year income view and the multi-year
forecast from it.
"""

import logging
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from household_planner.config import Settings, get_global_settings
from household_planner.models.expense_sync import (
    sync_education_expenses,
    sync_mortgage_expenses,
    sync_portfolio_value,
)
from household_planner.models.expenses import (
    DisposableIncome,
    ExpenseSummary,
    calculate_disposable_income,
    calculate_expense_summary,
)
from household_planner.models.forecast import calculate_forecast
from household_planner.models.forecast_result import ForecastResult
from household_planner.models.household import (
    Asset,
    AssetBundle,
    AutoInvestPolicy,
    Car,
    Child,
    EducationFeeSchedule,
    ExpenseItem,
    ForecastConfig,
    IncomeInput,
    Mortgage,
    NovatedLease,
    PersonProfile,
    PortfolioItem,
)
from household_planner.models.income import (
    HouseholdIncomeData,
    calculate_household_income,
    calculation_config_for,
)
from household_planner.models.portfolio import PriceFeed, resolve_portfolio_items
from household_planner.models.time_grid import parse_financial_year

logger = logging.getLogger(__name__)


class PersonState(BaseModel):
    """Saved details for one earner."""

    name: str = Field(default="Primary")
    current_age: int = Field(default=35, ge=0, le=120)
    retirement_age: int = Field(default=67, ge=0, le=120)
    income: IncomeInput = Field(default_factory=IncomeInput)
    voluntary_super_rate: float = Field(default=0, ge=0, le=100)
    portfolio_contribution: float = Field(default=0, ge=0)
    novated_lease: NovatedLease = Field(default_factory=NovatedLease)
    spendable_exclusion: float = Field(default=0, ge=0)

    def to_profile(self) -> PersonProfile:
        return PersonProfile(**self.model_dump())


class MortgageState(BaseModel):
    """Saved mortgage details; the current balance may never have been entered."""

    loan_amount: float = Field(default=0, ge=0)
    current_balance: Optional[float] = Field(default=None, ge=0)
    interest_rate: float = Field(default=0, ge=0, le=100)
    loan_term_years: int = Field(default=30, ge=1, le=50)
    payments_per_year: int = Field(default=12)
    start_year: Optional[int] = Field(default=None)
    extra_monthly_payment: float = Field(default=0, ge=0)

    def resolve(self, default_start_year: int) -> Mortgage:
        """
        Build a Mortgage, filling in missing values.

        A missing current balance is taken to be the full loan amount and a
        missing start year to be ``default_start_year``.
        """
        current_balance = self.current_balance
        if current_balance is None:
            current_balance = self.loan_amount
        return Mortgage(
            loan_amount=self.loan_amount,
            current_balance=current_balance,
            interest_rate=self.interest_rate,
            loan_term_years=self.loan_term_years,
            payments_per_year=self.payments_per_year,
            start_year=self.start_year or default_start_year,
            extra_monthly_payment=self.extra_monthly_payment,
        )


class AssetState(BaseModel):
    """Saved balance sheet."""

    primary_super_balance: float = Field(default=0, ge=0)
    partner_super_balance: float = Field(default=0, ge=0)
    super_growth_rate: float = Field(default=7)
    portfolio_value: float = Field(default=0, ge=0)
    portfolio_growth_rate: float = Field(default=7)
    portfolio_items: List[PortfolioItem] = Field(default_factory=list)
    cars: List[Car] = Field(default_factory=list)
    other_assets: List[Asset] = Field(default_factory=list)
    mortgage: MortgageState = Field(default_factory=MortgageState)
    retirement_spending_ratio: float = Field(default=70, ge=0, le=100)


class HouseholdState(BaseModel):
    """
    Household data as saved by the application.

    Missing tax settings fall back to the configured defaults when the state
    is turned into a ForecastConfig.
    """

    financial_year: Optional[str] = Field(default=None)
    include_medicare_levy: Optional[bool] = Field(default=None)
    primary: PersonState = Field(default_factory=PersonState)
    partner: PersonState = Field(
        default_factory=lambda: PersonState(name="Partner", current_age=33)
    )
    expenses: List[ExpenseItem] = Field(default_factory=list)
    annual_income_increase: float = Field(default=3)
    annual_inflation_rate: float = Field(default=2.5)
    assets: AssetState = Field(default_factory=AssetState)
    children: List[Child] = Field(default_factory=list)
    education_fees: EducationFeeSchedule = Field(
        default_factory=EducationFeeSchedule
    )
    auto_invest: Optional[AutoInvestPolicy] = Field(default=None)


class ForecastRun(BaseModel):
    """A resolved configuration with its current-year figures and forecast."""

    model_config = ConfigDict(frozen=True)

    config: ForecastConfig
    income: HouseholdIncomeData
    expense_summary: ExpenseSummary
    disposable_income: DisposableIncome
    result: ForecastResult


class ForecastService:
    """Service for building forecast configurations and running forecasts."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        price_feed: Optional[PriceFeed] = None,
    ) -> None:
        self.settings = settings or get_global_settings()
        self.price_feed = price_feed

    def build_config(self, state: HouseholdState) -> ForecastConfig:
        """
        Normalise saved household state into a complete ForecastConfig.

        Args:
            state: Saved household state

        Returns:
            ForecastConfig starting in the first calendar year of the
            financial year

        Raises:
            ValueError: If the financial year label is malformed
            pydantic.ValidationError: If the resolved values are invalid
        """
        financial_year = state.financial_year or self.settings.default_financial_year
        start_year = parse_financial_year(financial_year)
        include_medicare_levy = (
            self.settings.include_medicare_levy
            if state.include_medicare_levy is None
            else state.include_medicare_levy
        )

        portfolio_items = state.assets.portfolio_items
        if self.price_feed is not None:
            portfolio_items = resolve_portfolio_items(portfolio_items, self.price_feed)

        mortgage = state.assets.mortgage.resolve(start_year)
        assets = AssetBundle(
            primary_super_balance=state.assets.primary_super_balance,
            partner_super_balance=state.assets.partner_super_balance,
            super_growth_rate=state.assets.super_growth_rate,
            portfolio_value=state.assets.portfolio_value,
            portfolio_growth_rate=state.assets.portfolio_growth_rate,
            portfolio_items=portfolio_items,
            cars=state.assets.cars,
            other_assets=state.assets.other_assets,
            mortgage=mortgage,
            retirement_spending_ratio=state.assets.retirement_spending_ratio,
        )
        assets = sync_portfolio_value(assets)

        expenses = sync_mortgage_expenses(state.expenses, mortgage)
        expenses = sync_education_expenses(
            expenses,
            state.children,
            state.education_fees,
            start_year,
            state.annual_inflation_rate,
        )

        return ForecastConfig(
            primary=state.primary.to_profile(),
            partner=state.partner.to_profile(),
            expenses=expenses,
            assets=assets,
            annual_income_increase=state.annual_income_increase,
            annual_inflation_rate=state.annual_inflation_rate,
            financial_year=financial_year,
            start_year=start_year,
            include_medicare_levy=include_medicare_levy,
            children=state.children,
            education_fees=state.education_fees,
            auto_invest=state.auto_invest,
            max_age=self.settings.max_projection_age,
            default_car_depreciation_rate=self.settings.default_car_depreciation_rate,
        )

    def calculate_income(self, config: ForecastConfig) -> HouseholdIncomeData:
        """Current-year income for both earners."""
        return calculate_household_income(
            config.primary.income,
            config.partner.income,
            calculation_config_for(
                config.primary,
                config.partner,
                config.financial_year,
                config.include_medicare_levy,
                year=config.start_year,
            ),
        )

    def run(self, state: HouseholdState) -> ForecastRun:
        """
        Build the configuration and run the current-year view and forecast.

        Args:
            state: Saved household state

        Returns:
            ForecastRun with the configuration used and every result

        Raises:
            Exception: If the state cannot be resolved or the forecast fails
        """
        try:
            logger.info(
                f"Starting forecast for {state.primary.name} and "
                f"{state.partner.name}"
            )

            config = self.build_config(state)
            income = self.calculate_income(config)
            expense_summary = calculate_expense_summary(config.expenses)
            disposable_income = calculate_disposable_income(
                income.primary.spendable_income,
                income.partner.spendable_income,
                expense_summary,
            )
            result = calculate_forecast(config)

            logger.info(
                f"Completed forecast {config.start_year}-"
                f"{result.projections[-1].calendar_year} ({result.years} years)"
            )
            return ForecastRun(
                config=config,
                income=income,
                expense_summary=expense_summary,
                disposable_income=disposable_income,
                result=result,
            )

        except Exception as e:
            logger.error(f"Forecast failed: {str(e)}")
            raise
