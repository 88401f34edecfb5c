"""
Multi-year household forecast engine.

This module projects a household balance sheet one calendar year at a time,
from the first year of the configuration until the older earner reaches the
projection end age. Each year composes the income, tax, super, expense and
mortgage calculators, then rolls the running balances forward.

Income and expenses scale from year zero with their growth and inflation
rates; balances compound iteratively from their opening values. Each earner
moves one way from working to retired, and the household only draws down its
savings once both are retired.
"""

import logging
from typing import Iterator, List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .education import any_child_in_school, calculate_education_expenses
from .expenses import PartyTotals, calculate_expense_summary, partition_expenses
from .forecast_result import ForecastResult, YearProjection
from .household import AssetBundle, ForecastConfig, PersonProfile
from .income import LeaseAmounts
from .mortgage_amortization import MortgageCalculator
from .superannuation import get_sg_rate
from .tax import calculate_income_tax, lookup_tax_brackets
from .time_grid import growth_factor

logger = logging.getLogger(__name__)


class PersonYear(BaseModel):
    """One earner's income, deductions and contributions for a year."""

    model_config = ConfigDict(frozen=True)

    retired: bool
    gross_before_lease: float = Field(default=0.0)
    lease: LeaseAmounts = Field(default_factory=LeaseAmounts)
    gross_income: float = Field(default=0.0, description="Taxable income")
    tax: float = Field(default=0.0)
    employer_super: float = Field(default=0.0)
    voluntary_super: float = Field(default=0.0)
    non_spendable: float = Field(default=0.0)
    portfolio_contribution: float = Field(default=0.0)

    @property
    def after_tax(self) -> float:
        return self.gross_income - self.tax

    @property
    def total_super(self) -> float:
        return self.employer_super + self.voluntary_super

    def splurge(self, expenses: float, education_share: float) -> float:
        """Money left to spend after every deduction, contribution and expense."""
        return (
            self.after_tax
            - self.voluntary_super
            - self.non_spendable
            - expenses
            - education_share
            - self.portfolio_contribution
            - self.lease.post_tax_annual
        )


class BalanceState(BaseModel):
    """Running balances carried from one simulated year to the next."""

    primary_super: float
    partner_super: float
    portfolio: float
    car_value: float
    other_asset_values: List[float]
    mortgage_balance: float

    @classmethod
    def from_assets(cls, assets: AssetBundle) -> "BalanceState":
        return cls(
            primary_super=assets.primary_super_balance,
            partner_super=assets.partner_super_balance,
            portfolio=assets.portfolio_value,
            car_value=sum(car.current_value for car in assets.cars),
            other_asset_values=[asset.current_value for asset in assets.other_assets],
            mortgage_balance=assets.mortgage.current_balance,
        )

    @property
    def total_super(self) -> float:
        return self.primary_super + self.partner_super

    @property
    def other_assets_value(self) -> float:
        return sum(self.other_asset_values)

    def grow_super(
        self,
        growth_rate: float,
        primary_contribution: float,
        partner_contribution: float,
    ) -> None:
        """Compound super for one year, then add the year's contributions."""
        factor = growth_factor(growth_rate, 1)
        self.primary_super = self.primary_super * factor + primary_contribution
        self.partner_super = self.partner_super * factor + partner_contribution

    def grow_portfolio(self, growth_rate: float, contribution: float) -> None:
        self.portfolio = self.portfolio * growth_factor(growth_rate, 1) + contribution

    def draw_down(
        self, shortfall: float, super_spending_ratio: float
    ) -> Tuple[float, float]:
        """
        Cover a retirement shortfall from the portfolio and super.

        The portfolio covers its share of the shortfall first, as far as its
        balance allows; super covers the rest, split between the earners in
        proportion to their balances (evenly when both are empty). Balances
        never go below zero.

        Args:
            shortfall: Amount to cover (positive)
            super_spending_ratio: Share of the shortfall meant to come from
                super (%)

        Returns:
            Tuple of (portfolio drawdown, super drawdown)
        """
        portfolio_share = shortfall * (1 - super_spending_ratio / 100)
        from_portfolio = min(portfolio_share, self.portfolio)
        self.portfolio = max(0.0, self.portfolio - from_portfolio)

        from_super = shortfall - from_portfolio
        total_super = self.total_super
        if total_super > 0:
            primary_split = self.primary_super / total_super
        else:
            primary_split = 0.5

        self.primary_super = max(0.0, self.primary_super - from_super * primary_split)
        self.partner_super = max(
            0.0, self.partner_super - from_super * (1 - primary_split)
        )
        return from_portfolio, from_super

    def depreciate_cars(self, depreciation_rate: float) -> None:
        self.car_value = self.car_value * (1 - depreciation_rate / 100)

    def grow_other_assets(self, growth_rates: List[float]) -> None:
        self.other_asset_values = [
            value * growth_factor(rate, 1)
            for value, rate in zip(self.other_asset_values, growth_rates)
        ]


class ForecastEngine:
    """
    Year-by-year projection of a household's finances.

    The configuration is read-only; every call to iter_projections() starts
    from the configured opening balances, so an engine can be run repeatedly
    with identical results.

    Example:
        ```python
        engine = ForecastEngine(config)
        result = engine.run()
        print(result.summary.final_cumulative_savings)
        ```
    """

    def __init__(self, config: ForecastConfig):
        self.config = config

        partition = partition_expenses(config.expenses)
        self.regular_expenses = self._annual_totals(partition.regular)
        self.mortgage_expenses = self._annual_totals(partition.mortgage)
        self.dependents_expenses = self._annual_totals(partition.dependents)

        mortgage = config.assets.mortgage
        self.mortgage_payment = MortgageCalculator.calculate_payment(
            mortgage.loan_amount,
            mortgage.interest_rate,
            mortgage.loan_term_years,
            mortgage.payments_per_year,
        )
        self.mortgage_rate = MortgageCalculator.rate_per_period(
            mortgage.interest_rate, mortgage.payments_per_year
        )
        self.mortgage_extra = MortgageCalculator.extra_payment_per_period(
            mortgage.extra_monthly_payment, mortgage.payments_per_year
        )

        self.sg_rate = get_sg_rate(config.financial_year)
        self.tax_brackets = lookup_tax_brackets(config.financial_year).brackets

        cars = config.assets.cars
        if cars:
            self.car_depreciation_rate = sum(
                car.annual_depreciation for car in cars
            ) / len(cars)
        else:
            self.car_depreciation_rate = config.default_car_depreciation_rate

        self.other_asset_rates = [
            asset.annual_growth_rate for asset in config.assets.other_assets
        ]

    @staticmethod
    def _annual_totals(expenses) -> PartyTotals:
        return calculate_expense_summary(expenses).totals.annual

    def _person_year(
        self, profile: PersonProfile, age: int, calendar_year: int, income_factor: float
    ) -> PersonYear:
        if age >= profile.retirement_age:
            return PersonYear(retired=True)

        income = profile.income
        gross_before_lease = income.total * income_factor
        lease = LeaseAmounts.for_year(profile.novated_lease, calendar_year)
        gross_income = gross_before_lease - lease.pre_tax_annual
        tax = calculate_income_tax(
            gross_income,
            include_medicare_levy=self.config.include_medicare_levy,
            brackets=self.tax_brackets,
        )

        return PersonYear(
            retired=False,
            gross_before_lease=gross_before_lease,
            lease=lease,
            gross_income=gross_income,
            tax=tax.total_tax,
            employer_super=gross_before_lease * self.sg_rate,
            voluntary_super=gross_before_lease * profile.voluntary_super_rate / 100,
            non_spendable=(income.allowances + income.pre_total_adjustments)
            * income_factor,
            portfolio_contribution=profile.portfolio_contribution * income_factor,
        )

    def _auto_invest(self, person: PersonYear, splurge: float) -> float:
        """Amount of a working earner's splurge diverted to the portfolio."""
        policy = self.config.auto_invest
        if policy is None or person.retired or splurge <= policy.threshold:
            return 0.0
        return (splurge - policy.threshold) * policy.invest_rate / 100

    def iter_projections(self) -> Iterator[YearProjection]:
        """
        Simulate the forecast one year at a time.

        Yields:
            YearProjection for each calendar year in increasing order
        """
        config = self.config
        assets = config.assets
        balances = BalanceState.from_assets(assets)

        cumulative_savings = 0.0
        last_working_splurge = 0.0
        retirement_start_index = 0
        year_index = 0

        while True:
            calendar_year = config.start_year + year_index
            primary_age = config.primary.current_age + year_index
            partner_age = config.partner.current_age + year_index
            income_factor = growth_factor(config.annual_income_increase, year_index)
            inflation_factor = growth_factor(config.annual_inflation_rate, year_index)

            primary = self._person_year(
                config.primary, primary_age, calendar_year, income_factor
            )
            partner = self._person_year(
                config.partner, partner_age, calendar_year, income_factor
            )
            both_retired = primary.retired and partner.retired

            # Expenses
            regular = self.regular_expenses
            primary_expenses = regular.primary * inflation_factor
            partner_expenses = regular.partner * inflation_factor
            regular_expenses = regular.combined * inflation_factor

            mortgage_expenses = 0.0
            if balances.mortgage_balance > 0:
                primary_expenses += self.mortgage_expenses.primary
                partner_expenses += self.mortgage_expenses.partner
                mortgage_expenses = self.mortgage_expenses.combined

            dependents_expenses = 0.0
            if any_child_in_school(config.children, calendar_year):
                dependents = self.dependents_expenses
                primary_expenses += dependents.primary * inflation_factor
                partner_expenses += dependents.partner * inflation_factor
                dependents_expenses = dependents.combined * inflation_factor

            education_expenses = calculate_education_expenses(
                calendar_year,
                config.children,
                config.education_fees,
                config.annual_inflation_rate,
            )
            education_share = education_expenses / 2

            # Splurge
            primary_splurge = primary.splurge(primary_expenses, education_share)
            partner_splurge = partner.splurge(partner_expenses, education_share)

            auto_invested = 0.0
            if not both_retired:
                primary_invested = self._auto_invest(primary, primary_splurge)
                partner_invested = self._auto_invest(partner, partner_splurge)
                primary_splurge -= primary_invested
                partner_splurge -= partner_invested
                auto_invested = primary_invested + partner_invested

            combined_splurge = primary_splurge + partner_splurge

            if not both_retired and combined_splurge > 0:
                last_working_splurge = combined_splurge
                retirement_start_index = year_index + 1

            if both_retired and last_working_splurge > 0:
                retirement_splurge = last_working_splurge * growth_factor(
                    config.annual_inflation_rate, year_index - retirement_start_index
                )
                combined_splurge -= retirement_splurge
                primary_splurge -= retirement_splurge / 2
                partner_splurge -= retirement_splurge / 2

            cumulative_savings += combined_splurge

            # Balances
            balances.grow_super(
                assets.super_growth_rate, primary.total_super, partner.total_super
            )
            balances.grow_portfolio(
                assets.portfolio_growth_rate,
                primary.portfolio_contribution
                + partner.portfolio_contribution
                + auto_invested,
            )

            super_drawdown = 0.0
            portfolio_drawdown = 0.0
            if both_retired and combined_splurge < 0:
                shortfall = -combined_splurge
                portfolio_drawdown, super_drawdown = balances.draw_down(
                    shortfall, assets.retirement_spending_ratio
                )
                cumulative_savings -= shortfall

            balances.depreciate_cars(self.car_depreciation_rate)
            balances.grow_other_assets(self.other_asset_rates)

            if year_index > 0:
                mortgage = assets.mortgage
                balances.mortgage_balance = MortgageCalculator.project_balance(
                    balances.mortgage_balance,
                    self.mortgage_payment,
                    self.mortgage_rate,
                    mortgage.payments_per_year,
                    self.mortgage_extra,
                )

            total_super_balance = balances.total_super
            other_assets_value = balances.other_assets_value
            total_net_worth = (
                total_super_balance
                + balances.portfolio
                + balances.car_value
                + other_assets_value
                - balances.mortgage_balance
            )

            yield YearProjection(
                year=year_index + 1,
                calendar_year=calendar_year,
                primary_age=primary_age,
                partner_age=partner_age,
                primary_retired=primary.retired,
                partner_retired=partner.retired,
                primary_gross_income=primary.gross_income,
                partner_gross_income=partner.gross_income,
                combined_gross_income=primary.gross_income + partner.gross_income,
                primary_tax=primary.tax,
                partner_tax=partner.tax,
                combined_tax=primary.tax + partner.tax,
                primary_super=primary.total_super,
                partner_super=partner.total_super,
                combined_super=primary.total_super + partner.total_super,
                primary_after_tax=primary.after_tax,
                partner_after_tax=partner.after_tax,
                combined_after_tax=primary.after_tax + partner.after_tax,
                primary_expenses=primary_expenses,
                partner_expenses=partner_expenses,
                combined_expenses=primary_expenses
                + partner_expenses
                + education_expenses,
                education_expenses=education_expenses,
                regular_expenses=regular_expenses,
                mortgage_expenses=mortgage_expenses,
                dependents_expenses=dependents_expenses,
                work_income=primary.after_tax + partner.after_tax,
                super_drawdown=super_drawdown,
                portfolio_drawdown=portfolio_drawdown,
                auto_invested=auto_invested,
                primary_splurge=primary_splurge,
                partner_splurge=partner_splurge,
                combined_splurge=combined_splurge,
                cumulative_savings=cumulative_savings,
                primary_super_balance=balances.primary_super,
                partner_super_balance=balances.partner_super,
                total_super_balance=total_super_balance,
                portfolio_value=balances.portfolio,
                total_car_value=balances.car_value,
                other_assets_value=other_assets_value,
                mortgage_balance=balances.mortgage_balance,
                total_net_worth=total_net_worth,
            )

            if primary_age >= config.max_age or partner_age >= config.max_age:
                break
            year_index += 1

    def run(self) -> ForecastResult:
        """Run the full forecast and summarise it."""
        config = self.config
        logger.debug(
            f"Running forecast from {config.start_year} for "
            f"{config.primary.name} ({config.primary.current_age}) and "
            f"{config.partner.name} ({config.partner.current_age})"
        )
        result = ForecastResult.from_projections(list(self.iter_projections()))
        logger.debug(
            f"Forecast complete: {result.years} years, final net worth "
            f"{result.projections[-1].total_net_worth:.2f}"
        )
        return result


def calculate_forecast(config: ForecastConfig) -> ForecastResult:
    """Project a household's finances year by year until the end age."""
    return ForecastEngine(config).run()
