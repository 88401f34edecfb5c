"""
Pydantic models for household forecasting inputs.

This module defines the immutable value types that make up a forecast
configuration: incomes, novated leases, expenses, assets, liabilities,
children and education fees. Rates are percentages (7 means 7%) unless a
field says otherwise.
"""

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

MORTGAGE_EXPENSE_ID = "mortgage-auto"
MORTGAGE_EXTRA_EXPENSE_ID = "mortgage-extra-auto"
EDUCATION_EXPENSE_PREFIX = "education-auto-"
DEPENDENTS_EXPENSE_NAME = "children"

ExpenseFrequency = Literal["weekly", "fortnightly", "monthly", "annual"]


class ExpenseKind(str, Enum):
    """How the forecast engine treats an expense item."""

    REGULAR = "regular"
    MORTGAGE = "mortgage"
    EDUCATION = "education"
    DEPENDENTS = "dependents"


class FrozenModel(BaseModel):
    """Base class for immutable value types."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class IncomeInput(FrozenModel):
    """Annual income components for one person."""

    base_salary: float = Field(default=0, ge=0, description="Base salary")
    variable_income: float = Field(
        default=0, ge=0, description="Commission or bonus income"
    )
    allowances: float = Field(default=0, ge=0, description="Allowances (e.g. car)")
    pre_total_adjustments: float = Field(
        default=0, description="Adjustments before totalling (may be negative)"
    )

    @property
    def total(self) -> float:
        """Total annual income before any deductions."""
        return (
            self.base_salary
            + self.variable_income
            + self.allowances
            + self.pre_total_adjustments
        )


class NovatedLease(FrozenModel):
    """Salary-packaged vehicle lease with pre-tax and post-tax components."""

    pre_tax_annual: float = Field(default=0, ge=0, description="Pre-tax annual cost")
    post_tax_annual: float = Field(
        default=0, ge=0, description="Post-tax annual cost"
    )
    lease_term_years: int = Field(default=0, ge=0, le=10, description="Lease term")
    start_year: int = Field(
        default=2025, ge=1900, le=2200, description="Calendar year the lease starts"
    )

    def is_active(self, year: int) -> bool:
        """Check whether the lease is running in the given calendar year."""
        return (
            self.pre_tax_annual > 0
            and self.lease_term_years > 0
            and self.start_year <= year < self.start_year + self.lease_term_years
        )


class ExpenseItem(FrozenModel):
    """A recurring household expense split between the two earners."""

    id: str = Field(..., min_length=1, description="Expense identifier")
    name: str = Field(..., min_length=1, description="Expense name")
    category: str = Field(default="Other", description="Expense category")
    amount: float = Field(..., ge=0, description="Amount per frequency period")
    frequency: ExpenseFrequency = Field(
        default="monthly", description="How often the amount is paid"
    )
    primary_proportion: float = Field(
        default=50, ge=0, description="Primary earner's relative share"
    )
    partner_proportion: float = Field(
        default=50, ge=0, description="Partner's relative share"
    )

    @property
    def kind(self) -> ExpenseKind:
        """Classify the item for forecasting."""
        if self.id in (MORTGAGE_EXPENSE_ID, MORTGAGE_EXTRA_EXPENSE_ID):
            return ExpenseKind.MORTGAGE
        if self.id.startswith(EDUCATION_EXPENSE_PREFIX):
            return ExpenseKind.EDUCATION
        if self.name.strip().lower() == DEPENDENTS_EXPENSE_NAME:
            return ExpenseKind.DEPENDENTS
        return ExpenseKind.REGULAR


class Mortgage(FrozenModel):
    """Mortgage loan information."""

    loan_amount: float = Field(..., ge=0, description="Original loan amount")
    current_balance: float = Field(..., ge=0, description="Outstanding balance")
    interest_rate: float = Field(..., ge=0, le=100, description="Interest rate (%)")
    loan_term_years: int = Field(..., ge=1, le=50, description="Loan term in years")
    payments_per_year: Literal[12, 26, 52] = Field(
        default=12, description="Repayments per year"
    )
    start_year: int = Field(..., ge=1900, le=2200, description="Loan start year")
    extra_monthly_payment: float = Field(
        default=0, ge=0, description="Additional monthly repayment"
    )


class Asset(FrozenModel):
    """Generic asset compounding at its own rate."""

    id: str = Field(..., min_length=1, description="Asset identifier")
    name: str = Field(..., min_length=1, description="Asset name")
    category: str = Field(default="Other", description="Asset category")
    current_value: float = Field(..., ge=0, description="Current value")
    annual_growth_rate: float = Field(
        default=0, description="Annual growth rate (%, negative = depreciation)"
    )


class Car(FrozenModel):
    """Vehicle that depreciates each year."""

    id: str = Field(..., min_length=1, description="Car identifier")
    name: str = Field(..., min_length=1, description="Car name")
    current_value: float = Field(..., ge=0, description="Current value")
    annual_depreciation: float = Field(
        default=15, ge=0, le=100, description="Annual depreciation (%)"
    )


class PortfolioItem(FrozenModel):
    """A holding valued manually or from a quantity and unit price."""

    id: str = Field(..., min_length=1, description="Holding identifier")
    name: str = Field(..., min_length=1, description="Holding name")
    current_value: float = Field(default=0, ge=0, description="Current value")
    is_manual: bool = Field(default=True, description="Value entered by hand")
    ticker: Optional[str] = Field(default=None, description="Market ticker")
    quantity: Optional[float] = Field(default=None, ge=0, description="Units held")
    price_per_unit: Optional[float] = Field(
        default=None, ge=0, description="Last known unit price"
    )

    @field_validator("ticker")
    @classmethod
    def normalize_ticker(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip().upper()
        return v or None

    @property
    def market_value(self) -> float:
        """Value of the holding: quantity x price for live items."""
        if (
            not self.is_manual
            and self.quantity is not None
            and self.price_per_unit is not None
        ):
            return round(self.quantity * self.price_per_unit, 2)
        return self.current_value


class Child(FrozenModel):
    """Child information for education planning."""

    id: str = Field(..., min_length=1, description="Child identifier")
    name: str = Field(..., min_length=1, description="Child name")
    current_year_level: int = Field(
        ..., ge=-10, le=30, description="-2 = ELP3, -1 = ELP4, 0 = Prep, 12 = Year 12"
    )
    current_year: int = Field(
        ..., ge=1900, le=2200, description="Calendar year the level applies to"
    )


class EducationFeeSchedule(FrozenModel):
    """Annual school fees per year-level band, in base-year dollars."""

    elp3: float = Field(default=0, ge=0, description="ELP3 annual fee")
    elp4: float = Field(default=0, ge=0, description="ELP4 annual fee")
    prep_to_year4: float = Field(default=0, ge=0, description="Prep to Year 4 fee")
    year5_and_6: float = Field(default=0, ge=0, description="Years 5 and 6 fee")
    year7_to_9: float = Field(default=0, ge=0, description="Years 7 to 9 fee")
    year10_to_12: float = Field(default=0, ge=0, description="Years 10 to 12 fee")
    base_year: int = Field(
        default=2026, ge=1900, le=2200, description="Year the fees are quoted in"
    )


class PersonProfile(FrozenModel):
    """One earner's demographics, income and contribution settings."""

    name: str = Field(..., min_length=1, description="Display name")
    current_age: int = Field(..., ge=0, le=120, description="Age in year one")
    retirement_age: int = Field(..., ge=0, le=120, description="Retirement age")
    income: IncomeInput = Field(default_factory=IncomeInput)
    voluntary_super_rate: float = Field(
        default=0, ge=0, le=100, description="Salary-sacrificed super (%)"
    )
    portfolio_contribution: float = Field(
        default=0, ge=0, description="Annual portfolio contribution"
    )
    novated_lease: NovatedLease = Field(default_factory=NovatedLease)
    spendable_exclusion: float = Field(
        default=0, ge=0, description="After-tax income not available for spending"
    )


class AssetBundle(FrozenModel):
    """Household balance sheet at the start of the forecast."""

    primary_super_balance: float = Field(default=0, ge=0)
    partner_super_balance: float = Field(default=0, ge=0)
    super_growth_rate: float = Field(default=7, description="Super growth (%)")
    portfolio_value: float = Field(default=0, ge=0)
    portfolio_growth_rate: float = Field(default=7, description="Portfolio growth (%)")
    portfolio_items: List[PortfolioItem] = Field(default_factory=list)
    cars: List[Car] = Field(default_factory=list)
    other_assets: List[Asset] = Field(default_factory=list)
    mortgage: Mortgage
    retirement_spending_ratio: float = Field(
        default=70,
        ge=0,
        le=100,
        description="Share of retirement drawdown taken from super (%)",
    )


class AutoInvestPolicy(FrozenModel):
    """Divert part of each earner's surplus above a threshold to the portfolio."""

    threshold: float = Field(default=0, ge=0, description="Annual surplus kept")
    invest_rate: float = Field(
        default=100, ge=0, le=100, description="Share of the excess invested (%)"
    )


class ForecastConfig(FrozenModel):
    """
    Complete, resolved input snapshot for one forecast run.

    The engine never mutates this value and applies no defaults of its own;
    build it with ForecastService to normalise raw household state.
    """

    primary: PersonProfile
    partner: PersonProfile
    expenses: List[ExpenseItem] = Field(default_factory=list)
    assets: AssetBundle
    annual_income_increase: float = Field(default=3, description="Income growth (%)")
    annual_inflation_rate: float = Field(default=2.5, description="Inflation (%)")
    financial_year: str = Field(..., description="Tax / super year, e.g. 2025-26")
    start_year: int = Field(
        ..., ge=1900, le=2200, description="Calendar year of the first projection"
    )
    include_medicare_levy: bool = Field(default=True)
    children: List[Child] = Field(default_factory=list)
    education_fees: EducationFeeSchedule = Field(
        default_factory=EducationFeeSchedule
    )
    auto_invest: Optional[AutoInvestPolicy] = Field(default=None)
    max_age: int = Field(default=80, ge=1, le=120, description="Projection end age")
    default_car_depreciation_rate: float = Field(
        default=15, ge=0, le=100, description="Used when there are no cars (%)"
    )

    @model_validator(mode="after")
    def validate_expense_ids(self):
        ids = [expense.id for expense in self.expenses]
        if len(ids) != len(set(ids)):
            raise ValueError("Expense ids must be unique")
        return self
