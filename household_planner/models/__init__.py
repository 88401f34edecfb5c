"""Data models and calculators for household financial planning."""

from .household import (
    Asset,
    AssetBundle,
    AutoInvestPolicy,
    Car,
    Child,
    EducationFeeSchedule,
    ExpenseItem,
    ExpenseKind,
    ForecastConfig,
    IncomeInput,
    Mortgage,
    NovatedLease,
    PersonProfile,
    PortfolioItem,
)
from .tax import TaxBracket, TaxCalculationResult, calculate_income_tax
from .superannuation import SuperCalculationResult, calculate_super, get_sg_rate
from .mortgage_amortization import MortgageCalculator, MortgageSchedule
from .expenses import (
    DisposableIncome,
    ExpenseSummary,
    calculate_disposable_income,
    calculate_expense_summary,
)
from .income import (
    CalculationConfig,
    HouseholdIncomeData,
    PersonIncomeData,
    calculate_household_income,
    calculate_person_income,
)
from .forecast_result import ForecastResult, ForecastSummary, YearProjection
from .forecast import ForecastEngine, calculate_forecast
from .portfolio import PriceFeed, resolve_portfolio_items, total_portfolio_value
from .expense_sync import (
    sync_education_expenses,
    sync_mortgage_expenses,
    sync_portfolio_value,
)

__all__ = [
    "Asset",
    "AssetBundle",
    "AutoInvestPolicy",
    "Car",
    "Child",
    "EducationFeeSchedule",
    "ExpenseItem",
    "ExpenseKind",
    "ForecastConfig",
    "IncomeInput",
    "Mortgage",
    "NovatedLease",
    "PersonProfile",
    "PortfolioItem",
    "TaxBracket",
    "TaxCalculationResult",
    "calculate_income_tax",
    "SuperCalculationResult",
    "calculate_super",
    "get_sg_rate",
    "MortgageCalculator",
    "MortgageSchedule",
    "DisposableIncome",
    "ExpenseSummary",
    "calculate_disposable_income",
    "calculate_expense_summary",
    "CalculationConfig",
    "HouseholdIncomeData",
    "PersonIncomeData",
    "calculate_household_income",
    "calculate_person_income",
    "ForecastResult",
    "ForecastSummary",
    "YearProjection",
    "ForecastEngine",
    "calculate_forecast",
    "PriceFeed",
    "resolve_portfolio_items",
    "total_portfolio_value",
    "sync_education_expenses",
    "sync_mortgage_expenses",
    "sync_portfolio_value",
]
