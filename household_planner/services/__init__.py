"""Services that sit between saved household state and the calculators."""

from .forecast_service import (
    AssetState,
    ForecastRun,
    ForecastService,
    HouseholdState,
    MortgageState,
    PersonState,
)

__all__ = [
    "AssetState",
    "ForecastRun",
    "ForecastService",
    "HouseholdState",
    "MortgageState",
    "PersonState",
]
