"""Household financial planner: tax, super, cash flow and multi-year forecasts."""

__version__ = "0.1.0"
