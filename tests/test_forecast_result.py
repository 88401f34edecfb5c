"""Tests for the forecast result model and its helpers."""

import json

import numpy as np
import pytest
from pydantic import ValidationError

from household_planner.models.forecast_result import ForecastResult


class TestForecastResult:
    """Test cases for ForecastResult."""

    def test_get_series(self, scenario_result):
        series = scenario_result.get_series("total_net_worth")

        assert isinstance(series, np.ndarray)
        assert series.shape == (46,)
        assert series[0] == pytest.approx(
            scenario_result.projections[0].total_net_worth
        )

    def test_get_series_of_flags(self, scenario_result):
        retired = scenario_result.get_series("primary_retired")

        assert retired[0] == 0
        assert retired[-1] == 1

    def test_get_series_unknown_field(self, scenario_result):
        with pytest.raises(ValueError, match="Unknown projection field"):
            scenario_result.get_series("lottery_winnings")

    def test_get_projection(self, scenario_result):
        assert scenario_result.get_projection(2025).year == 1
        assert scenario_result.get_projection(2070).year == 46
        assert scenario_result.get_projection(2024) is None
        assert scenario_result.get_projection(2071) is None

    def test_peak_net_worth(self, scenario_result):
        peak = scenario_result.peak_net_worth()

        assert peak.total_net_worth == pytest.approx(
            float(np.max(scenario_result.get_series("total_net_worth")))
        )

    def test_balance_statistics(self, scenario_result):
        stats = scenario_result.get_balance_statistics()

        assert stats["final_net_worth"] == pytest.approx(
            scenario_result.projections[-1].total_net_worth
        )
        assert stats["min_net_worth"] <= stats["mean_net_worth"]
        assert stats["mean_net_worth"] <= stats["peak_net_worth"]
        assert stats["years_in_drawdown"] == 12

    def test_to_dict(self, scenario_result):
        data = scenario_result.to_dict()

        assert data["summary"]["total_years"] == 46
        assert data["retirement_year"] == 2059
        assert len(data["projections"]) == 46

    def test_to_dict_without_projections(self, scenario_result):
        data = scenario_result.to_dict(include_projections=False)

        assert "projections" not in data
        assert data["mortgage_payoff_year"] == scenario_result.mortgage_payoff_year()

    def test_to_json(self, scenario_result):
        data = json.loads(scenario_result.to_json(include_projections=False))

        assert data["summary"]["total_years"] == 46


class TestResultValidation:
    """Test cases for result construction."""

    def test_rejects_gap_in_years(self, scenario_result):
        projections = scenario_result.projections

        with pytest.raises(ValidationError):
            ForecastResult.from_projections([projections[0], projections[2]])

    def test_rejects_empty(self, scenario_result):
        with pytest.raises(ValidationError):
            ForecastResult(projections=[], summary=scenario_result.summary)

    def test_from_projections_summary(self, scenario_result):
        subset = ForecastResult.from_projections(scenario_result.projections[:10])

        assert subset.summary.total_years == 10
        assert subset.summary.final_cumulative_savings == pytest.approx(
            scenario_result.projections[9].cumulative_savings
        )

    def test_projections_are_frozen(self, scenario_result):
        with pytest.raises(ValidationError):
            scenario_result.projections[0].total_net_worth = 0
