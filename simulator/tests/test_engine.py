from __future__ import annotations

import pytest

from simulator.core.engine import build_report, run_simulation
from simulator.schemas.simulation import SimulationParameters


def goal_params(**overrides) -> SimulationParameters:
    values = {
        "initial_capital": 3000,
        "duration_years": 18,
        "inflation_rate": 0.02,
        "goal": {"kind": "income", "monthly_income": 600, "payout_years": 5},
    }
    values.update(overrides)
    return SimulationParameters(**values)


def test_goal_solves_for_contribution():
    result = run_simulation(goal_params())

    assert result.mode == "contribution"
    assert result.reference_profile == "balanced"
    balanced = result.profiles["balanced"]
    assert result.monthly_contribution == balanced.monthly_contribution
    assert result.target_capital == balanced.target_capital
    assert result.projection[-1].capital == pytest.approx(result.target_capital, abs=1.0)
    # higher yields need a smaller effort
    assert (
        result.profiles["conservative"].monthly_contribution
        > balanced.monthly_contribution
        > result.profiles["dynamic"].monthly_contribution
    )


def test_without_goal_projects_future_value():
    params = SimulationParameters(monthly_contribution=300, duration_years=20, reference_profile="dynamic")
    result = run_simulation(params)

    assert result.mode == "future_value"
    assert result.reference_profile == "dynamic"
    assert result.monthly_contribution == 300
    assert result.target_capital is None
    assert len(result.projection) == 21
    assert result.projection[-1].capital == pytest.approx(result.profiles["dynamic"].final_value)


def test_identical_parameters_give_identical_results():
    params = goal_params(calculation="delayed", tax_rate=0.17, maturation_delay_months=4)
    rebuilt = goal_params(calculation="delayed", tax_rate=0.17, maturation_delay_months=4)

    assert run_simulation(params) == run_simulation(params)
    assert run_simulation(params).model_dump() == run_simulation(rebuilt).model_dump()


def test_report_carries_inputs_and_result():
    params = goal_params()
    report = build_report(params)

    assert report.parameters == params
    assert report.result == run_simulation(params)
    dumped = report.model_dump(mode="json")
    assert dumped["parameters"]["goal"]["kind"] == "income"
    assert dumped["result"]["mode"] == "contribution"
