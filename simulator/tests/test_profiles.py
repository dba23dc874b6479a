from __future__ import annotations

from math import isclose

import pytest

from simulator.core.delayed import simulate_delayed_productivity
from simulator.core.future_value import future_value_of_annuity, future_value_of_lump_sum
from simulator.core.profiles import evaluate_profile, evaluate_profiles
from simulator.schemas.simulation import DEFAULT_PROFILES, SimulationParameters


def test_default_profiles_are_evaluated_independently():
    params = SimulationParameters(initial_capital=2000, monthly_contribution=300, duration_years=20)
    results = evaluate_profiles(params)

    assert list(results) == list(DEFAULT_PROFILES)
    for name, rate in DEFAULT_PROFILES.items():
        expected = future_value_of_lump_sum(2000, rate, 20) + future_value_of_annuity(300, rate, 20)
        assert isclose(results[name].final_value, expected)
        assert results[name] == evaluate_profile(params, rate)

    assert results["conservative"].final_value < results["balanced"].final_value < results["dynamic"].final_value


def test_invested_gain_and_real_value():
    params = SimulationParameters(
        initial_capital=1000,
        monthly_contribution=100,
        duration_years=10,
        inflation_rate=0.02,
        profiles={"flat": 0.0},
    )
    result = evaluate_profiles(params)["flat"]

    assert result.total_invested == 1000 + 100 * 120
    assert isclose(result.final_value, result.total_invested)
    assert isclose(result.gain, 0.0, abs_tol=1e-9)
    assert isclose(result.real_value, result.final_value / 1.02 ** 10)
    assert result.target_capital is None


def test_cost_of_postponing_investment():
    params = SimulationParameters(monthly_contribution=300, duration_years=20, deferral_years=5)
    results = evaluate_profiles(params)

    for name, rate in DEFAULT_PROFILES.items():
        now = future_value_of_annuity(300, rate, 20)
        later = future_value_of_annuity(300, rate, 15)
        assert isclose(results[name].deferred_final_value, later)
        assert isclose(results[name].cost_of_delay, now - later)
        assert results[name].cost_of_delay > 0


def test_deferral_longer_than_horizon_loses_everything():
    params = SimulationParameters(monthly_contribution=300, duration_years=5, deferral_years=8)
    result = evaluate_profiles(params)["balanced"]

    assert result.deferred_final_value == 0.0
    assert isclose(result.cost_of_delay, result.final_value)


def test_capital_goal_is_met_by_contributions():
    params = SimulationParameters(
        duration_years=15,
        profiles={"balanced": 0.06},
        goal={"kind": "capital", "target_capital": 1_000_000},
    )
    result = evaluate_profiles(params)["balanced"]

    assert result.target_capital == 1_000_000
    assert result.final_value >= 1_000_000
    assert result.final_value == pytest.approx(1_000_000, abs=1.0)


def test_lump_sum_is_credited_before_seeking():
    without = SimulationParameters(duration_years=10, goal={"kind": "capital", "target_capital": 100_000})
    with_lump = SimulationParameters(
        initial_capital=20_000, duration_years=10, goal={"kind": "capital", "target_capital": 100_000}
    )

    plain = evaluate_profiles(without)["balanced"]
    helped = evaluate_profiles(with_lump)["balanced"]

    assert helped.monthly_contribution < plain.monthly_contribution
    assert helped.final_value == pytest.approx(100_000, abs=1.0)


def test_lump_sum_exceeding_target_needs_no_contribution():
    params = SimulationParameters(
        initial_capital=90_000, duration_years=10, goal={"kind": "capital", "target_capital": 100_000}
    )
    results = evaluate_profiles(params)

    for result in results.values():
        assert result.monthly_contribution == 0.0
        assert result.final_value >= 100_000


def test_delayed_goal_runs_the_ledger():
    params = SimulationParameters(
        initial_capital=5000,
        duration_years=12,
        calculation="delayed",
        tax_rate=0.3,
        maturation_delay_months=6,
        profiles={"scpi": 0.045},
        goal={"kind": "capital", "target_capital": 150_000},
    )
    result = evaluate_profiles(params)["scpi"]

    assert result.final_value >= 150_000
    assert result.final_value == pytest.approx(150_000, abs=1.0)
    # reinvested income does part of the work
    assert result.total_invested < 150_000


def test_cost_of_postponing_with_delayed_income():
    params = SimulationParameters(
        initial_capital=5000,
        monthly_contribution=100,
        duration_years=10,
        calculation="delayed",
        tax_rate=0.2,
        maturation_delay_months=6,
        deferral_years=3,
        profiles={"scpi": 0.05},
    )
    result = evaluate_profiles(params)["scpi"]

    later = simulate_delayed_productivity(params, annual_rate=0.05, monthly_contribution=100, years=7)
    assert isclose(result.deferred_final_value, later.total_capital)
    assert isclose(result.cost_of_delay, result.final_value - later.total_capital)
    assert result.cost_of_delay > 0
