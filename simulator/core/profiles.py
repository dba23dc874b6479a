"""Evaluate a simulation once per named yield profile."""

from __future__ import annotations

import logging
from typing import Dict

from simulator.core.delayed import simulate_delayed_productivity
from simulator.core.future_value import (
    MONTHS_PER_YEAR,
    future_value_of_annuity,
    future_value_of_lump_sum,
    real_value,
)
from simulator.core.goal_seek import contribution_upper_bound, seek_required_contribution
from simulator.core.goals import implied_target_capital
from simulator.schemas.simulation import ProfileResult, SimulationParameters

logger = logging.getLogger(__name__)


def final_value(parameters: SimulationParameters, annual_rate: float, monthly_contribution: float, years: int) -> float:
    """Capital after ``years`` with the lump sum and the monthly effort."""
    if parameters.calculation == "delayed":
        run = simulate_delayed_productivity(
            parameters,
            annual_rate=annual_rate,
            monthly_contribution=monthly_contribution,
            years=years,
        )
        return run.total_capital
    return future_value_of_lump_sum(parameters.initial_capital, annual_rate, years) + future_value_of_annuity(
        monthly_contribution, annual_rate, years
    )


def solve_contribution(parameters: SimulationParameters, annual_rate: float, target: float) -> float:
    """Smallest monthly effort reaching ``target`` at the end of the horizon."""
    years = parameters.duration_years

    if parameters.calculation == "delayed":
        # the lump sum's income is reinvested, so it cannot be split out of the ledger
        return seek_required_contribution(
            target,
            lambda contribution: final_value(parameters, annual_rate, contribution, years),
            contribution_upper_bound(target, parameters.months),
        )

    remaining = max(0.0, target - future_value_of_lump_sum(parameters.initial_capital, annual_rate, years))
    return seek_required_contribution(
        remaining,
        lambda contribution: future_value_of_annuity(contribution, annual_rate, years),
        contribution_upper_bound(remaining, parameters.months),
    )


def evaluate_profile(parameters: SimulationParameters, annual_rate: float) -> ProfileResult:
    years = parameters.duration_years

    target = None
    if parameters.goal is not None:
        target = implied_target_capital(parameters, annual_rate)
        contribution = solve_contribution(parameters, annual_rate, target)
    else:
        contribution = parameters.monthly_contribution

    value = final_value(parameters, annual_rate, contribution, years)
    invested = parameters.initial_capital + contribution * years * MONTHS_PER_YEAR

    deferred_value = None
    cost_of_delay = None
    if parameters.deferral_years > 0:
        deferred_years = max(0, years - parameters.deferral_years)
        deferred_value = final_value(parameters, annual_rate, contribution, deferred_years)
        cost_of_delay = value - deferred_value

    return ProfileResult(
        rate=annual_rate,
        monthly_contribution=contribution,
        target_capital=target,
        final_value=value,
        real_value=real_value(value, parameters.inflation_rate, years),
        total_invested=invested,
        gain=value - invested,
        deferred_final_value=deferred_value,
        cost_of_delay=cost_of_delay,
    )


def evaluate_profiles(parameters: SimulationParameters) -> Dict[str, ProfileResult]:
    """One independent result per profile, keyed by profile name."""
    results: Dict[str, ProfileResult] = {}
    for name, rate in parameters.profiles.items():
        results[name] = evaluate_profile(parameters, rate)
        logger.debug(
            "profile %s: rate=%.4f contribution=%.2f final=%.2f",
            name,
            rate,
            results[name].monthly_contribution,
            results[name].final_value,
        )
    return results
