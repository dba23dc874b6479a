"""Year-by-year capital trajectory for display."""

from __future__ import annotations

from typing import List, Optional

from simulator.core.delayed import simulate_delayed_productivity
from simulator.core.future_value import (
    MONTHS_PER_YEAR,
    future_value_of_annuity,
    future_value_of_lump_sum,
    real_value,
)
from simulator.core.errors import InvalidParameterError, require_non_negative
from simulator.schemas.simulation import ProjectionPoint, SimulationParameters


def build_projection_series(
    parameters: SimulationParameters,
    solved_contribution: float,
    profile: Optional[str] = None,
) -> List[ProjectionPoint]:
    """
    Sample capital at year 0 and at every year-end for one profile.

    Conventions:
      - ``contributions`` is the lump sum plus every monthly payment made so far.
      - ``capital`` uses the same calculation as the profile results, so the
        last point matches ``ProfileResult.final_value``.
      - ``real_capital`` is ``capital`` in today's money.
    """
    require_non_negative(solved_contribution=solved_contribution)
    name = profile or parameters.selected_profile
    if name not in parameters.profiles:
        raise InvalidParameterError([f"unknown profile {name}"])
    rate = parameters.profiles[name]
    inflation = parameters.inflation_rate

    if parameters.calculation == "delayed":
        run = simulate_delayed_productivity(
            parameters,
            annual_rate=rate,
            monthly_contribution=solved_contribution,
            sample_every=MONTHS_PER_YEAR,
        )
        return [
            ProjectionPoint(
                year=snapshot.month // MONTHS_PER_YEAR,
                capital=snapshot.total_capital,
                contributions=snapshot.contributed,
                real_capital=real_value(snapshot.total_capital, inflation, snapshot.month // MONTHS_PER_YEAR),
            )
            for snapshot in run.snapshots
        ]

    points: List[ProjectionPoint] = []
    for year in range(parameters.duration_years + 1):
        capital = future_value_of_lump_sum(parameters.initial_capital, rate, year) + future_value_of_annuity(
            solved_contribution, rate, year
        )
        points.append(
            ProjectionPoint(
                year=year,
                capital=capital,
                contributions=parameters.initial_capital + solved_contribution * year * MONTHS_PER_YEAR,
                real_capital=real_value(capital, inflation, year),
            )
        )
    return points
