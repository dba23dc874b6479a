"""Compose profiles, goal seeking and the projection into one result."""

from __future__ import annotations

import logging

from simulator.core.profiles import evaluate_profiles
from simulator.core.projection import build_projection_series
from simulator.schemas.simulation import SimulationParameters, SimulationReport, SimulationResult

logger = logging.getLogger(__name__)


def run_simulation(parameters: SimulationParameters) -> SimulationResult:
    """Evaluate every profile, then chart the reference one."""
    profiles = evaluate_profiles(parameters)
    reference = parameters.selected_profile
    selected = profiles[reference]

    projection = build_projection_series(parameters, selected.monthly_contribution, reference)

    logger.debug(
        "simulation solved: profile=%s contribution=%.2f target=%s",
        reference,
        selected.monthly_contribution,
        selected.target_capital,
    )
    return SimulationResult(
        mode="contribution" if parameters.goal is not None else "future_value",
        reference_profile=reference,
        monthly_contribution=selected.monthly_contribution,
        target_capital=selected.target_capital,
        profiles=profiles,
        projection=projection,
    )


def build_report(parameters: SimulationParameters) -> SimulationReport:
    return SimulationReport(parameters=parameters, result=run_simulation(parameters))
