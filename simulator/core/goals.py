"""Turn a requested outcome into the capital it takes to reach it."""

from __future__ import annotations

from simulator.core.errors import InvalidParameterError
from simulator.core.future_value import MONTHS_PER_YEAR, inflate, present_value_of_annuity
from simulator.schemas.simulation import SimulationParameters


def implied_target_capital(parameters: SimulationParameters, annual_rate: float) -> float:
    """Capital needed at the end of the horizon for ``parameters.goal``.

    Income goals are inflated from today's money to the end of the horizon.
    With the compound calculation the income is drawn down over
    ``payout_years``; with the delayed calculation the capital is sized so its
    net income alone pays it, as a rental-type asset would.
    """
    goal = parameters.goal
    if goal is None:
        raise InvalidParameterError(["parameters carry no goal"])
    if goal.kind == "capital":
        return goal.target_capital

    monthly_income = inflate(goal.desired_monthly_income, parameters.inflation_rate, parameters.duration_years)

    if parameters.calculation == "delayed":
        net_yield = annual_rate * (1.0 - parameters.tax_rate)
        if net_yield > 0:
            return monthly_income * MONTHS_PER_YEAR / net_yield
        return monthly_income * MONTHS_PER_YEAR * goal.payout_years

    return present_value_of_annuity(monthly_income, annual_rate, goal.payout_years)
