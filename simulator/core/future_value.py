"""Compounding primitives shared by every calculation in the engine.

All values are plain floats; nothing is rounded here. Currency formatting
belongs to whoever displays the numbers.
"""

from __future__ import annotations

import math

from simulator.core.errors import InvalidParameterError, require_finite, require_non_negative

MONTHS_PER_YEAR = 12


def _growth_factor(rate: float, periods: float) -> float:
    try:
        return (1.0 + rate) ** periods
    except OverflowError:
        raise InvalidParameterError([f"compounding {rate} over {periods} periods overflows"]) from None


def _checked(value: float) -> float:
    if not math.isfinite(value):
        raise InvalidParameterError(["result is too large to represent"])
    return value


def future_value_of_lump_sum(principal: float, annual_rate: float, years: float) -> float:
    """Value of ``principal`` after ``years`` of annual compounding."""
    require_finite(principal=principal)
    require_non_negative(annual_rate=annual_rate, years=years)
    if principal <= 0:
        return 0.0
    return _checked(principal * _growth_factor(annual_rate, years))


def future_value_of_annuity(monthly_contribution: float, annual_rate: float, years: float) -> float:
    """Ordinary annuity: equal contributions at the end of each month.

    The monthly rate is ``annual_rate / 12`` over ``years * 12`` periods.
    A zero rate degenerates to the plain sum of contributions.
    """
    require_finite(monthly_contribution=monthly_contribution, years=years)
    require_non_negative(annual_rate=annual_rate)
    if monthly_contribution <= 0 or years <= 0:
        return 0.0

    monthly_rate = annual_rate / MONTHS_PER_YEAR
    periods = years * MONTHS_PER_YEAR
    if monthly_rate == 0:
        return monthly_contribution * periods
    return _checked(monthly_contribution * (_growth_factor(monthly_rate, periods) - 1.0) / monthly_rate)


def present_value_of_annuity(monthly_amount: float, annual_rate: float, years: float) -> float:
    """Capital needed today to pay ``monthly_amount`` every month for ``years``."""
    require_non_negative(monthly_amount=monthly_amount, annual_rate=annual_rate, years=years)
    periods = years * MONTHS_PER_YEAR
    monthly_rate = annual_rate / MONTHS_PER_YEAR
    if monthly_rate == 0:
        return monthly_amount * periods
    return monthly_amount * (1.0 - (1.0 + monthly_rate) ** -periods) / monthly_rate


def real_value(nominal: float, inflation_rate: float, years: float) -> float:
    """Deflate a nominal amount back to today's money."""
    require_finite(nominal=nominal)
    require_non_negative(inflation_rate=inflation_rate, years=years)
    return nominal / (1.0 + inflation_rate) ** years


def inflate(amount: float, inflation_rate: float, years: float) -> float:
    require_non_negative(amount=amount, inflation_rate=inflation_rate, years=years)
    return amount * (1.0 + inflation_rate) ** years


def months_in(years: int) -> int:
    if years < 0:
        raise InvalidParameterError([f"duration must be >= 0 years, got {years}"])
    return years * MONTHS_PER_YEAR
