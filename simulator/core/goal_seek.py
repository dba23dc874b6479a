"""Bisection search for the smallest monthly contribution that reaches a target."""

from __future__ import annotations

import logging
from typing import Callable

from simulator.core.errors import InvalidParameterError, require_non_negative

logger = logging.getLogger(__name__)

SEARCH_ITERATIONS = 50
UPPER_BOUND_FACTOR = 3.0

Evaluator = Callable[[float], float]


def contribution_upper_bound(target: float, months: int) -> float:
    """Search ceiling proportional to the flat monthly share of ``target``.

    Every evaluator in the engine returns at least the sum of the
    contributions it was given, so ``target / months`` already reaches the
    target and three times that is a safe bracket.
    """
    require_non_negative(target=target)
    if months <= 0:
        raise InvalidParameterError([f"months must be > 0, got {months}"])
    return UPPER_BOUND_FACTOR * target / months


def seek_required_contribution(
    target: float,
    evaluator: Evaluator,
    upper_bound: float,
    iterations: int = SEARCH_ITERATIONS,
) -> float:
    """Solve ``evaluator(x) >= target`` for the smallest ``x`` in ``[0, upper_bound]``.

    ``evaluator`` must be non-decreasing in ``x``. The loop always runs
    ``iterations`` halvings and returns the final upper bound, so the answer
    never undershoots as long as ``evaluator(upper_bound) >= target``. That
    precondition is the caller's: an undersized bound is not detected and
    yields ``upper_bound`` itself.
    """
    require_non_negative(target=target, upper_bound=upper_bound)

    if evaluator(0.0) >= target:
        return 0.0

    low, high = 0.0, float(upper_bound)
    for _ in range(iterations):
        mid = (low + high) / 2.0
        if evaluator(mid) >= target:
            high = mid
        else:
            low = mid

    logger.debug("goal seek: target=%.2f solved=%.6f after %d iterations", target, high, iterations)
    return high
