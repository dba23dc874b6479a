"""Errors raised at the boundary of the calculation engine."""

from __future__ import annotations

import math
from typing import List


class InvalidParameterError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


def require_finite(**values: float) -> None:
    """Raise if any named value is NaN or infinite."""
    errors = [f"{name} must be finite" for name, value in values.items() if not math.isfinite(value)]
    if errors:
        raise InvalidParameterError(errors)


def require_non_negative(**values: float) -> None:
    require_finite(**values)
    errors = [f"{name} must be >= 0" for name, value in values.items() if value < 0]
    if errors:
        raise InvalidParameterError(errors)
