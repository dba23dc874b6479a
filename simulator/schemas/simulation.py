"""Data contracts for savings simulations."""

from __future__ import annotations

import math
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_PROFILES: Dict[str, float] = {
    "conservative": 0.04,
    "balanced": 0.06,
    "dynamic": 0.08,
}
DEFAULT_REFERENCE_PROFILE = "balanced"
MAX_PROFILE_RATE = 1.0


class ProfileRates(dict):
    """Profile name to annual rate, read-only once validated."""

    def _read_only(self, *args, **kwargs):
        raise TypeError("profile rates cannot be changed after validation")

    __setitem__ = __delitem__ = __ior__ = _read_only
    clear = pop = popitem = setdefault = update = _read_only

    def __reduce__(self):
        return (ProfileRates, (dict(self),))


class Goal(BaseModel):
    """Outcome the saver wants to reach at the end of the horizon.

    Income amounts are expressed in today's money.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    kind: Literal["capital", "income", "replacement"]
    target_capital: Optional[float] = Field(default=None, ge=0)
    monthly_income: Optional[float] = Field(default=None, ge=0)
    current_monthly_income: Optional[float] = Field(default=None, ge=0)
    replacement_ratio: Optional[float] = Field(default=None, ge=0, le=1)
    payout_years: int = Field(
        20,
        ge=1,
        le=60,
        description="Years over which an income goal is drawn from the capital.",
    )

    @model_validator(mode="after")
    def ensure_inputs(self) -> "Goal":
        if self.kind == "capital" and self.target_capital is None:
            raise ValueError("capital goal requires target_capital")
        if self.kind == "income" and self.monthly_income is None:
            raise ValueError("income goal requires monthly_income")
        if self.kind == "replacement" and (
            self.current_monthly_income is None or self.replacement_ratio is None
        ):
            raise ValueError("replacement goal requires current_monthly_income and replacement_ratio")
        return self

    @property
    def desired_monthly_income(self) -> float:
        if self.kind == "replacement":
            return self.current_monthly_income * self.replacement_ratio
        return self.monthly_income or 0.0


class SimulationParameters(BaseModel):
    """Inputs of one simulation run. Immutable once validated."""

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    initial_capital: float = Field(0.0, ge=0, description="Lump sum invested at month 0.")
    monthly_contribution: Optional[float] = Field(
        None,
        ge=0,
        description="Monthly effort. Left empty when a goal makes it the unknown.",
    )
    duration_years: int = Field(..., ge=1, le=60, description="Saving horizon in whole years.")
    profiles: Dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_PROFILES),
        validate_default=True,
        description="Annual nominal yield per named profile (e.g. 0.06 for 6%).",
    )
    reference_profile: Optional[str] = None
    calculation: Literal["compound", "delayed"] = Field(
        "compound",
        description="'compound' uses the closed-form annuity, 'delayed' the monthly ledger.",
    )
    tax_rate: float = Field(0.0, ge=0, le=1, description="Tax withheld on generated income.")
    maturation_delay_months: int = Field(
        0,
        ge=0,
        le=120,
        description="Months an invested amount waits before it produces income.",
    )
    inflation_rate: float = Field(0.0, ge=0, lt=1)
    deferral_years: int = Field(
        0,
        ge=0,
        le=60,
        description="Compare against starting this many years later.",
    )
    goal: Optional[Goal] = None

    @field_validator("profiles")
    @classmethod
    def ensure_profiles(cls, profiles: Dict[str, float]) -> Dict[str, float]:
        if not profiles:
            raise ValueError("at least one yield profile is required")
        for name, rate in profiles.items():
            if not math.isfinite(rate) or not 0 <= rate <= MAX_PROFILE_RATE:
                raise ValueError(f"profile {name} needs a rate between 0 and {MAX_PROFILE_RATE}")
        return ProfileRates(profiles)

    @model_validator(mode="after")
    def ensure_validity(self) -> "SimulationParameters":
        if self.goal is None and self.monthly_contribution is None:
            raise ValueError("monthly_contribution is required when no goal is given")
        if self.goal is not None and self.monthly_contribution is not None:
            raise ValueError("monthly_contribution must be empty when a goal is given")
        if self.reference_profile is not None and self.reference_profile not in self.profiles:
            raise ValueError(f"unknown reference_profile {self.reference_profile}")
        return self

    @property
    def selected_profile(self) -> str:
        if self.reference_profile is not None:
            return self.reference_profile
        if DEFAULT_REFERENCE_PROFILE in self.profiles:
            return DEFAULT_REFERENCE_PROFILE
        return next(iter(self.profiles))

    @property
    def months(self) -> int:
        return self.duration_years * 12


class ProjectionPoint(BaseModel):
    """Capital and cumulative contributions at a year-end checkpoint."""

    model_config = ConfigDict(frozen=True)

    year: int = Field(..., ge=0)
    capital: float = Field(..., ge=0)
    contributions: float = Field(..., ge=0)
    real_capital: float = Field(..., ge=0)


class ProfileResult(BaseModel):
    rate: float
    monthly_contribution: float = Field(..., ge=0)
    target_capital: Optional[float] = None
    final_value: float = Field(..., ge=0)
    real_value: float = Field(..., ge=0)
    total_invested: float = Field(..., ge=0)
    gain: float
    deferred_final_value: Optional[float] = None
    cost_of_delay: Optional[float] = None


class SimulationResult(BaseModel):
    mode: Literal["contribution", "future_value"]
    reference_profile: str
    monthly_contribution: float = Field(..., ge=0)
    target_capital: Optional[float] = None
    profiles: Dict[str, ProfileResult]
    projection: List[ProjectionPoint]


class ProjectionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    parameters: SimulationParameters
    monthly_contribution: float = Field(..., ge=0)
    profile: Optional[str] = None


class SimulationReport(BaseModel):
    """Payload handed to the notification layer: inputs plus computed result."""

    parameters: SimulationParameters
    result: SimulationResult
