"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from simulator.core.engine import build_report, run_simulation
from simulator.core.errors import InvalidParameterError
from simulator.core.profiles import evaluate_profiles
from simulator.core.projection import build_projection_series
from simulator.schemas.simulation import (
    DEFAULT_PROFILES,
    DEFAULT_REFERENCE_PROFILE,
    ProjectionRequest,
    SimulationParameters,
)

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.info("rejected payload on %s: %d error(s)", request.path, exc.error_count())
    return (
        jsonify({"detail": exc.errors(include_url=False, include_context=False)}),
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )


@api_bp.errorhandler(InvalidParameterError)
def _handle_invalid_parameter(exc: InvalidParameterError):
    logger.info("invalid parameters on %s: %s", request.path, exc)
    return jsonify({"error": exc.errors}), HTTPStatus.BAD_REQUEST


def _parameters() -> SimulationParameters:
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    return SimulationParameters.model_validate(raw_payload)


@api_bp.get("/profiles")
def profiles() -> Any:
    """Default yield profiles offered to the front-end."""
    return jsonify({"profiles": DEFAULT_PROFILES, "reference": DEFAULT_REFERENCE_PROFILE})


@api_bp.post("/simulation")
def simulation() -> Any:
    """Solve the simulation and chart the reference profile."""
    result = run_simulation(_parameters())
    logger.info(
        "simulation %s: profile=%s contribution=%.2f",
        result.mode,
        result.reference_profile,
        result.monthly_contribution,
    )
    return jsonify(result.model_dump())


@api_bp.post("/simulation/profiles")
def simulation_profiles() -> Any:
    results = evaluate_profiles(_parameters())
    return jsonify({name: result.model_dump() for name, result in results.items()})


@api_bp.post("/simulation/projection")
def simulation_projection() -> Any:
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = ProjectionRequest.model_validate(raw_payload)
    points = build_projection_series(payload.parameters, payload.monthly_contribution, payload.profile)
    return jsonify([point.model_dump() for point in points])


@api_bp.post("/simulation/report")
def simulation_report() -> Any:
    """Inputs and results in the shape the notification service consumes."""
    report = build_report(_parameters())
    return jsonify(report.model_dump(mode="json"))
