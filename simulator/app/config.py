"""Application configuration, overridable from the environment."""

from __future__ import annotations

import os
from typing import List

DEV_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"


def _split(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Config:
    CORS_ORIGINS = _split(os.environ.get("SIMULATOR_CORS_ORIGINS", DEV_ORIGINS))
    LOG_LEVEL = os.environ.get("SIMULATOR_LOG_LEVEL", "INFO").upper()
