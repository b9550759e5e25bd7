# config.py
"""
Central settings for the HR dashboard client.
- Loads env (.env) early
- Exposes the backend base URL, timeouts and where durable client state lives
- Holds the fixed storage keys, routes and domain constants shared by the core
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv(override=False)

IS_HF = os.environ.get("SPACE_ID") is not None

# --- Storage keys -----------------------------------------------------------
TOKEN_KEY = "hr_token"
MATCH_RESULTS_KEY = "matchResults"
JOB_DESCRIPTION_KEY = "jobDescription"

# Per-browser id scoping the durable store rows
BROWSER_COOKIE = "skillsense_browser"
BROWSER_COOKIE_DAYS = 365

# --- Routes -----------------------------------------------------------------
LOGIN_ROUTE = "/login"
DASHBOARD_ROUTE = "/dashboard"
RESULTS_ROUTE = "/results"


def candidate_route(submission_id: str) -> str:
    return f"/candidate/{submission_id}"


# --- Domain constants -------------------------------------------------------
MIN_JOB_DESCRIPTION_LENGTH = 50
ADMIN_ROLE = "admin"
PREVIEW_LIMIT = 3


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring non-numeric %s=%r", name, raw)
        return default


@dataclass(frozen=True)
class Settings:
    api_url: str = "http://localhost:8000/api/v1"
    request_timeout: float = 30.0
    match_timeout: float = 180.0
    state_dir: str = "data"
    log_level: str = "INFO"

    @property
    def state_db_path(self) -> str:
        return os.path.join(self.state_dir, "client_state.db")


def load_settings() -> Settings:
    """Build settings from the environment (and .env, loaded above)."""
    return Settings(
        api_url=os.getenv("API_URL", "http://localhost:8000/api/v1").rstrip("/"),
        request_timeout=_float_env("REQUEST_TIMEOUT", 30.0),
        match_timeout=_float_env("MATCH_TIMEOUT", 180.0),
        state_dir=os.getenv("STATE_DIR", "/tmp/data" if IS_HF else "data"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
