from typing import Any, Optional

from config import MIN_JOB_DESCRIPTION_LENGTH


class DashboardError(Exception):
    """Base class for errors surfaced to the dashboard."""


class JobDescriptionTooShort(DashboardError):
    def __init__(self):
        super().__init__(
            f"Job description must be at least {MIN_JOB_DESCRIPTION_LENGTH} characters long"
        )


class AccessDeniedError(DashboardError):
    def __init__(self, message: str = "Access denied. Admin role required."):
        super().__init__(message)


class ApiError(DashboardError):
    """Non-2xx response or transport failure. `status_code` is None for the latter."""

    def __init__(self, status_code: Optional[int], detail: Optional[str] = None, message: str = ""):
        self.status_code = status_code
        self.detail = detail
        super().__init__(message or detail or f"API request failed ({status_code})")


class UnauthorizedError(ApiError):
    pass


def extract_detail(body: Any) -> Optional[str]:
    """Pull the `detail` field out of an error body (FastAPI style)."""
    if not isinstance(body, dict):
        return None
    detail = body.get("detail")
    if detail is None:
        return None
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list):
        msgs = [d.get("msg", "") if isinstance(d, dict) else str(d) for d in detail]
        return "; ".join(m for m in msgs if m) or None
    return str(detail)


def error_message(exc: BaseException, fallback: str) -> str:
    if isinstance(exc, ApiError):
        return exc.detail or fallback
    if isinstance(exc, DashboardError):
        return str(exc)
    return fallback
