# client/api.py
"""
HTTP client for the SkillSense backend.

Every call goes through one `requests.Session`:
- a bearer auth hook reads the durable token at send time
- a response hook turns any 401, from any endpoint, into a token purge
  plus a notification to the unauthorized listeners (the session gate)
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

import requests
from requests.auth import AuthBase
from pydantic import BaseModel, ValidationError

from config import TOKEN_KEY, Settings
from client.errors import ApiError, UnauthorizedError, extract_detail
from schemas import (
    CandidateListItem,
    CandidateProfileDocument,
    LoginRequest,
    MatchRequest,
    MatchResponse,
    TokenResponse,
    UserRecord,
)
from storage.kv import KeyValueStore

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class BearerAuth(AuthBase):
    """Attach `Authorization: Bearer <token>` when a token is stored."""

    def __init__(self, token_store: KeyValueStore):
        self.token_store = token_store

    def __call__(self, r):
        token = self.token_store.get(TOKEN_KEY)
        if token:
            r.headers["Authorization"] = f"Bearer {token}"
        return r


class ApiClient:
    def __init__(self, settings: Settings, token_store: KeyValueStore, http: Optional[requests.Session] = None):
        self.settings = settings
        self.base_url = settings.api_url.rstrip("/")
        self.token_store = token_store
        self._unauthorized_listeners: List[Callable[[], None]] = []

        self.http = http or requests.Session()
        self.http.headers.update({"Content-Type": "application/json"})
        self.http.auth = BearerAuth(token_store)
        self.http.hooks["response"].append(self._intercept_unauthorized)

    # -------------------- interceptor --------------------
    def on_unauthorized(self, listener: Callable[[], None]) -> None:
        self._unauthorized_listeners.append(listener)

    def _intercept_unauthorized(self, response: requests.Response, *args, **kwargs):
        if response.status_code == 401:
            logger.warning("401 from %s; clearing stored token", response.url)
            self.token_store.remove(TOKEN_KEY)
            for listener in list(self._unauthorized_listeners):
                listener()
        return response

    # -------------------- transport --------------------
    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None,
                 timeout: Optional[float] = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            r = self.http.request(method, url, json=json, timeout=timeout or self.settings.request_timeout)
        except requests.exceptions.RequestException as e:
            logger.error("Connection error on %s %s: %s", method, path, e)
            raise ApiError(None, message=f"Connection error: {e}") from e

        if not r.ok:
            try:
                body = r.json()
            except ValueError:
                body = None
            detail = extract_detail(body)
            error_cls = UnauthorizedError if r.status_code == 401 else ApiError
            raise error_cls(r.status_code, detail)

        try:
            return r.json()
        except ValueError as e:
            raise ApiError(r.status_code, message=f"Malformed JSON from {path}") from e

    @staticmethod
    def _parse(model: Type[M], data: Any, path: str) -> M:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise ApiError(200, message=f"Unexpected response shape from {path}: {e}") from e

    # -------------------- auth --------------------
    def login(self, email: str, password: str) -> TokenResponse:
        body = LoginRequest(email=email, password=password).model_dump()
        return self._parse(TokenResponse, self._request("POST", "/auth/login", json=body), "/auth/login")

    def get_me(self) -> UserRecord:
        return self._parse(UserRecord, self._request("GET", "/auth/me"), "/auth/me")

    # -------------------- hr --------------------
    def get_all_candidates(self) -> List[CandidateListItem]:
        data = self._request("GET", "/hr/candidates")
        if isinstance(data, dict):
            data = data.get("candidates", [])
        return [self._parse(CandidateListItem, item, "/hr/candidates") for item in data or []]

    def get_candidate_profile(self, submission_id: str) -> CandidateProfileDocument:
        path = f"/hr/candidates/{submission_id}"
        return self._parse(CandidateProfileDocument, self._request("GET", path), path)

    def match_candidates(self, job_description: str, top_n: Optional[int] = None) -> MatchResponse:
        payload = MatchRequest(job_description=job_description, top_n=top_n).to_payload()
        data = self._request("POST", "/hr/match-candidates", json=payload, timeout=self.settings.match_timeout)
        return self._parse(MatchResponse, data, "/hr/match-candidates")

    def get_summary(self) -> Dict[str, Any]:
        data = self._request("GET", "/hr/summary")
        return data if isinstance(data, dict) else {"summary": data}
