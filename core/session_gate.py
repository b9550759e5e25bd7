# core/session_gate.py
"""
Session gate: decides whether the caller is an authenticated admin.

Token issuance alone never establishes a session. `login` stores the token,
confirms the role through /auth/me, and only then sets `user`; a non-admin
role removes the token again before the error reaches the caller.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from client.api import ApiClient
from client.errors import AccessDeniedError, DashboardError
from config import ADMIN_ROLE, LOGIN_ROUTE, TOKEN_KEY
from core.navigation import Navigator
from schemas import UserRecord
from storage.kv import KeyValueStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    token: Optional[str]
    user: Optional[UserRecord]
    is_loading: bool


class SessionGate:
    def __init__(self, client: ApiClient, token_store: KeyValueStore, navigator: Navigator):
        self.client = client
        self.token_store = token_store
        self.navigator = navigator
        self.user: Optional[UserRecord] = None
        self.is_loading = True
        self.login_in_flight = False
        client.on_unauthorized(self._handle_unauthorized)

    @property
    def token(self) -> Optional[str]:
        return self.token_store.get(TOKEN_KEY)

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def session(self) -> Session:
        return Session(token=self.token, user=self.user, is_loading=self.is_loading)

    def check_auth(self) -> None:
        """Restore the session from a stored token. Never raises."""
        try:
            if self.token:
                try:
                    user = self.client.get_me()
                except DashboardError as e:
                    logger.info("Stored token rejected (%s); starting logged out", e)
                    self.token_store.remove(TOKEN_KEY)
                else:
                    if user.role == ADMIN_ROLE:
                        self.user = user
                    else:
                        logger.info("Stored token belongs to non-admin %s; discarding", user.email)
                        self.token_store.remove(TOKEN_KEY)
        finally:
            self.is_loading = False

    def login(self, email: str, password: str) -> UserRecord:
        if self.login_in_flight:
            raise DashboardError("Login already in progress")
        self.login_in_flight = True
        try:
            token = self.client.login(email, password)
            self.token_store.set(TOKEN_KEY, token.access_token)

            try:
                user = self.client.get_me()
                if user.role != ADMIN_ROLE:
                    logger.warning("Login denied for %s: role %r", email, user.role)
                    raise AccessDeniedError()
            except DashboardError:
                self.token_store.remove(TOKEN_KEY)
                raise

            self.user = user
            logger.info("Admin %s logged in", user.email)
            return user
        finally:
            self.login_in_flight = False

    def logout(self) -> None:
        self.token_store.remove(TOKEN_KEY)
        self.user = None
        self.navigator.go(LOGIN_ROUTE)

    def _handle_unauthorized(self) -> None:
        # the client has already purged the token
        self.user = None
        self.navigator.go(LOGIN_ROUTE)
