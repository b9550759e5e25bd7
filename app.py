"""Wiring for the dashboard core: one explicit context handed to every page."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from client.api import ApiClient
from config import Settings
from core.match_form import MatchForm
from core.navigation import Navigator
from core.profile_view import ProfileView
from core.result_store import MatchResultStore
from core.results_view import ResultsView
from core.session_gate import SessionGate
from storage.kv import KeyValueStore

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    settings: Settings
    durable_store: KeyValueStore
    session_store: KeyValueStore
    navigator: Navigator
    client: ApiClient
    gate: SessionGate
    result_store: MatchResultStore

    def match_form(self, top_n: Optional[int] = None) -> MatchForm:
        return MatchForm(self.client, self.result_store, self.navigator, top_n=top_n)

    def results_view(self) -> ResultsView:
        return ResultsView(self.result_store, self.navigator)

    def profile_view(self, submission_id: Optional[str]) -> ProfileView:
        return ProfileView(self.client, self.navigator, submission_id)


def build_context(
    settings: Optional[Settings],
    durable_store: Optional[KeyValueStore],
    session_store: Optional[KeyValueStore],
    navigator: Optional[Navigator],
    http: Optional[requests.Session] = None,
) -> AppContext:
    """Assemble the context. Missing collaborators fail here, not at first use."""
    missing = [
        name for name, value in (
            ("settings", settings),
            ("durable_store", durable_store),
            ("session_store", session_store),
            ("navigator", navigator),
        ) if value is None
    ]
    if missing:
        raise ValueError(f"Cannot build app context, missing: {', '.join(missing)}")

    client = ApiClient(settings, durable_store, http=http)
    gate = SessionGate(client, durable_store, navigator)
    result_store = MatchResultStore(session_store, navigator)
    logger.info("Dashboard context ready (API %s)", settings.api_url)
    return AppContext(
        settings=settings,
        durable_store=durable_store,
        session_store=session_store,
        navigator=navigator,
        client=client,
        gate=gate,
        result_store=result_store,
    )
