import logging
from typing import Optional, Tuple

from pydantic import ValidationError

from config import DASHBOARD_ROUTE, JOB_DESCRIPTION_KEY, MATCH_RESULTS_KEY
from core.navigation import Navigator
from schemas import MatchResponse
from storage.kv import KeyValueStore

logger = logging.getLogger(__name__)


class MatchResultStore:
    """Hands the last match response from the search form to the results view.

    Entries live in session-scoped storage, are replaced wholesale by the next
    `put` and never expire on their own.
    """

    def __init__(self, session_store: KeyValueStore, navigator: Navigator):
        self.session_store = session_store
        self.navigator = navigator

    def put(self, results: MatchResponse, job_description: str) -> None:
        self.session_store.set(MATCH_RESULTS_KEY, results.model_dump_json())
        self.session_store.set(JOB_DESCRIPTION_KEY, job_description)

    def get(self) -> Optional[MatchResponse]:
        raw = self.session_store.get(MATCH_RESULTS_KEY)
        if not raw:
            return None
        try:
            return MatchResponse.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Discarding unreadable stored match results: %s", e)
            return None

    def get_job_description(self) -> str:
        return self.session_store.get(JOB_DESCRIPTION_KEY) or ""

    def load_for_results_view(self) -> Optional[Tuple[MatchResponse, str]]:
        """Stored payload for the results view, or redirect to the search page."""
        results = self.get()
        if results is None:
            logger.info("No stored match results; redirecting to %s", DASHBOARD_ROUTE)
            self.navigator.go(DASHBOARD_ROUTE)
            return None
        return results, self.get_job_description()
