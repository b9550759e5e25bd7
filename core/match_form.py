import logging
from typing import Optional

from client.api import ApiClient
from client.errors import DashboardError, JobDescriptionTooShort, UnauthorizedError, error_message
from config import MIN_JOB_DESCRIPTION_LENGTH, RESULTS_ROUTE
from core.navigation import Navigator
from core.result_store import MatchResultStore

logger = logging.getLogger(__name__)

MATCH_FAILED_MESSAGE = "Failed to match candidates. Please try again."


class MatchForm:
    """State and actions behind the job-description search form."""

    def __init__(self, client: ApiClient, result_store: MatchResultStore, navigator: Navigator,
                 top_n: Optional[int] = None):
        self.client = client
        self.result_store = result_store
        self.navigator = navigator
        self.top_n = top_n
        self.job_description = ""
        self.error = ""
        self.is_loading = False

    @property
    def character_count_label(self) -> str:
        return f"{len(self.job_description)} characters (minimum {MIN_JOB_DESCRIPTION_LENGTH} required)"

    @property
    def can_submit(self) -> bool:
        return not self.is_loading and len(self.job_description) >= MIN_JOB_DESCRIPTION_LENGTH

    def validate(self) -> None:
        if len(self.job_description) < MIN_JOB_DESCRIPTION_LENGTH:
            raise JobDescriptionTooShort()

    def submit(self) -> bool:
        """Run the match. Returns True when results were stored and the view moved on."""
        if self.is_loading:
            return False
        try:
            self.validate()
        except JobDescriptionTooShort as e:
            self.error = str(e)
            return False

        self.error = ""
        self.is_loading = True
        try:
            results = self.client.match_candidates(self.job_description, top_n=self.top_n)
        except UnauthorizedError:
            # session teardown already redirected to the login page
            return False
        except DashboardError as e:
            self.error = error_message(e, MATCH_FAILED_MESSAGE)
            logger.warning("Match request failed: %s", e)
            return False
        finally:
            self.is_loading = False

        logger.info("Matched %d of %d candidates", results.total_matches_returned,
                    results.total_candidates_analyzed)
        self.result_store.put(results, self.job_description)
        self.navigator.go(RESULTS_ROUTE)
        return True

    def clear(self) -> None:
        self.job_description = ""
        self.error = ""
