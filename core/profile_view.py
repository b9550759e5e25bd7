import logging
from typing import List, Optional, Tuple

from client.api import ApiClient
from client.errors import DashboardError, UnauthorizedError, error_message
from config import DASHBOARD_ROUTE, LOGIN_ROUTE
from core.navigation import Navigator
from schemas import CandidateProfileDocument

logger = logging.getLogger(__name__)

PROFILE_FAILED_MESSAGE = "Failed to load candidate profile"
PROFILE_MISSING_MESSAGE = "Profile not found"


class ProfileView:
    """Candidate profile page. The document lives only as long as this object."""

    def __init__(self, client: ApiClient, navigator: Navigator, submission_id: Optional[str]):
        self.client = client
        self.navigator = navigator
        self.submission_id = submission_id
        self.profile: Optional[CandidateProfileDocument] = None
        self.error = ""
        self.is_loading = False
        self._loaded = False

    def load(self) -> Optional[CandidateProfileDocument]:
        if self.is_loading or self._loaded:
            return self.profile
        if not self.submission_id:
            self.error = PROFILE_MISSING_MESSAGE
            return None
        self.is_loading = True
        try:
            self.profile = self.client.get_candidate_profile(self.submission_id)
        except UnauthorizedError:
            # not a page error: the session is gone and the navigator is on the login page
            return None
        except DashboardError as e:
            logger.warning("Profile %s failed to load: %s", self.submission_id, e)
            self.error = error_message(e, PROFILE_FAILED_MESSAGE)
        finally:
            self.is_loading = False
        self._loaded = True
        return self.profile

    @property
    def error_text(self) -> str:
        """What the error banner shows, if anything."""
        return self.error

    def sections(self) -> List[str]:
        """Names of the optional profile sections that have something to show."""
        p = self.profile
        if p is None:
            return []
        found = []
        if p.skills_summary:
            found.append("skills_summary")
        if p.skills and any([p.skills.technical_skills, p.skills.languages,
                             p.skills.frameworks, p.skills.tools]):
            found.append("skills")
        if p.work_history:
            found.append("work_history")
        if p.education:
            found.append("education")
        if p.github_metrics:
            found.append("github_metrics")
        if p.stackoverflow_expertise:
            found.append("stackoverflow_expertise")
        if p.strengths:
            found.append("strengths")
        if p.areas_for_growth:
            found.append("areas_for_growth")
        if p.recommended_roles:
            found.append("recommended_roles")
        return found

    def links(self) -> List[Tuple[str, str]]:
        """External profile links from `personal_info`, as (label, url)."""
        if self.profile is None:
            return []
        info = self.profile.personal_info
        found = []
        for field, label in (("github_url", "GitHub"), ("linkedin_url", "LinkedIn"), ("portfolio_url", "Portfolio")):
            if info.get(field):
                found.append((label, info[field]))
        return found

    def back(self) -> None:
        """Return to the page that opened this profile, or the dashboard."""
        here = self.navigator.current
        for route in reversed(self.navigator.history[:-1]):
            if route not in (here, LOGIN_ROUTE):
                self.navigator.go(route)
                return
        self.navigator.go(DASHBOARD_ROUTE)
