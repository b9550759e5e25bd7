from dataclasses import dataclass
from typing import FrozenSet, List, Optional

from config import DASHBOARD_ROUTE, candidate_route
from core.navigation import Navigator
from core.presentation import (
    display_name,
    preview,
    recommendation_band,
    recommendation_style,
    results_header,
    score_band,
    score_color,
    toggle_expanded,
)
from core.result_store import MatchResultStore
from schemas import CandidateMatch, MatchResponse


@dataclass(frozen=True)
class ResultCard:
    rank: int
    match: CandidateMatch
    name: str
    score_band: str
    score_color: str
    recommendation_band: str
    recommendation_color: str
    recommendation_icon: str
    top_strengths: List[str]
    top_concerns: List[str]
    expanded: bool

    @property
    def submission_id(self) -> str:
        return self.match.candidate.submission_id


class ResultsView:
    """Results page state. A fresh instance starts with every card collapsed."""

    def __init__(self, result_store: MatchResultStore, navigator: Navigator):
        self.navigator = navigator
        self.results: Optional[MatchResponse] = None
        self.job_description = ""
        self.expanded: FrozenSet[str] = frozenset()

        loaded = result_store.load_for_results_view()
        if loaded is not None:
            self.results, self.job_description = loaded

    @property
    def is_ready(self) -> bool:
        return self.results is not None

    @property
    def header(self) -> str:
        return results_header(self.results) if self.results else ""

    def toggle(self, submission_id: str) -> None:
        self.expanded = toggle_expanded(self.expanded, submission_id)

    def cards(self) -> List[ResultCard]:
        if self.results is None:
            return []
        cards = []
        for rank, m in enumerate(self.results.matches, start=1):
            score = m.analysis.match_score
            cards.append(ResultCard(
                rank=rank,
                match=m,
                name=display_name(m.candidate),
                score_band=score_band(score),
                score_color=score_color(score),
                recommendation_band=recommendation_band(m.analysis.recommendation),
                recommendation_color=recommendation_style(m.analysis.recommendation)["color"],
                recommendation_icon=recommendation_style(m.analysis.recommendation)["icon"],
                top_strengths=preview(m.analysis.key_strengths),
                top_concerns=preview(m.analysis.potential_concerns),
                expanded=m.candidate.submission_id in self.expanded,
            ))
        return cards

    def open_profile(self, submission_id: str) -> None:
        self.navigator.go(candidate_route(submission_id))

    def new_search(self) -> None:
        self.navigator.go(DASHBOARD_ROUTE)
