# core/presentation.py
"""
Pure display rules for match results: score bands, recommendation bands,
card expansion state and short previews. Nothing here reorders matches;
the service's order is the ranking.
"""
from __future__ import annotations

from typing import AbstractSet, Dict, FrozenSet, List, Optional, Sequence, TypeVar

import pandas as pd

from config import PREVIEW_LIMIT
from schemas import CandidateSummary, MatchResponse

T = TypeVar("T")

SCORE_COLORS: Dict[str, str] = {
    "strong": "green",
    "good": "blue",
    "fair": "orange",
    "weak": "red",
}

RECOMMENDATION_BANDS = ("highly recommended", "recommended", "maybe")
DEFAULT_RECOMMENDATION_BAND = "neutral"

RECOMMENDATION_STYLES: Dict[str, Dict[str, str]] = {
    "highly recommended": {"color": "green", "icon": "🟢"},
    "recommended": {"color": "blue", "icon": "🔵"},
    "maybe": {"color": "orange", "icon": "🟡"},
    DEFAULT_RECOMMENDATION_BAND: {"color": "gray", "icon": "⚪"},
}


def score_band(score: float) -> str:
    if score >= 80:
        return "strong"
    if score >= 60:
        return "good"
    if score >= 40:
        return "fair"
    return "weak"


def score_color(score: float) -> str:
    return SCORE_COLORS[score_band(score)]


def recommendation_band(text: Optional[str]) -> str:
    """Known band for a free-text recommendation; anything else is neutral."""
    key = (text or "").strip().lower()
    return key if key in RECOMMENDATION_BANDS else DEFAULT_RECOMMENDATION_BAND


def recommendation_style(text: Optional[str]) -> Dict[str, str]:
    return RECOMMENDATION_STYLES[recommendation_band(text)]


def toggle_expanded(expanded: AbstractSet[str], submission_id: str) -> FrozenSet[str]:
    """Return a new set with `submission_id` flipped; the input is left untouched."""
    if submission_id in expanded:
        return frozenset(expanded - {submission_id})
    return frozenset(expanded | {submission_id})


def preview(items: Sequence[T], limit: int = PREVIEW_LIMIT) -> List[T]:
    return list(items[:limit])


def display_name(candidate: CandidateSummary) -> str:
    return candidate.name or "No name available"


def results_header(results: MatchResponse) -> str:
    return (
        f"Analyzed {results.total_candidates_analyzed} candidates • "
        f"Found {results.total_matches_returned} matches"
    )


def matches_table(results: MatchResponse) -> pd.DataFrame:
    """Ranking overview in the order the service returned it."""
    rows = []
    for i, m in enumerate(results.matches, start=1):
        rows.append({
            "Rank": f"#{i}",
            "Candidate": display_name(m.candidate),
            "Email": m.candidate.email or "—",
            "Match Score": m.analysis.match_score,
            "Band": score_band(m.analysis.match_score),
            "Recommendation": m.analysis.recommendation or "—",
        })
    columns = ["Rank", "Candidate", "Email", "Match Score", "Band", "Recommendation"]
    return pd.DataFrame(rows, columns=columns)
