import pytest

from config import JOB_DESCRIPTION_KEY, LOGIN_ROUTE, MATCH_RESULTS_KEY, RESULTS_ROUTE, TOKEN_KEY
from core.match_form import MATCH_FAILED_MESSAGE
from conftest import JOB_DESCRIPTION


@pytest.mark.parametrize("text", ["", "short", "x" * 49, " " * 49])
def test_short_description_never_calls_backend(ctx, backend, text):
    form = ctx.match_form()
    form.job_description = text

    assert form.submit() is False

    assert form.error == "Job description must be at least 50 characters long"
    assert backend.calls == []
    assert not form.can_submit


def test_exactly_fifty_characters_is_submitted_verbatim(ctx, backend, match_payload):
    backend.add("POST", "/hr/match-candidates", body=match_payload)
    text = "a" * 50
    form = ctx.match_form()
    form.job_description = text

    assert form.can_submit
    assert form.submit() is True

    assert form.error == ""
    assert backend.calls[0]["json"] == {"job_description": text}
    assert "top_n" not in backend.calls[0]["json"]


def test_success_stores_results_and_moves_to_results(ctx, backend, session_store, navigator, match_payload):
    backend.add("POST", "/hr/match-candidates", body=match_payload)
    form = ctx.match_form()
    form.job_description = JOB_DESCRIPTION

    form.submit()

    assert session_store.get(JOB_DESCRIPTION_KEY) == JOB_DESCRIPTION
    assert session_store.get(MATCH_RESULTS_KEY)
    assert ctx.result_store.get().total_matches_returned == 3
    assert navigator.current == RESULTS_ROUTE
    assert not form.is_loading


def test_failure_shows_detail_and_keeps_text(ctx, backend, navigator, session_store):
    backend.add("POST", "/hr/match-candidates", status=503, body={"detail": "Matching service is busy"})
    form = ctx.match_form()
    form.job_description = JOB_DESCRIPTION

    assert form.submit() is False

    assert form.error == "Matching service is busy"
    assert form.job_description == JOB_DESCRIPTION
    assert session_store.get(MATCH_RESULTS_KEY) is None
    assert navigator.current != RESULTS_ROUTE


def test_failure_without_detail_uses_generic_message(ctx, backend):
    backend.add("POST", "/hr/match-candidates", status=500, body=None)
    form = ctx.match_form()
    form.job_description = JOB_DESCRIPTION

    form.submit()

    assert form.error == MATCH_FAILED_MESSAGE


def test_submit_while_in_flight_is_ignored(ctx, backend, match_payload):
    backend.add("POST", "/hr/match-candidates", body=match_payload)
    form = ctx.match_form()
    form.job_description = JOB_DESCRIPTION
    form.is_loading = True

    assert form.submit() is False
    assert not form.can_submit
    assert backend.calls == []


def test_clear_resets_locally(ctx, backend):
    form = ctx.match_form()
    form.job_description = "too short"
    form.submit()

    form.clear()

    assert form.job_description == ""
    assert form.error == ""
    assert backend.calls == []


def test_character_count_label(ctx):
    form = ctx.match_form()
    form.job_description = "abc"

    assert form.character_count_label == "3 characters (minimum 50 required)"


def test_top_n_is_forwarded_when_configured(ctx, backend, match_payload):
    backend.add("POST", "/hr/match-candidates", body=match_payload)
    form = ctx.match_form(top_n=3)
    form.job_description = JOB_DESCRIPTION

    form.submit()

    assert backend.calls[0]["json"]["top_n"] == 3


def test_expired_session_redirects_without_form_error(ctx, backend, navigator, durable_store):
    durable_store.set(TOKEN_KEY, "expired")
    backend.add("POST", "/hr/match-candidates", status=401, body={"detail": "Not authenticated"})
    form = ctx.match_form()
    form.job_description = JOB_DESCRIPTION

    assert form.submit() is False

    assert form.error == ""
    assert navigator.current == LOGIN_ROUTE
    assert durable_store.get(TOKEN_KEY) is None
    assert not form.is_loading


def test_null_analysis_fields_fall_back_to_defaults(ctx, backend, navigator, match_payload):
    analysis = match_payload["matches"][0]["analysis"]
    analysis.update(recommendation=None, compensation_expectations=None, skill_gaps=None,
                    key_strengths=None, match_score=None)
    match_payload["analyzed_at"] = None
    backend.add("POST", "/hr/match-candidates", body=match_payload)
    form = ctx.match_form()
    form.job_description = JOB_DESCRIPTION

    assert form.submit() is True

    assert navigator.current == RESULTS_ROUTE
    card = ctx.results_view().cards()[0]
    assert card.recommendation_band == "neutral"
    assert card.recommendation_icon == "⚪"
    assert card.score_band == "weak"
    assert card.top_strengths == []
    assert card.match.analysis.compensation_expectations == ""
    assert card.match.analysis.skill_gaps == []
