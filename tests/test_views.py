from config import DASHBOARD_ROUTE, LOGIN_ROUTE, RESULTS_ROUTE, candidate_route
from core.navigation import Navigator
from core.profile_view import ProfileView
from schemas import MatchResponse
from conftest import JOB_DESCRIPTION

PROFILE = {
    "submission_id": "sub-b",
    "user_email": "bo@example.com",
    "personal_info": {"name": "Bo", "email": "bo@example.com", "location": "Porto",
                      "github_url": "https://github.com/bo", "linkedin_url": "https://linkedin.com/in/bo",
                      "portfolio_url": None},
    "professional_summary": "Platform engineer",
    "skills_summary": "Strong Python and cloud",
    "skills": {"technical_skills": [{"name": "Python", "level": "expert"}], "tools": ["Docker"]},
    "work_history": [{"title": "Engineer", "company": "Acme"}],
    "education": None,
    "github_metrics": {},
    "stackoverflow_expertise": {"reputation": 15230, "badges": {"gold": 1, "silver": 8, "bronze": 20},
                                "expertise_areas": ["python"]},
    "strengths": ["Ownership"],
    "areas_for_growth": [],
    "recommended_roles": ["Staff Engineer"],
    "quality_scores": {"completeness": 0.9},
}


def _results_view(ctx, match_payload):
    ctx.result_store.put(MatchResponse.model_validate(match_payload), JOB_DESCRIPTION)
    return ctx.results_view()


def test_results_view_cards(ctx, match_payload):
    view = _results_view(ctx, match_payload)

    first = view.cards()[0]
    assert view.header == "Analyzed 12 candidates • Found 3 matches"
    assert view.job_description == JOB_DESCRIPTION
    assert first.name == "Ana"
    assert first.recommendation_band == "maybe"
    assert first.recommendation_color == "orange"
    assert first.recommendation_icon == "🟡"
    assert first.top_strengths == ["Python", "APIs", "SQL"]
    assert first.top_concerns == ["No Kubernetes", "Short tenure", "Remote only"]
    assert len(first.match.analysis.key_strengths) == 4
    assert not first.expanded


def test_results_view_toggle(ctx, match_payload):
    view = _results_view(ctx, match_payload)

    view.toggle("sub-b")
    assert [c.expanded for c in view.cards()] == [False, True, False]

    view.toggle("sub-b")
    assert not any(c.expanded for c in view.cards())


def test_new_results_view_starts_collapsed(ctx, match_payload):
    view = _results_view(ctx, match_payload)
    view.toggle("sub-a")

    again = ctx.results_view()

    assert again.expanded == frozenset()


def test_results_view_navigation(ctx, match_payload, navigator):
    view = _results_view(ctx, match_payload)

    view.open_profile("sub-c")
    assert navigator.current == candidate_route("sub-c")

    view.new_search()
    assert navigator.current == DASHBOARD_ROUTE


def test_profile_view_loads_once(ctx, backend):
    backend.add("GET", "/hr/candidates/sub-b", body=PROFILE)
    view = ctx.profile_view("sub-b")

    profile = view.load()
    view.load()

    assert profile.personal_info["name"] == "Bo"
    assert profile.education == []
    assert profile.stackoverflow_expertise.reputation == 15230
    assert view.error_text == ""
    assert backend.paths() == ["/hr/candidates/sub-b"]


def test_profile_view_sections(ctx, backend):
    backend.add("GET", "/hr/candidates/sub-b", body=PROFILE)
    view = ctx.profile_view("sub-b")
    view.load()

    assert view.sections() == [
        "skills_summary", "skills", "work_history",
        "stackoverflow_expertise", "strengths", "recommended_roles",
    ]


def test_profile_view_error_uses_detail(ctx, backend):
    backend.add("GET", "/hr/candidates/sub-x", status=404, body={"detail": "Candidate not found"})
    view = ctx.profile_view("sub-x")

    assert view.load() is None
    assert view.error_text == "Candidate not found"
    assert not view.is_loading


def test_profile_view_error_fallback(ctx, backend):
    backend.add("GET", "/hr/candidates/sub-x", status=502, body=None)
    view = ctx.profile_view("sub-x")

    view.load()

    assert view.error_text == "Failed to load candidate profile"


def test_profile_view_without_id_makes_no_call(ctx, backend):
    view = ctx.profile_view(None)

    assert view.load() is None
    assert backend.calls == []


def test_profile_view_back(ctx, navigator):
    view = ctx.profile_view("sub-b")

    view.back()

    assert navigator.current == DASHBOARD_ROUTE


def test_profile_view_links_from_personal_info(ctx, backend):
    backend.add("GET", "/hr/candidates/sub-b", body=PROFILE)
    view = ctx.profile_view("sub-b")
    assert view.links() == []

    view.load()

    assert view.links() == [("GitHub", "https://github.com/bo"), ("LinkedIn", "https://linkedin.com/in/bo")]


def test_profile_view_back_returns_to_results(ctx, backend):
    backend.add("GET", "/hr/candidates/sub-b", body=PROFILE)
    navigator = Navigator(start=DASHBOARD_ROUTE)
    navigator.go(RESULTS_ROUTE)
    navigator.go(candidate_route("sub-b"))
    view = ProfileView(ctx.client, navigator, "sub-b")
    view.load()

    view.back()

    assert navigator.current == RESULTS_ROUTE


def test_profile_view_back_skips_login_and_same_profile():
    navigator = Navigator(start=LOGIN_ROUTE)
    navigator.go(candidate_route("sub-b"))
    navigator.go(candidate_route("sub-b"))
    view = ProfileView(client=None, navigator=navigator, submission_id="sub-b")

    view.back()

    assert navigator.current == DASHBOARD_ROUTE
