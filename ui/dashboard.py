# ui/dashboard.py
import sys, os
from datetime import datetime, timedelta
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
import extra_streamlit_components as stx
import streamlit as st

from app import build_context
from client.errors import DashboardError, UnauthorizedError, error_message
from config import (
    BROWSER_COOKIE,
    BROWSER_COOKIE_DAYS,
    DASHBOARD_ROUTE,
    LOGIN_ROUTE,
    RESULTS_ROUTE,
    configure_logging,
    load_settings,
)
from core.navigation import StreamlitNavigator
from core.presentation import matches_table
from storage.kv import SqlStore, StreamlitSessionStore, resolve_browser_id, session_cached

# -------------------- CONFIG --------------------
settings = load_settings()
configure_logging(settings.log_level)
st.set_page_config(page_title="SkillSense HR Dashboard", page_icon="🧠", layout="wide")

# -------------------- SESSION STATE --------------------
# One context per browser session; it survives reruns.
navigator = StreamlitNavigator()
# Durable rows are keyed by a per-browser cookie so visitors never share a token.
browser_id, needs_cookie = resolve_browser_id(st.context.cookies, st.session_state)
if needs_cookie:
    stx.CookieManager().set(BROWSER_COOKIE, browser_id,
                            expires_at=datetime.now() + timedelta(days=BROWSER_COOKIE_DAYS))
if "ctx" not in st.session_state:
    st.session_state.ctx = build_context(
        settings,
        durable_store=SqlStore.at_path(settings.state_db_path, browser_id),
        session_store=StreamlitSessionStore(),
        navigator=navigator,
    )
    st.session_state.ctx.gate.check_auth()
ctx = st.session_state.ctx
# a fresh navigator per rerun so `changed` reflects this run only
ctx.navigator = ctx.gate.navigator = ctx.result_store.navigator = navigator
gate = ctx.gate


def _rerun_if_moved():
    if navigator.changed:
        st.rerun()


def _header():
    left, right = st.columns([4, 1])
    with left:
        st.title("🤖 SkillSense HR Dashboard")
    with right:
        if gate.user:
            st.caption(f"👤 {gate.user.full_name or gate.user.email}")
            if st.button("Logout"):
                gate.logout()
                _rerun_if_moved()


# ==================== LOGIN ====================
def login_page():
    st.subheader("HR Admin Login")
    with st.form("login_form"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in", disabled=gate.login_in_flight)

    if submitted:
        with st.spinner("Signing in..."):
            try:
                gate.login(email, password)
            except DashboardError as e:
                st.error(f"❌ {error_message(e, 'Login failed. Please try again.')}")
                return
        navigator.go(DASHBOARD_ROUTE)
        _rerun_if_moved()


# ==================== DASHBOARD ====================
def dashboard_page():
    form = session_cached(st.session_state, "match_form", ctx.match_form)
    form.navigator = navigator

    st.subheader("AI-Powered Candidate Matching")
    st.markdown(
        "Paste your job description below and the AI will analyze all candidates to find the best matches."
    )

    with st.sidebar:
        st.markdown("### 📊 Candidate Pool")
        try:
            summary = ctx.client.get_summary()
            candidates = ctx.client.get_all_candidates()
        except UnauthorizedError:
            _rerun_if_moved()
            return
        except DashboardError as e:
            st.warning(error_message(e, "Summary unavailable."))
        else:
            st.metric("Candidates", len(candidates))
            for name, value in summary.items():
                if isinstance(value, (int, float, str)):
                    st.caption(f"**{name.replace('_', ' ').title()}:** {value}")

    if form.error:
        st.error(form.error)

    form.job_description = st.text_area(
        "Job Description *",
        value=form.job_description,
        height=320,
        placeholder="Paste the complete job description here...",
        key="job_description_input",
    )
    st.caption(form.character_count_label)

    clear_col, _, submit_col = st.columns([1, 3, 1])
    with clear_col:
        if st.button("Clear"):
            form.clear()
            st.session_state.pop("job_description_input", None)
            st.rerun()
    with submit_col:
        run = st.button("🔍 Find Best Candidates", disabled=not form.can_submit)

    if run:
        with st.spinner("Analyzing candidates..."):
            form.submit()
        st.rerun()


# ==================== RESULTS ====================
def results_page():
    view = session_cached(st.session_state, "results_view", ctx.results_view)
    view.navigator = navigator
    if not view.is_ready:
        st.session_state.pop("results_view", None)
        _rerun_if_moved()
        return

    top_left, top_right = st.columns([4, 1])
    with top_left:
        st.subheader("Candidate Match Results")
        st.caption(view.header)
    with top_right:
        if st.button("New Search"):
            view.new_search()
            _rerun_if_moved()

    with st.expander("📜 View Job Description"):
        st.text(view.job_description)

    st.table(matches_table(view.results))

    for card in view.cards():
        m = card.match
        with st.container(border=True):
            info, score = st.columns([4, 1])
            with info:
                st.markdown(f"### #{card.rank} {card.name}")
                if m.candidate.email:
                    st.caption(m.candidate.email)
                if m.candidate.location:
                    st.caption(f"📍 {m.candidate.location}")
                if m.candidate.professional_summary:
                    st.markdown(f"*{m.candidate.professional_summary}*")
            with score:
                st.markdown(f"## :{card.score_color}[{m.analysis.match_score}]")
                st.caption("Match Score")
                st.markdown(f":{card.recommendation_color}[{card.recommendation_icon} {m.analysis.recommendation or 'N/A'}]")

            strengths, concerns = st.columns(2)
            with strengths:
                st.markdown("**Key Strengths**")
                for s in card.top_strengths:
                    st.markdown(f"✓ {s}")
            with concerns:
                st.markdown("**Potential Concerns**")
                for c in card.top_concerns:
                    st.markdown(f"⚠ {c}")

            st.markdown("**Overall Assessment**")
            st.write(m.analysis.overall_assessment)

            if card.expanded:
                a = m.analysis
                for title, items in (
                    ("Relevant Experience", a.relevant_experience),
                    ("Skill Gaps", a.skill_gaps),
                    ("Cultural Fit Indicators", a.cultural_fit_indicators),
                    ("Interview Focus Areas", a.interview_focus_areas),
                ):
                    if items:
                        st.markdown(f"**{title}**")
                        for item in items:
                            st.markdown(f"- {item}")
                st.markdown(f"**Compensation Expectations:** {a.compensation_expectations or '—'}")
                st.markdown(f"**Availability Concerns:** {a.availability_concerns or '—'}")

            links = st.columns(4)
            if m.candidate.github_url:
                links[0].link_button("View GitHub", m.candidate.github_url)
            if m.candidate.linkedin_url:
                links[1].link_button("View LinkedIn", m.candidate.linkedin_url)
            if links[2].button("View Full Profile", key=f"profile_{card.submission_id}"):
                view.open_profile(card.submission_id)
                _rerun_if_moved()
            label = "Show Less" if card.expanded else "Show More"
            if links[3].button(label, key=f"toggle_{card.submission_id}"):
                view.toggle(card.submission_id)
                st.rerun()


# ==================== PROFILE ====================
def profile_page(submission_id: str):
    key = f"profile_view:{submission_id}"
    view = session_cached(st.session_state, key, lambda: ctx.profile_view(submission_id))
    view.navigator = navigator
    with st.spinner("Loading profile..."):
        view.load()
    _rerun_if_moved()

    if view.error_text:
        st.error(view.error_text)
        if st.button("Back to Dashboard"):
            view.back()
            _rerun_if_moved()
        return

    if st.button("← Back"):
        view.back()
        _rerun_if_moved()

    p = view.profile
    if p is None:
        return
    info = p.personal_info
    st.subheader(info.get("name") or "No name available")
    if info.get("email"):
        st.caption(info["email"])
    if info.get("location"):
        st.caption(f"📍 {info['location']}")
    links = view.links()
    if links:
        for col, (label, url) in zip(st.columns(len(links)), links):
            col.link_button(label, url)
    if p.professional_summary:
        st.markdown(p.professional_summary)

    sections = view.sections()
    if "skills_summary" in sections:
        st.markdown("### Skills Summary")
        st.write(p.skills_summary)
    if "skills" in sections:
        st.markdown("### Skills")
        for label, items in (("Technical", p.skills.technical_skills), ("Languages", p.skills.languages),
                             ("Frameworks", p.skills.frameworks), ("Tools", p.skills.tools)):
            if items:
                names = [i.get("name", str(i)) if isinstance(i, dict) else str(i) for i in items]
                st.markdown(f"**{label}:** {', '.join(names)}")
    if "work_history" in sections:
        st.markdown("### Work History")
        for job in p.work_history:
            st.markdown(f"- **{job.get('title') or job.get('designation', 'N/A')}**, *{job.get('company', 'N/A')}*")
            if job.get("duration"):
                st.caption(f"⏰ {job['duration']}")
    if "education" in sections:
        st.markdown("### Education")
        for edu in p.education:
            st.markdown(f"- **{edu.get('degree', 'N/A')}** {edu.get('institution', '')}")
    if "github_metrics" in sections:
        st.markdown("### GitHub Activity")
        st.json(p.github_metrics)
    if "stackoverflow_expertise" in sections:
        so = p.stackoverflow_expertise
        st.markdown("### Stack Overflow")
        if so.reputation is not None:
            st.metric("Reputation", f"{so.reputation:,}")
        if so.expertise_areas:
            st.markdown(", ".join(so.expertise_areas))
    for name, title in (("strengths", "Strengths"), ("areas_for_growth", "Areas for Growth"),
                        ("recommended_roles", "Recommended Roles")):
        if name in sections:
            st.markdown(f"### {title}")
            for item in getattr(p, name):
                st.markdown(f"- {item}")


# -------------------- ROUTING --------------------
route = navigator.current
if not gate.is_authenticated and route != LOGIN_ROUTE:
    navigator.go(LOGIN_ROUTE)
    _rerun_if_moved()
if gate.is_authenticated and route == LOGIN_ROUTE:
    navigator.go(DASHBOARD_ROUTE)
    _rerun_if_moved()

if route != RESULTS_ROUTE:
    st.session_state.pop("results_view", None)
current_profile = "profile_view:" + route.split("/candidate/", 1)[-1]
for stale in [k for k in st.session_state if str(k).startswith("profile_view:") and k != current_profile]:
    del st.session_state[stale]

_header()
if route == LOGIN_ROUTE:
    login_page()
elif route == RESULTS_ROUTE:
    results_page()
elif route.startswith("/candidate/"):
    profile_page(route.split("/candidate/", 1)[1])
else:
    dashboard_page()
