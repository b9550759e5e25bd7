import json
from urllib.parse import urlparse

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.models import Response

from app import build_context
from config import DASHBOARD_ROUTE, Settings
from core.navigation import Navigator
from storage.kv import MemoryStore

API_URL = "http://testserver/api/v1"


class FakeBackend(BaseAdapter):
    """Transport adapter answering from a route table and recording every call."""

    def __init__(self):
        super().__init__()
        self.routes = {}
        self.calls = []

    def add(self, method, path, status=200, body=None):
        self.routes[(method, path)] = (status, body)

    def send(self, request, **kwargs):
        path = urlparse(request.url).path[len("/api/v1"):]
        body = json.loads(request.body) if request.body else None
        self.calls.append({
            "method": request.method,
            "path": path,
            "json": body,
            "headers": dict(request.headers),
        })
        status, payload = self.routes.get((request.method, path), (404, {"detail": "Not Found"}))
        if isinstance(payload, Exception):
            raise payload

        resp = Response()
        resp.status_code = status
        resp.reason = "OK" if status < 400 else "Error"
        resp._content = json.dumps(payload).encode() if payload is not None else b""
        resp.headers["Content-Type"] = "application/json"
        resp.encoding = "utf-8"
        resp.url = request.url
        resp.request = request
        return resp

    def close(self):
        pass

    def paths(self):
        return [c["path"] for c in self.calls]


ADMIN = {"id": "u-1", "email": "hr@example.com", "full_name": "Hana Reyes", "role": "admin"}
RECRUITER = {"id": "u-2", "email": "rec@example.com", "full_name": "Rui Costa", "role": "recruiter"}


def make_match(submission_id, score, recommendation="Recommended", name=None, strengths=None):
    return {
        "candidate": {
            "submission_id": submission_id,
            "name": name,
            "email": f"{submission_id}@example.com",
            "location": "Lisbon",
            "github_url": None,
            "linkedin_url": None,
            "professional_summary": "Backend engineer",
        },
        "analysis": {
            "match_score": score,
            "recommendation": recommendation,
            "key_strengths": strengths if strengths is not None else ["Python", "APIs", "SQL", "Mentoring"],
            "relevant_experience": ["5 years backend"],
            "potential_concerns": ["No Kubernetes", "Short tenure", "Remote only", "Notice period"],
            "skill_gaps": ["Kubernetes"],
            "cultural_fit_indicators": ["Open source"],
            "overall_assessment": "Solid fit",
            "interview_focus_areas": ["System design"],
            "compensation_expectations": "Market rate",
            "availability_concerns": "None",
        },
    }


JOB_DESCRIPTION = (
    "Senior Python engineer to build matching APIs with FastAPI, PostgreSQL and AWS. "
    "Five years of backend experience required."
)


@pytest.fixture
def match_payload():
    return {
        "job_description": JOB_DESCRIPTION,
        "total_candidates_analyzed": 12,
        "total_matches_returned": 3,
        "matches": [
            make_match("sub-a", 55, "Maybe", name="Ana"),
            make_match("sub-b", 92, "Highly Recommended", name="Bo"),
            make_match("sub-c", 70, "Recommended"),
        ],
        "analyzed_at": "2026-10-01T09:30:00Z",
    }


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def durable_store():
    return MemoryStore()


@pytest.fixture
def session_store():
    return MemoryStore()


@pytest.fixture
def navigator():
    return Navigator(start=DASHBOARD_ROUTE)


@pytest.fixture
def ctx(backend, durable_store, session_store, navigator):
    http = requests.Session()
    http.mount("http://testserver", backend)
    return build_context(
        Settings(api_url=API_URL),
        durable_store=durable_store,
        session_store=session_store,
        navigator=navigator,
        http=http,
    )
