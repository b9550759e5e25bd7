from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config import MIN_JOB_DESCRIPTION_LENGTH


# Auth
class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: Optional[str] = None


class UserRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Union[str, int]
    email: str
    full_name: Optional[str] = None
    role: str


# Matching request
class MatchRequest(BaseModel):
    job_description: str = Field(min_length=MIN_JOB_DESCRIPTION_LENGTH)
    top_n: Optional[int] = Field(default=None, ge=1)

    def to_payload(self) -> Dict[str, Any]:
        """Request body; `top_n` is left out entirely when not set."""
        return self.model_dump(exclude_none=True)


# Matching response
def _field_default(model, field_name):
    return model.model_fields[field_name].get_default(call_default_factory=True)


class CandidateSummary(BaseModel):
    model_config = ConfigDict(extra="allow")

    submission_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    location: Optional[str] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    professional_summary: Optional[str] = None


class MatchAnalysis(BaseModel):
    match_score: int = 0
    recommendation: str = ""
    key_strengths: List[str] = []
    relevant_experience: List[str] = []
    potential_concerns: List[str] = []
    skill_gaps: List[str] = []
    cultural_fit_indicators: List[str] = []
    overall_assessment: str = ""
    interview_focus_areas: List[str] = []
    compensation_expectations: str = ""
    availability_concerns: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_default(cls, value, info):
        # LLM-backed fields come back as null when the model had nothing to say
        return _field_default(cls, info.field_name) if value is None else value


class CandidateMatch(BaseModel):
    candidate: CandidateSummary
    analysis: MatchAnalysis


class MatchResponse(BaseModel):
    job_description: str = ""
    total_candidates_analyzed: int = 0
    total_matches_returned: int = 0
    matches: List[CandidateMatch] = []
    analyzed_at: Optional[datetime] = None

    @field_validator(
        "job_description", "total_candidates_analyzed", "total_matches_returned", "matches",
        mode="before",
    )
    @classmethod
    def _null_as_default(cls, value, info):
        return _field_default(cls, info.field_name) if value is None else value


# Candidate directory
class CandidateListItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    submission_id: str
    name: Optional[str] = None
    email: Optional[str] = None


class SkillGroups(BaseModel):
    model_config = ConfigDict(extra="allow")

    technical_skills: List[Any] = []
    languages: List[Any] = []
    frameworks: List[Any] = []
    tools: List[str] = []


class StackOverflowExpertise(BaseModel):
    model_config = ConfigDict(extra="allow")

    reputation: Optional[int] = None
    badges: Optional[Dict[str, int]] = None
    expertise_areas: List[str] = []


class CandidateProfileDocument(BaseModel):
    """Aggregated candidate profile, read-only on the client side."""

    model_config = ConfigDict(extra="allow")

    submission_id: str
    user_id: Optional[str] = None
    user_email: Optional[str] = None
    personal_info: Dict[str, Any] = {}
    professional_summary: Optional[str] = None
    skills_summary: Optional[str] = None
    skills: Optional[SkillGroups] = None
    work_history: List[Dict[str, Any]] = []
    education: List[Dict[str, Any]] = []
    certifications: List[Any] = []
    languages: List[Any] = []
    github_metrics: Dict[str, Any] = {}
    web_presence: Optional[Dict[str, Any]] = None
    stackoverflow_expertise: Optional[StackOverflowExpertise] = None
    strengths: List[str] = []
    areas_for_growth: List[str] = []
    recommended_roles: List[str] = []
    quality_scores: Optional[Dict[str, Any]] = None
    raw_data: Optional[Dict[str, Any]] = None

    @field_validator(
        "personal_info", "work_history", "education", "certifications", "languages",
        "github_metrics", "strengths", "areas_for_growth", "recommended_roles",
        mode="before",
    )
    @classmethod
    def _null_as_empty(cls, value, info):
        # the backend sends null for sections it could not aggregate
        if value is None:
            return {} if info.field_name in ("personal_info", "github_metrics") else []
        return value
