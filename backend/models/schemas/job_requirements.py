"""Structured requirements extracted from a job posting."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from models.schemas.education import DegreeLevel

DEFAULT_WEIGHTS: dict[str, float] = {
    "skillWeight": 3,
    "experienceWeight": 2,
    "keywordWeight": 1,
    "educationWeight": 1,
}


class SourceMode(str, Enum):
    """Provenance of a requirement profile."""
    AI = "AI"
    HEURISTIC = "HEURISTIC"


class JobRequirementProfile(BaseModel):
    """Canonical requirement profile for one job posting.

    Derived once per posting and stored by the caller alongside it.
    Skill and keyword lists are deduplicated and keep extraction order;
    the scorer treats them as sets.

    ``weights`` is informational only: the scorer uses fixed point values.
    """
    model_config = ConfigDict(frozen=True)

    must_have_skills: list[str] = []
    nice_to_have_skills: list[str] = []
    role_keywords: list[str] = []
    years_exp_min: int | None = None
    years_exp_max: int | None = None
    required_degree_level: DegreeLevel | None = None
    preferred_degree_levels: list[DegreeLevel] = []
    required_fields_of_study: list[str] = []
    preferred_fields_of_study: list[str] = []
    weights: dict[str, float] = Field(default_factory=lambda: dict(DEFAULT_WEIGHTS))

    # Informational, not used in scoring
    summary: str | None = None
    responsibilities: list[str] = []
    red_flags: list[str] = []
    languages: list[str] = []

    source_mode: SourceMode = SourceMode.HEURISTIC
    model_info: dict[str, Any] = {}
