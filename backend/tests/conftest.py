"""Shared test configuration, pytest markers and candidate fixtures."""

from datetime import date, datetime

import pytest

from models.schemas.candidate import CandidateProfile
from models.schemas.education import DegreeLevel, EducationProfile
from models.schemas.job_requirements import JobRequirementProfile


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "gemini: exercises the Gemini client path (mocked, no network)"
    )


NOW = datetime(2025, 6, 15, 12, 0, 0)


def _build_candidate(candidate_id: str = "cand-000001", **overrides) -> CandidateProfile:
    data = {
        "id": candidate_id,
        "display_name": "Sara Al Qahtani",
        "current_title": "Backend Engineer",
        "current_company": "Acme",
        "location": "Riyadh",
        "skills": ["Python", "SQL"],
        "summary": "Backend developer building data services",
        "years_experience": 4,
        "created_at": NOW,
        "updated_at": NOW,
    }
    data.update(overrides)
    return CandidateProfile(**data)


@pytest.fixture
def make_candidate():
    """Factory for candidates with sensible defaults; override any field by keyword."""
    return _build_candidate


@pytest.fixture
def bachelor_cs_candidate() -> CandidateProfile:
    return _build_candidate(
        education=EducationProfile(
            highest_degree_level=DegreeLevel.BACHELOR,
            primary_field_of_study="Computer Science",
            normalized_field_of_study="computer_science",
            graduation_date=date(2019, 6, 1),
            graduation_year=2019,
        ),
    )


@pytest.fixture
def python_sql_job() -> JobRequirementProfile:
    return JobRequirementProfile(
        must_have_skills=["python", "sql"],
        required_degree_level=DegreeLevel.BACHELOR,
        required_fields_of_study=["computer_science"],
    )
