"""Pydantic contracts shared by the matching engine."""

from models.schemas.candidate import CandidateProfile
from models.schemas.education import (
    DegreeLevel,
    EducationProfile,
    ExperienceBand,
    ExperienceIndicators,
    ResumeSections,
)
from models.schemas.job_requirements import JobRequirementProfile, SourceMode
from models.schemas.score_result import JobRecommendation, ScoreResult

__all__ = [
    "CandidateProfile",
    "DegreeLevel",
    "EducationProfile",
    "ExperienceBand",
    "ExperienceIndicators",
    "ResumeSections",
    "JobRequirementProfile",
    "SourceMode",
    "JobRecommendation",
    "ScoreResult",
]
