"""Education and experience contracts derived from resume sections."""

from datetime import date
from enum import Enum

from pydantic import BaseModel


class DegreeLevel(str, Enum):
    """Ordered degree levels: DIPLOMA < BACHELOR < MASTER < PHD."""
    DIPLOMA = "DIPLOMA"
    BACHELOR = "BACHELOR"
    MASTER = "MASTER"
    PHD = "PHD"

    @property
    def rank(self) -> int:
        return _DEGREE_RANK[self]


_DEGREE_RANK = {
    DegreeLevel.DIPLOMA: 1,
    DegreeLevel.BACHELOR: 2,
    DegreeLevel.MASTER: 3,
    DegreeLevel.PHD: 4,
}


class ExperienceBand(str, Enum):
    """Ordered experience bands: STUDENT_FRESH < JUNIOR < MID < SENIOR."""
    STUDENT_FRESH = "STUDENT_FRESH"
    JUNIOR = "JUNIOR"
    MID = "MID"
    SENIOR = "SENIOR"


class EducationItem(BaseModel):
    """A raw education entry as written on the resume."""
    institution: str | None = None
    degree: str | None = None
    field: str | None = None
    end_date: str | None = None
    graduation_date: str | None = None
    graduation_year: str | None = None


class ExperienceItem(BaseModel):
    """A raw work experience entry."""
    position: str | None = None
    company: str | None = None
    start_date: str | None = None
    end_date: str | None = None


class CertificationItem(BaseModel):
    name: str | None = None
    issuer: str | None = None


class ProjectItem(BaseModel):
    name: str | None = None
    description: str | None = None


class ResumeSections(BaseModel):
    """Latest resume snapshot sections used to derive profile columns."""
    experience: list[ExperienceItem] = []
    education: list[EducationItem] = []
    projects: list[ProjectItem] = []
    certifications: list[CertificationItem] = []


class EducationProfile(BaseModel):
    highest_degree_level: DegreeLevel | None = None
    primary_field_of_study: str | None = None  # raw, as written
    normalized_field_of_study: str | None = None  # canonical snake_case token
    graduation_date: date | None = None
    graduation_year: int | None = None


class ExperienceIndicators(BaseModel):
    internship_count: int = 0
    project_count: int = 0
    freelance_count: int = 0
    training_flag: bool = False
    experience_band: ExperienceBand | None = None
