"""Searchable view of a candidate in the talent pool."""

from datetime import datetime

from pydantic import BaseModel

from models.schemas.education import EducationProfile, ExperienceIndicators


class CandidateProfile(BaseModel):
    """Searchable attributes of one candidate.

    ``education`` and ``experience`` are the denormalized columns recomputed
    by the profile backfill whenever the source resume changes.
    """
    id: str
    display_name: str | None = None
    current_title: str | None = None
    current_company: str | None = None
    location: str | None = None
    preferred_locations: list[str] = []
    skills: list[str] = []
    summary: str | None = None
    desired_roles: list[str] = []
    years_experience: int | None = None
    availability_status: str | None = None  # actively_looking, open_to_offers, not_looking
    desired_salary_min: int | None = None
    desired_salary_max: int | None = None
    notice_period: str | None = None

    education: EducationProfile = EducationProfile()
    experience: ExperienceIndicators = ExperienceIndicators()

    # Privacy flags
    hide_current_employer: bool = False
    hide_salary_history: bool = False
    is_visible: bool = True

    created_at: datetime | None = None
    updated_at: datetime | None = None
