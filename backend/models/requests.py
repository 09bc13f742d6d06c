from typing import Literal

from pydantic import BaseModel, Field

from config import settings
from models.schemas.education import DegreeLevel, ExperienceBand

AvailabilityStatus = Literal["actively_looking", "open_to_offers", "not_looking"]
SortKey = Literal["relevance", "experience", "recent"]


class SearchFilters(BaseModel):
    query: str | None = Field(None, description="Free text matched against name, title, company, summary, skills")
    skills: list[str] | None = None
    locations: list[str] | None = None
    availability_status: list[AvailabilityStatus] | None = None
    min_experience: int | None = Field(None, ge=0)
    max_experience: int | None = Field(None, ge=0)
    min_salary: int | None = Field(None, ge=0)
    max_salary: int | None = Field(None, ge=0)
    notice_period: list[str] | None = None
    degree_levels: list[DegreeLevel] | None = None
    fields_of_study: list[str] | None = None
    graduation_year_min: int | None = Field(None, ge=1900)
    graduation_year_max: int | None = Field(None, ge=1900)
    experience_bands: list[ExperienceBand] | None = None
    page: int = Field(1, ge=1)
    limit: int = Field(settings.search_default_limit, ge=1, le=settings.search_max_limit)
    sort_by: SortKey = "relevance"
