"""Storage interfaces the matching engine reads from and writes to.

The engine never talks to a database directly. Callers hand it objects that
implement these readers/writers; the in-memory versions below back the tests
and small deployments.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable

from pydantic import BaseModel, ConfigDict

from models.schemas.candidate import CandidateProfile
from models.schemas.education import (
    DegreeLevel,
    EducationProfile,
    ExperienceBand,
    ExperienceIndicators,
    ResumeSections,
)


class CandidateFilter(BaseModel):
    """Conjunction of candidate predicates. Unset criteria match everything.

    List criteria are compared exactly; callers expand case variants before
    building the filter. Range criteria exclude candidates whose value is
    unknown, except the salary bounds, where an unknown expectation passes.
    """
    model_config = ConfigDict(frozen=True)

    visible_only: bool = True
    query: str | None = None
    query_variants: list[str] = []
    skills: list[str] | None = None
    locations: list[str] | None = None
    availability_status: list[str] | None = None
    min_years: int | None = None
    max_years: int | None = None
    min_salary: int | None = None
    max_salary: int | None = None
    notice_periods: list[str] | None = None
    degree_levels: list[DegreeLevel] | None = None
    experience_bands: list[ExperienceBand] | None = None
    graduation_year_min: int | None = None
    graduation_year_max: int | None = None
    fields_of_study: list[str] | None = None  # canonical tokens, matched by substring

    def _matches_query(self, c: CandidateProfile) -> bool:
        term = self.query.lower()
        texts = (c.display_name, c.current_title, c.current_company, c.summary)
        if any(t and term in t.lower() for t in texts):
            return True
        variants = set(self.query_variants)
        return bool(variants & set(c.skills) or variants & set(c.desired_roles))

    def matches(self, c: CandidateProfile) -> bool:
        if self.visible_only and not c.is_visible:
            return False

        if self.query and not self._matches_query(c):
            return False

        if self.skills and not set(self.skills) & set(c.skills):
            return False

        if self.locations:
            wanted = set(self.locations)
            if c.location not in wanted and not wanted & set(c.preferred_locations):
                return False

        if self.availability_status and c.availability_status not in self.availability_status:
            return False

        if self.min_years is not None or self.max_years is not None:
            years = c.years_experience
            if years is None:
                return False
            if self.min_years is not None and years < self.min_years:
                return False
            if self.max_years is not None and years > self.max_years:
                return False

        if self.max_salary is not None and c.desired_salary_min is not None:
            if c.desired_salary_min > self.max_salary:
                return False
        if self.min_salary is not None and c.desired_salary_max is not None:
            if c.desired_salary_max < self.min_salary:
                return False

        if self.notice_periods and c.notice_period not in self.notice_periods:
            return False

        edu = c.education
        if self.degree_levels and edu.highest_degree_level not in self.degree_levels:
            return False

        if self.experience_bands and c.experience.experience_band not in self.experience_bands:
            return False

        if self.graduation_year_min is not None or self.graduation_year_max is not None:
            year = edu.graduation_year
            if year is None:
                return False
            if self.graduation_year_min is not None and year < self.graduation_year_min:
                return False
            if self.graduation_year_max is not None and year > self.graduation_year_max:
                return False

        if self.fields_of_study:
            field = edu.normalized_field_of_study
            if not field or not any(f in field for f in self.fields_of_study):
                return False

        return True


class CandidatePage(BaseModel):
    candidates: list[CandidateProfile] = []
    total: int = 0  # all matches, ignoring offset/limit


# ---------------------------------------------------------------------------
# Interfaces
# ---------------------------------------------------------------------------

class CandidatePoolReader(ABC):
    @abstractmethod
    def find_candidates(
        self,
        candidate_filter: CandidateFilter,
        sort_by: str = "relevance",
        offset: int = 0,
        limit: int | None = None,
    ) -> CandidatePage:
        """Return one page of matching candidates plus the total match count."""


class UnlockReader(ABC):
    @abstractmethod
    def unlocked_candidate_ids(
        self, recruiter_id: str, candidate_ids: Iterable[str]
    ) -> set[str]:
        """Subset of candidate_ids the recruiter has unlocked."""


class ResumeSectionReader(ABC):
    @abstractmethod
    def resume_sections(self, candidate_id: str) -> ResumeSections | None:
        """Sections of the candidate's latest resume version, if any."""


class CandidateProfileWriter(ABC):
    @abstractmethod
    def update_derived_fields(
        self,
        candidate_id: str,
        education: EducationProfile,
        experience: ExperienceIndicators,
    ) -> None:
        """Overwrite the denormalized education/experience columns."""


class CandidateStore(CandidatePoolReader, CandidateProfileWriter):
    """A pool that can also persist derived columns (used by the backfill)."""


# ---------------------------------------------------------------------------
# In-memory implementations
# ---------------------------------------------------------------------------

_OLDEST = datetime.min


def _sort_key(sort_by: str):
    # Descending sorts; unknown values go last
    if sort_by == "experience":
        return lambda c: (c.years_experience is not None, c.years_experience or 0)
    if sort_by == "recent":
        return lambda c: (c.created_at is not None, c.created_at or _OLDEST)
    return lambda c: (c.updated_at is not None, c.updated_at or _OLDEST)


class InMemoryCandidatePool(CandidateStore):
    """Candidate pool held in a dict, preserving insertion order."""

    def __init__(self, candidates: Iterable[CandidateProfile] = ()):
        self._candidates: dict[str, CandidateProfile] = {c.id: c for c in candidates}

    def add(self, candidate: CandidateProfile) -> None:
        self._candidates[candidate.id] = candidate

    def get(self, candidate_id: str) -> CandidateProfile | None:
        return self._candidates.get(candidate_id)

    def find_candidates(
        self,
        candidate_filter: CandidateFilter,
        sort_by: str = "relevance",
        offset: int = 0,
        limit: int | None = None,
    ) -> CandidatePage:
        matched = [c for c in self._candidates.values() if candidate_filter.matches(c)]
        matched.sort(key=_sort_key(sort_by), reverse=True)
        end = None if limit is None else offset + limit
        return CandidatePage(candidates=matched[offset:end], total=len(matched))

    def update_derived_fields(
        self,
        candidate_id: str,
        education: EducationProfile,
        experience: ExperienceIndicators,
    ) -> None:
        current = self._candidates.get(candidate_id)
        if current is None:
            raise KeyError(f"Unknown candidate: {candidate_id}")
        self._candidates[candidate_id] = current.model_copy(update={
            "education": education,
            "experience": experience,
        })


class InMemoryUnlockStore(UnlockReader):
    def __init__(self, unlocks: Iterable[tuple[str, str]] = ()):
        self._unlocks: set[tuple[str, str]] = set(unlocks)

    def unlock(self, recruiter_id: str, candidate_id: str) -> None:
        self._unlocks.add((recruiter_id, candidate_id))

    def unlocked_candidate_ids(
        self, recruiter_id: str, candidate_ids: Iterable[str]
    ) -> set[str]:
        return {cid for cid in candidate_ids if (recruiter_id, cid) in self._unlocks}


class InMemoryResumeStore(ResumeSectionReader):
    def __init__(self, sections: dict[str, ResumeSections] | None = None):
        self._sections: dict[str, ResumeSections] = dict(sections or {})

    def put(self, candidate_id: str, sections: ResumeSections) -> None:
        self._sections[candidate_id] = sections

    def resume_sections(self, candidate_id: str) -> ResumeSections | None:
        return self._sections.get(candidate_id)
