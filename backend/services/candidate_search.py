"""Recruiter candidate search.

Flow:
    SearchFilters (validated) → build_candidate_filter() → CandidateFilter
      → pool.find_candidates(filter, sort, offset, limit) → page + total
      → one batched unlock lookup for the page
      → per row: fit score, anonymize/redact, graduation recency
"""

import logging
import math
from datetime import date, datetime, timezone

from models.requests import SearchFilters
from models.responses import CandidateSearchResult, Pagination, SearchResponse
from services.anonymizer import redact_candidate
from services.candidate_scorer import compute_fit_score
from services.candidate_store import CandidateFilter, CandidatePoolReader, UnlockReader
from services.education_normalizer import normalize_field_of_study
from services.lexical import build_case_variants

logger = logging.getLogger(__name__)

RECENT_GRADUATE_DAYS = 365


def _variants(values: list[str] | None) -> list[str] | None:
    if not values:
        return None
    return sorted(build_case_variants(values)) or None


def build_candidate_filter(filters: SearchFilters) -> CandidateFilter:
    """Translate validated search input into a store-agnostic CandidateFilter."""
    query = filters.query.strip() if filters.query else None

    fields = None
    if filters.fields_of_study:
        normalized = [normalize_field_of_study(f) for f in filters.fields_of_study]
        fields = [f for f in normalized if f] or None

    return CandidateFilter(
        visible_only=True,
        query=query or None,
        query_variants=sorted(build_case_variants([query])) if query else [],
        skills=_variants(filters.skills),
        locations=_variants(filters.locations),
        availability_status=list(filters.availability_status) if filters.availability_status else None,
        min_years=filters.min_experience,
        max_years=filters.max_experience,
        min_salary=filters.min_salary,
        max_salary=filters.max_salary,
        notice_periods=_variants(filters.notice_period),
        degree_levels=filters.degree_levels or None,
        experience_bands=filters.experience_bands or None,
        graduation_year_min=filters.graduation_year_min,
        graduation_year_max=filters.graduation_year_max,
        fields_of_study=fields,
    )


def query_tokens(query: str | None) -> list[str]:
    return (query or "").lower().split()


def graduated_within_12_months(graduation_date: date | None, now: datetime | None = None) -> bool:
    if graduation_date is None:
        return False
    now = now or datetime.now(timezone.utc)
    return (now.date() - graduation_date).days <= RECENT_GRADUATE_DAYS


def search_candidates(
    filters: SearchFilters,
    recruiter_id: str,
    pool: CandidatePoolReader,
    unlocks: UnlockReader,
    now: datetime | None = None,
) -> SearchResponse:
    """Run one paginated search on behalf of a recruiter."""
    candidate_filter = build_candidate_filter(filters)
    offset = (filters.page - 1) * filters.limit

    page = pool.find_candidates(
        candidate_filter, sort_by=filters.sort_by, offset=offset, limit=filters.limit
    )
    unlocked_ids = unlocks.unlocked_candidate_ids(
        recruiter_id, [c.id for c in page.candidates]
    )
    tokens = query_tokens(filters.query)

    results = []
    for candidate in page.candidates:
        is_unlocked = candidate.id in unlocked_ids
        results.append(CandidateSearchResult(
            candidate=redact_candidate(candidate, unlocked=is_unlocked),
            unlocked=is_unlocked,
            match_score=compute_fit_score(candidate.skills, tokens),
            graduated_within_12_months=graduated_within_12_months(
                candidate.education.graduation_date, now=now
            ),
        ))

    logger.debug(
        "Search page %d: %d of %d candidates (%d unlocked)",
        filters.page, len(results), page.total, len(unlocked_ids),
    )

    return SearchResponse(
        candidates=results,
        pagination=Pagination(
            page=filters.page,
            limit=filters.limit,
            total=page.total,
            total_pages=math.ceil(page.total / filters.limit),
        ),
    )
