"""Job → candidate recommendations.

Flow:
    analyze_job() → JobRequirementProfile
    build_job_candidate_filter() → pool.find_candidates(limit=pool_limit)
    passes_education_requirements() hard gate
    score_candidate() → sort by score desc → top_n → ranks 1..n
"""

import logging
from typing import Iterable

from pydantic import BaseModel

from config import settings
from models.responses import JobRecommendationView
from models.schemas.candidate import CandidateProfile
from models.schemas.job_requirements import JobRequirementProfile
from models.schemas.score_result import JobRecommendation
from services.anonymizer import redact_candidate
from services.candidate_scorer import (
    allowed_degree_levels,
    passes_education_requirements,
    score_candidate,
)
from services.candidate_store import CandidateFilter, CandidatePoolReader, UnlockReader
from services.requirement_analyzer import analyze_job

logger = logging.getLogger(__name__)


class JobMatchResult(BaseModel):
    profile: JobRequirementProfile
    recommendations: list[JobRecommendation] = []


def build_job_candidate_filter(
    profile: JobRequirementProfile,
    location: str | None = None,
    remote_allowed: bool = False,
) -> CandidateFilter:
    """Store-side pre-filter for a job. The hard gate is re-applied after fetch."""
    return CandidateFilter(
        visible_only=True,
        locations=[location] if location and not remote_allowed else None,
        min_years=profile.years_exp_min or None,
        max_years=profile.years_exp_max or None,
        degree_levels=(
            allowed_degree_levels(profile.required_degree_level)
            if profile.required_degree_level else None
        ),
        fields_of_study=profile.required_fields_of_study or None,
    )


def rank_candidates(
    candidates: Iterable[CandidateProfile],
    profile: JobRequirementProfile,
    top_n: int = 50,
) -> list[JobRecommendation]:
    """Gate, score and rank candidates. Ties keep their input order."""
    scored = []
    for candidate in candidates:
        if not passes_education_requirements(candidate, profile):
            continue
        scored.append((candidate.id, score_candidate(candidate, profile)))

    scored.sort(key=lambda item: item[1].score, reverse=True)

    return [
        JobRecommendation(
            candidate_id=candidate_id,
            rank=index,
            match_score=result.score,
            reasons=result.reasons,
            gaps=result.gaps,
            is_priority=result.is_priority,
        )
        for index, (candidate_id, result) in enumerate(scored[:top_n], start=1)
    ]


async def recommend_candidates(
    jd_text: str,
    title: str,
    pool: CandidatePoolReader,
    location: str | None = None,
    remote_allowed: bool = False,
    pool_limit: int | None = None,
    top_n: int | None = None,
) -> JobMatchResult:
    """Analyze a job posting and return its ranked candidate recommendations."""
    pool_limit = pool_limit or settings.recommendation_pool_limit
    top_n = top_n or settings.recommendation_top_n

    profile = await analyze_job(
        jd_text, title, location=location, remote_allowed=remote_allowed
    )
    candidate_filter = build_job_candidate_filter(profile, location, remote_allowed)
    page = pool.find_candidates(candidate_filter, offset=0, limit=pool_limit)

    recommendations = rank_candidates(page.candidates, profile, top_n=top_n)
    logger.info(
        "Job %r: %d recommendations from %d pooled candidates (%s profile)",
        title, len(recommendations), len(page.candidates), profile.source_mode.value,
    )
    return JobMatchResult(profile=profile, recommendations=recommendations)


def present_recommendations(
    recommendations: list[JobRecommendation],
    candidates: dict[str, CandidateProfile],
    recruiter_id: str,
    unlocks: UnlockReader,
) -> list[JobRecommendationView]:
    """Attach redacted candidate views to stored recommendations, ordered by rank."""
    ordered = sorted(
        (r for r in recommendations if r.candidate_id in candidates),
        key=lambda r: r.rank,
    )
    unlocked_ids = unlocks.unlocked_candidate_ids(
        recruiter_id, [r.candidate_id for r in ordered]
    )

    views = []
    for rec in ordered:
        is_unlocked = rec.candidate_id in unlocked_ids
        views.append(JobRecommendationView(
            rank=rec.rank,
            match_score=rec.match_score,
            reasons=rec.reasons,
            gaps=rec.gaps,
            is_priority=rec.is_priority,
            unlocked=is_unlocked,
            candidate=redact_candidate(candidates[rec.candidate_id], unlocked=is_unlocked),
        ))
    return views
