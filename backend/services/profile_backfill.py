"""Recompute denormalized education/experience columns from resume sections.

Run after deploying new normalization rules, or whenever stored columns may
be stale. Safe to re-run: every pass writes the same derived values.
"""

import logging
from datetime import date, datetime

from config import settings
from models.schemas.education import ResumeSections
from services.candidate_store import CandidateFilter, CandidateStore, ResumeSectionReader
from services.education_normalizer import (
    derive_education_profile,
    derive_experience_indicators,
    extract_years_experience,
)

logger = logging.getLogger(__name__)


def derive_profile_columns(sections: ResumeSections, today: date | None = None):
    """Return (EducationProfile, ExperienceIndicators) for one resume snapshot."""
    years = extract_years_experience(sections.experience, today=today)
    education = derive_education_profile(sections.education)
    experience = derive_experience_indicators(
        experience_items=sections.experience,
        project_items=sections.projects,
        education_items=sections.education,
        certification_items=sections.certifications,
        years_experience=years,
        graduation_date=education.graduation_date,
        today=today,
    )
    return education, experience


def backfill_candidate_profiles(
    store: CandidateStore,
    resumes: ResumeSectionReader,
    batch_size: int | None = None,
    now: datetime | None = None,
) -> int:
    """Page through every candidate and rewrite its derived columns.

    Returns the number of candidates updated. Candidates with no resume
    sections are skipped and keep their current columns.
    """
    batch_size = batch_size or settings.backfill_batch_size
    today = now.date() if now else None
    everyone = CandidateFilter(visible_only=False)

    offset = 0
    updated = 0
    while True:
        page = store.find_candidates(
            everyone, sort_by="recent", offset=offset, limit=batch_size
        )
        if not page.candidates:
            break

        for candidate in page.candidates:
            sections = resumes.resume_sections(candidate.id)
            if sections is None:
                continue
            education, experience = derive_profile_columns(sections, today=today)
            store.update_derived_fields(candidate.id, education, experience)
            updated += 1

        offset += len(page.candidates)
        logger.info("Backfill progress: %d scanned, %d updated", offset, updated)

    logger.info("Backfill complete: %d candidate profiles updated", updated)
    return updated
