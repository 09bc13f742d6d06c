"""Tests for the education/experience backfill."""

from datetime import datetime

from models.schemas.education import (
    DegreeLevel,
    EducationItem,
    EducationProfile,
    ExperienceBand,
    ExperienceItem,
    ProjectItem,
    ResumeSections,
)
from services.candidate_store import InMemoryCandidatePool, InMemoryResumeStore
from services.profile_backfill import backfill_candidate_profiles, derive_profile_columns

NOW = datetime(2025, 6, 15, 12, 0, 0)

SECTIONS = ResumeSections(
    experience=[
        ExperienceItem(position="Data Intern", company="Acme", start_date="Jun 2022"),
        ExperienceItem(position="Analyst", company="Globex", start_date="2023-01"),
    ],
    education=[
        EducationItem(degree="Bachelor of Science", field="Computer Science", end_date="2022"),
    ],
    projects=[ProjectItem(name="ETL pipeline")],
)


class TestDeriveProfileColumns:
    def test_columns_from_sections(self):
        education, experience = derive_profile_columns(SECTIONS, today=NOW.date())
        assert education.highest_degree_level == DegreeLevel.BACHELOR
        assert education.normalized_field_of_study == "computer_science"
        assert education.graduation_year == 2022
        assert experience.internship_count == 1
        assert experience.project_count == 1
        assert experience.experience_band == ExperienceBand.JUNIOR


class TestBackfill:
    def test_updates_candidates_with_resumes(self, make_candidate):
        pool = InMemoryCandidatePool([
            make_candidate("with-resume", years_experience=9),
            make_candidate("no-resume", education=EducationProfile(
                highest_degree_level=DegreeLevel.PHD
            )),
        ])
        resumes = InMemoryResumeStore({"with-resume": SECTIONS})

        updated = backfill_candidate_profiles(pool, resumes, now=NOW)

        assert updated == 1
        refreshed = pool.get("with-resume")
        assert refreshed.education.highest_degree_level == DegreeLevel.BACHELOR
        assert refreshed.experience.internship_count == 1
        # Stored years are not overwritten
        assert refreshed.years_experience == 9
        assert pool.get("no-resume").education.highest_degree_level == DegreeLevel.PHD

    def test_pages_through_every_candidate(self, make_candidate):
        pool = InMemoryCandidatePool(
            make_candidate(f"cand-{i:03d}", is_visible=i % 2 == 0) for i in range(25)
        )
        resumes = InMemoryResumeStore({f"cand-{i:03d}": SECTIONS for i in range(25)})

        assert backfill_candidate_profiles(pool, resumes, batch_size=10, now=NOW) == 25
        assert pool.get("cand-001").education.normalized_field_of_study == "computer_science"
        assert pool.get("cand-024").experience.project_count == 1

    def test_idempotent(self, make_candidate):
        pool = InMemoryCandidatePool([make_candidate("c1")])
        resumes = InMemoryResumeStore({"c1": SECTIONS})

        backfill_candidate_profiles(pool, resumes, now=NOW)
        first = pool.get("c1")
        backfill_candidate_profiles(pool, resumes, now=NOW)
        assert pool.get("c1") == first

    def test_empty_store(self):
        assert backfill_candidate_profiles(InMemoryCandidatePool(), InMemoryResumeStore()) == 0
