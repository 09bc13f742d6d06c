"""Tests for education/experience normalization."""

from datetime import date

from models.schemas.education import (
    CertificationItem,
    DegreeLevel,
    EducationItem,
    ExperienceBand,
    ExperienceItem,
    ProjectItem,
)
from services.education_normalizer import (
    derive_education_profile,
    derive_experience_indicators,
    extract_years_experience,
    format_degree_level,
    get_experience_band,
    infer_degree_level,
    normalize_field_of_study,
    parse_resume_date,
)

TODAY = date(2025, 6, 15)


class TestInferDegreeLevel:
    def test_common_degrees(self):
        assert infer_degree_level("Bachelor of Science") == DegreeLevel.BACHELOR
        assert infer_degree_level("MSc Computer Science") == DegreeLevel.MASTER
        assert infer_degree_level("PhD") == DegreeLevel.PHD
        assert infer_degree_level("Diploma") == DegreeLevel.DIPLOMA

    def test_abbreviations(self):
        assert infer_degree_level("MBA") == DegreeLevel.MASTER
        assert infer_degree_level("B.Sc in Physics") == DegreeLevel.BACHELOR
        assert infer_degree_level("Associate of Arts") == DegreeLevel.DIPLOMA

    def test_highest_pattern_wins(self):
        assert infer_degree_level("Ph.D. after Master studies") == DegreeLevel.PHD

    def test_unknown(self):
        assert infer_degree_level("High school") is None
        assert infer_degree_level("") is None
        assert infer_degree_level(None) is None

    def test_labels(self):
        assert format_degree_level(DegreeLevel.PHD) == "PhD"
        assert format_degree_level(DegreeLevel.BACHELOR) == "Bachelor"


class TestNormalizeFieldOfStudy:
    def test_synonyms(self):
        assert normalize_field_of_study("Computer Science") == "computer_science"
        assert normalize_field_of_study("CS") == "computer_science"
        assert normalize_field_of_study("Software Engineering") == "software_engineering"
        assert normalize_field_of_study("IT") == "information_technology"

    def test_punctuation_ignored(self):
        assert normalize_field_of_study("Comp. Sci.") == "computer_science"

    def test_unknown_field_is_slugified(self):
        assert normalize_field_of_study("Applied  Physics") == "applied_physics"

    def test_empty(self):
        assert normalize_field_of_study("") is None
        assert normalize_field_of_study("  --  ") is None
        assert normalize_field_of_study(None) is None


class TestParseResumeDate:
    def test_formats(self):
        assert parse_resume_date("2022") == date(2022, 1, 1)
        assert parse_resume_date("May 2020") == date(2020, 5, 1)
        assert parse_resume_date("Sept. 2019") == date(2019, 9, 1)
        assert parse_resume_date("05/2020") == date(2020, 5, 1)
        assert parse_resume_date("2020-05") == date(2020, 5, 1)
        assert parse_resume_date("2020-05-15") == date(2020, 5, 15)

    def test_present_resolves_to_today(self):
        assert parse_resume_date("Present", today=TODAY) == TODAY
        assert parse_resume_date("current", today=TODAY) == TODAY

    def test_unparsable_returns_none(self):
        assert parse_resume_date("sometime") is None
        assert parse_resume_date("13/2020") is None
        assert parse_resume_date("") is None
        assert parse_resume_date(None) is None


class TestDeriveEducationProfile:
    def test_single_item(self):
        profile = derive_education_profile([
            EducationItem(degree="Bachelor", field="Computer Science", end_date="2022"),
        ])
        assert profile.highest_degree_level == DegreeLevel.BACHELOR
        assert profile.normalized_field_of_study == "computer_science"
        assert profile.graduation_year == 2022

    def test_highest_degree_and_latest_date(self):
        profile = derive_education_profile([
            EducationItem(degree="BSc", field="Computer Science", end_date="2015"),
            EducationItem(degree="Master of Science", field="Data Science", end_date="June 2017"),
        ])
        assert profile.highest_degree_level == DegreeLevel.MASTER
        assert profile.primary_field_of_study == "Data Science"
        assert profile.normalized_field_of_study == "data_science"
        assert profile.graduation_date == date(2017, 6, 1)
        assert profile.graduation_year == 2017

    def test_tie_keeps_earlier_field(self):
        profile = derive_education_profile([
            EducationItem(degree="Bachelor", field="Computer Science"),
            EducationItem(degree="Bachelor", field="Business"),
        ])
        assert profile.primary_field_of_study == "Computer Science"

    def test_field_without_recognized_degree(self):
        profile = derive_education_profile([
            EducationItem(degree="Certificate", field="Marketing"),
        ])
        assert profile.highest_degree_level is None
        assert profile.normalized_field_of_study == "marketing"

    def test_year_fallback_from_text(self):
        profile = derive_education_profile([
            EducationItem(degree="Bachelor", graduation_date="Class of 2019"),
        ])
        assert profile.graduation_date is None
        assert profile.graduation_year == 2019

    def test_empty(self):
        profile = derive_education_profile([])
        assert profile.highest_degree_level is None
        assert profile.graduation_year is None


class TestExperienceBand:
    def test_bands(self):
        assert get_experience_band(0, None) == ExperienceBand.STUDENT_FRESH
        assert get_experience_band(2, None) == ExperienceBand.JUNIOR
        assert get_experience_band(4, None) == ExperienceBand.MID
        assert get_experience_band(8, None) == ExperienceBand.SENIOR

    def test_boundaries(self):
        assert get_experience_band(1, None) == ExperienceBand.STUDENT_FRESH
        assert get_experience_band(3, None) == ExperienceBand.JUNIOR
        assert get_experience_band(6, None) == ExperienceBand.MID
        assert get_experience_band(7, None) == ExperienceBand.SENIOR

    def test_recent_graduate_without_years(self):
        assert get_experience_band(None, date(2025, 1, 1), today=TODAY) == ExperienceBand.STUDENT_FRESH

    def test_unknown_when_graduation_is_old(self):
        assert get_experience_band(None, date(2020, 1, 1), today=TODAY) is None
        assert get_experience_band(None, None) is None


class TestExperienceIndicators:
    def test_counts_and_flags(self):
        indicators = derive_experience_indicators(
            experience_items=[
                ExperienceItem(position="Software Engineering Intern", company="Acme"),
                ExperienceItem(position="Freelance Developer"),
                ExperienceItem(position="Backend Engineer", company="Globex"),
            ],
            project_items=[ProjectItem(name="a"), ProjectItem(name="b")],
            education_items=[EducationItem(degree="Data Science Bootcamp")],
            certification_items=[],
            years_experience=2,
            graduation_date=None,
        )
        assert indicators.internship_count == 1
        assert indicators.freelance_count == 1
        assert indicators.project_count == 2
        assert indicators.training_flag is True
        assert indicators.experience_band == ExperienceBand.JUNIOR

    def test_training_from_certification(self):
        indicators = derive_experience_indicators(
            [], [], [], [CertificationItem(name="Cloud Academy Associate")], None, None,
        )
        assert indicators.training_flag is True
        assert indicators.experience_band is None

    def test_empty(self):
        indicators = derive_experience_indicators([], [], [], [], None, None)
        assert indicators.internship_count == 0
        assert indicators.training_flag is False


class TestExtractYearsExperience:
    def test_earliest_start(self):
        items = [
            ExperienceItem(start_date="2020-01"),
            ExperienceItem(start_date="Jan 2018"),
        ]
        assert extract_years_experience(items, today=TODAY) == 7

    def test_unparsable_dates_ignored(self):
        items = [ExperienceItem(start_date="sometime"), ExperienceItem(start_date="2023")]
        assert extract_years_experience(items, today=TODAY) == 2

    def test_no_dates(self):
        assert extract_years_experience([ExperienceItem(position="Dev")], today=TODAY) is None
        assert extract_years_experience([], today=TODAY) is None

    def test_future_start_floors_at_zero(self):
        assert extract_years_experience([ExperienceItem(start_date="2026")], today=TODAY) == 0
