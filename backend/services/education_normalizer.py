"""Education and experience normalization for candidate profiles.

Turns raw resume fragments (free-text degrees, fields of study, partial
dates, job titles) into the canonical columns used by search and scoring:
    EducationProfile: highest degree, canonical field, graduation date/year
    ExperienceIndicators: internship/project/freelance counts, training flag,
                          experience band
"""

import re
from datetime import date, datetime
from typing import Sequence

from models.schemas.education import (
    CertificationItem,
    DegreeLevel,
    EducationItem,
    EducationProfile,
    ExperienceBand,
    ExperienceIndicators,
    ExperienceItem,
)

# ---------------------------------------------------------------------------
# Degree inference
# ---------------------------------------------------------------------------

# Order matters: first matching level wins, highest first
DEGREE_PATTERNS: list[tuple[DegreeLevel, list[re.Pattern]]] = [
    (DegreeLevel.PHD, [
        re.compile(r"ph\.?d", re.IGNORECASE),
        re.compile(r"doctorate", re.IGNORECASE),
        re.compile(r"\bdoctoral\b", re.IGNORECASE),
    ]),
    (DegreeLevel.MASTER, [
        re.compile(r"master", re.IGNORECASE),
        re.compile(r"\bm\.sc\b", re.IGNORECASE),
        re.compile(r"\bmsc\b", re.IGNORECASE),
        re.compile(r"\bmba\b", re.IGNORECASE),
    ]),
    (DegreeLevel.BACHELOR, [
        re.compile(r"bachelor", re.IGNORECASE),
        re.compile(r"\bb\.sc\b", re.IGNORECASE),
        re.compile(r"\bbs\b", re.IGNORECASE),
        re.compile(r"\bba\b", re.IGNORECASE),
    ]),
    (DegreeLevel.DIPLOMA, [
        re.compile(r"diploma", re.IGNORECASE),
        re.compile(r"associate", re.IGNORECASE),
        re.compile(r"foundation", re.IGNORECASE),
    ]),
]

_DEGREE_LABELS = {
    DegreeLevel.DIPLOMA: "Diploma",
    DegreeLevel.BACHELOR: "Bachelor",
    DegreeLevel.MASTER: "Master",
    DegreeLevel.PHD: "PhD",
}


def infer_degree_level(text: str | None) -> DegreeLevel | None:
    """Detect the degree level named in free text. None if nothing matches."""
    if not text:
        return None
    for level, patterns in DEGREE_PATTERNS:
        if any(p.search(text) for p in patterns):
            return level
    return None


def format_degree_level(level: DegreeLevel) -> str:
    return _DEGREE_LABELS.get(level, level.value)


# ---------------------------------------------------------------------------
# Field of study normalization
# Aliases -> canonical snake_case token, so "CS" and "Computer Science" compare equal
# ---------------------------------------------------------------------------
FIELD_SYNONYMS: dict[str, str] = {
    "cs": "computer_science",
    "comp sci": "computer_science",
    "computer science": "computer_science",
    "software engineering": "software_engineering",
    "software engineer": "software_engineering",
    "information systems": "information_systems",
    "information system": "information_systems",
    "information technology": "information_technology",
    "it": "information_technology",
    "business administration": "business_administration",
    "business admin": "business_administration",
    "business": "business",
    "economics": "economics",
    "engineering": "engineering",
    "electrical engineering": "electrical_engineering",
    "mechanical engineering": "mechanical_engineering",
    "civil engineering": "civil_engineering",
    "industrial engineering": "industrial_engineering",
    "computer engineering": "computer_engineering",
    "data science": "data_science",
    "artificial intelligence": "artificial_intelligence",
    "ai": "artificial_intelligence",
    "machine learning": "machine_learning",
    "information security": "information_security",
    "cyber security": "cyber_security",
    "cybersecurity": "cyber_security",
    "accounting": "accounting",
    "finance": "finance",
    "marketing": "marketing",
    "human resources": "human_resources",
}

_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")


def _clean_field(value: str) -> str:
    return " ".join(_NON_ALNUM_RE.sub(" ", value.lower()).split())


def normalize_field_of_study(value: str | None) -> str | None:
    """Map a free-text field of study to a canonical snake_case token.

    Known aliases resolve through FIELD_SYNONYMS; anything else is slugified
    so unrecognized fields still get a comparable token.
    """
    if not value:
        return None
    cleaned = _clean_field(value)
    if not cleaned:
        return None
    return FIELD_SYNONYMS.get(cleaned) or cleaned.replace(" ", "_")


# ---------------------------------------------------------------------------
# Permissive resume date parsing
# ---------------------------------------------------------------------------

_MONTH_MAP = {
    "jan": 1, "january": 1, "feb": 2, "february": 2, "mar": 3, "march": 3,
    "apr": 4, "april": 4, "may": 5, "jun": 6, "june": 6,
    "jul": 7, "july": 7, "aug": 8, "august": 8, "sep": 9, "sept": 9,
    "september": 9, "oct": 10, "october": 10, "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}

_YEAR_MONTH_RE = re.compile(r"^(\d{4})[-/](\d{1,2})$")
_MONTH_YEAR_NUMERIC_RE = re.compile(r"^(\d{1,2})[-/](\d{4})$")
_MONTH_NAME_YEAR_RE = re.compile(r"^([a-z]+)\.?,?\s+(\d{4})$")
_BARE_YEAR_RE = re.compile(r"^\d{4}$")
_YEAR_RE = re.compile(r"(19|20)\d{2}")


def _safe_date(year: int, month: int, day: int = 1) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_resume_date(value: str | None, today: date | None = None) -> date | None:
    """Parse partial resume dates: "2022", "May 2020", "05/2020", "2020-05", ISO dates.

    "Present"/"Current" resolve to today. Unparsable input returns None.
    """
    if not value:
        return None
    text = value.strip().lower()
    if not text:
        return None

    if text in ("present", "current", "now"):
        return today or date.today()

    if _BARE_YEAR_RE.match(text):
        return _safe_date(int(text), 1)

    m = _YEAR_MONTH_RE.match(text)
    if m:
        return _safe_date(int(m.group(1)), int(m.group(2)))

    m = _MONTH_YEAR_NUMERIC_RE.match(text)
    if m:
        return _safe_date(int(m.group(2)), int(m.group(1)))

    m = _MONTH_NAME_YEAR_RE.match(text)
    if m:
        month = _MONTH_MAP.get(m.group(1))
        return _safe_date(int(m.group(2)), month) if month else None

    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00")).date()
    except ValueError:
        return None


def _extract_year(value: str | None) -> int | None:
    if not value:
        return None
    m = _YEAR_RE.search(value)
    return int(m.group()) if m else None


def _extract_year_from_items(items: Sequence[EducationItem]) -> int | None:
    for item in items:
        for value in (item.end_date, item.graduation_date, item.graduation_year):
            year = _extract_year(value)
            if year:
                return year
    return None


# ---------------------------------------------------------------------------
# Profile derivation
# ---------------------------------------------------------------------------

def derive_education_profile(items: Sequence[EducationItem]) -> EducationProfile:
    """Reduce resume education entries to a single EducationProfile.

    Keeps the highest-ranked degree (ties keep the earlier entry and its
    field) and the most recent parseable graduation date. When no date
    parses, the graduation year falls back to the first 19xx/20xx found.
    """
    highest: DegreeLevel | None = None
    primary_field: str | None = None
    graduation_date: date | None = None

    for item in items:
        level = infer_degree_level(item.degree)
        if level and (highest is None or level.rank > highest.rank):
            highest = level
            primary_field = item.field or primary_field

        parsed = parse_resume_date(
            item.end_date or item.graduation_date or item.graduation_year
        )
        if parsed and (graduation_date is None or parsed > graduation_date):
            graduation_date = parsed

        if not primary_field and item.field:
            primary_field = item.field

    graduation_year = (
        graduation_date.year if graduation_date else _extract_year_from_items(items)
    )

    return EducationProfile(
        highest_degree_level=highest,
        primary_field_of_study=primary_field or None,
        normalized_field_of_study=normalize_field_of_study(primary_field),
        graduation_date=graduation_date,
        graduation_year=graduation_year,
    )


# Entry classification families, matched against "position company"
_INTERNSHIP_RE = re.compile(r"\b(intern|internship|trainee|co-?op)\b", re.IGNORECASE)
_FREELANCE_RE = re.compile(
    r"\b(freelance|contract|contractor|part[-\s]?time|consultant)\b", re.IGNORECASE
)
_TRAINING_RE = re.compile(
    r"\b(bootcamp|nanodegree|training|course|academy|program)\b", re.IGNORECASE
)


def get_experience_band(
    years_experience: int | float | None,
    graduation_date: date | None,
    today: date | None = None,
) -> ExperienceBand | None:
    """Bucket years of experience; unknown years fall back to graduation recency."""
    if years_experience is None:
        if graduation_date:
            today = today or date.today()
            months = (today - graduation_date).days / 30.4
            if months <= 12:
                return ExperienceBand.STUDENT_FRESH
        return None

    if years_experience <= 1:
        return ExperienceBand.STUDENT_FRESH
    if years_experience <= 3:
        return ExperienceBand.JUNIOR
    if years_experience <= 6:
        return ExperienceBand.MID
    return ExperienceBand.SENIOR


def derive_experience_indicators(
    experience_items: Sequence[ExperienceItem],
    project_items: Sequence[object],
    education_items: Sequence[EducationItem],
    certification_items: Sequence[CertificationItem],
    years_experience: int | None,
    graduation_date: date | None,
    today: date | None = None,
) -> ExperienceIndicators:
    """Count internships/freelance roles/projects and flag training programs."""
    role_texts = [f"{e.position or ''} {e.company or ''}" for e in experience_items]
    training_texts = [f"{e.degree or ''} {e.field or ''}" for e in education_items] + [
        f"{c.name or ''} {c.issuer or ''}" for c in certification_items
    ]

    return ExperienceIndicators(
        internship_count=sum(1 for t in role_texts if _INTERNSHIP_RE.search(t)),
        project_count=len(project_items),
        freelance_count=sum(1 for t in role_texts if _FREELANCE_RE.search(t)),
        training_flag=any(_TRAINING_RE.search(t) for t in training_texts),
        experience_band=get_experience_band(years_experience, graduation_date, today=today),
    )


def extract_years_experience(
    experience_items: Sequence[ExperienceItem], today: date | None = None
) -> int | None:
    """Years elapsed since the earliest experience start date.

    A rough proxy: overlapping roles are not deduplicated.
    """
    today = today or date.today()
    starts = [
        d for d in (parse_resume_date(e.start_date, today=today) for e in experience_items)
        if d is not None
    ]
    if not starts:
        return None
    years = (today - min(starts)).days / 365
    return max(0, round(years))
