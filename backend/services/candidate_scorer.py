"""Deterministic candidate scoring against a job requirement profile.

Two tiers are applied on different call paths:
    passes_education_requirements(): hard pre-filter for job recommendations
    score_candidate(): soft bonuses/gaps for everyone who passes

compute_fit_score() is a separate, lighter heuristic for free-text search,
where no requirement profile exists.
"""

from models.schemas.candidate import CandidateProfile
from models.schemas.education import DegreeLevel
from models.schemas.job_requirements import JobRequirementProfile
from models.schemas.score_result import ScoreResult
from services.education_normalizer import format_degree_level, normalize_field_of_study
from services.lexical import tokenize, unique_list

BASE_SCORE = 50
MUST_HAVE_POINTS = 8
NICE_TO_HAVE_POINTS = 4
KEYWORD_POINTS = 2
MAX_EXPERIENCE_POINTS = 10
REQUIRED_DEGREE_POINTS = 6
REQUIRED_FIELD_POINTS = 4
PREFERRED_DEGREE_POINTS = 3
PREFERRED_FIELD_POINTS = 3

MAX_REASONS = 5
MAX_GAPS = 4
PRIORITY_SCORE = 85


def fields_match(candidate_field: str | None, target_field: str | None) -> bool:
    """Canonical field tokens match on equality or substring in either direction."""
    if not candidate_field or not target_field:
        return False
    return candidate_field in target_field or target_field in candidate_field


def allowed_degree_levels(required: DegreeLevel) -> list[DegreeLevel]:
    """Degree levels that satisfy a requirement, for store-side pre-filtering."""
    return [level for level in DegreeLevel if level.rank >= required.rank]


def _candidate_field(candidate: CandidateProfile) -> str | None:
    education = candidate.education
    return education.normalized_field_of_study or normalize_field_of_study(
        education.primary_field_of_study
    )


def passes_education_requirements(
    candidate: CandidateProfile, job: JobRequirementProfile
) -> bool:
    """Hard eligibility gate. Missing or insufficient education data excludes."""
    degree = candidate.education.highest_degree_level
    candidate_field = _candidate_field(candidate)

    if job.required_degree_level:
        if degree is None or degree.rank < job.required_degree_level.rank:
            return False

    if job.required_fields_of_study:
        if not candidate_field:
            return False
        if not any(fields_match(candidate_field, f) for f in job.required_fields_of_study):
            return False

    return True


def score_candidate(candidate: CandidateProfile, job: JobRequirementProfile) -> ScoreResult:
    """Score one candidate against one job on a 0-100 scale with reasons and gaps."""
    skill_tokens = {s.strip().lower() for s in candidate.skills if s.strip()}
    role_tokens = set(tokenize(" ".join([
        candidate.summary or "",
        candidate.current_title or "",
        " ".join(candidate.desired_roles),
    ])))

    must_have = unique_list(s.lower() for s in job.must_have_skills)
    nice_to_have = unique_list(s.lower() for s in job.nice_to_have_skills)
    keywords = unique_list(k.lower() for k in job.role_keywords)

    matched_must = [s for s in must_have if s in skill_tokens]
    matched_nice = [s for s in nice_to_have if s in skill_tokens]
    matched_keywords = [k for k in keywords if k in role_tokens]

    skill_score = len(matched_must) * MUST_HAVE_POINTS + len(matched_nice) * NICE_TO_HAVE_POINTS
    keyword_score = len(matched_keywords) * KEYWORD_POINTS
    experience_score = (
        min(MAX_EXPERIENCE_POINTS, candidate.years_experience)
        if candidate.years_experience else 0
    )

    # --- Education: independent additive checks ---
    education_score = 0
    education_reasons: list[str] = []
    education_gaps: list[str] = []

    degree = candidate.education.highest_degree_level
    candidate_field = _candidate_field(candidate)
    has_education_data = bool(degree or candidate_field)

    if job.required_degree_level and degree:
        label = format_degree_level(job.required_degree_level)
        if degree.rank >= job.required_degree_level.rank:
            education_score += REQUIRED_DEGREE_POINTS
            education_reasons.append(f"Meets {label} degree requirement")
        elif has_education_data:
            education_gaps.append(f"{label} degree required")

    if job.required_fields_of_study and candidate_field:
        if any(fields_match(candidate_field, f) for f in job.required_fields_of_study):
            education_score += REQUIRED_FIELD_POINTS
            education_reasons.append("Matches required field of study")
        elif has_education_data:
            education_gaps.append("Different field of study")

    if job.preferred_degree_levels and degree:
        if any(degree.rank >= level.rank for level in job.preferred_degree_levels):
            education_score += PREFERRED_DEGREE_POINTS
            education_reasons.append("Matches preferred degree level")

    if job.preferred_fields_of_study and candidate_field:
        if any(fields_match(candidate_field, f) for f in job.preferred_fields_of_study):
            education_score += PREFERRED_FIELD_POINTS
            primary = candidate.education.primary_field_of_study or "field"
            education_reasons.append(f"Relevant {primary} background")

    raw = BASE_SCORE + skill_score + keyword_score + experience_score + education_score
    score = max(0, min(100, round(raw)))

    reasons = unique_list(
        education_reasons
        + matched_must[:4]
        + matched_nice[:3]
        + matched_keywords[:3]
    )[:MAX_REASONS]
    gaps = unique_list(
        education_gaps + [s for s in must_have if s not in skill_tokens]
    )[:MAX_GAPS]

    is_priority = score >= PRIORITY_SCORE or len(matched_must) >= min(3, len(must_have))

    return ScoreResult(score=score, reasons=reasons, gaps=gaps, is_priority=is_priority)


def compute_fit_score(skills: list[str], query_tokens: list[str]) -> int:
    """Search-only fit score: share of query tokens found inside any skill, mapped to 60-98."""
    if not query_tokens:
        return 70
    lower_skills = [s.lower() for s in skills]
    hits = sum(1 for t in query_tokens if any(t in s for s in lower_skills))
    ratio = hits / len(query_tokens)
    return max(60, min(98, round(60 + ratio * 38)))
