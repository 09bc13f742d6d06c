"""Job requirement analysis: Gemini extraction with a heuristic fallback.

Flow:
    jd_text + title/location/remote
      ├─ prompt_builder.build_requirement_prompts()   → (system, user)
      ├─ gemini_client.generate_text()  (one attempt, bounded by a timeout)
      ├─ gemini_client.extract_json_object()          → dict | None
      │     └─ profile_from_ai_response()  field-by-field coercion   → AI profile
      └─ on any failure: heuristic_profile()                          → HEURISTIC profile

analyze_job() never raises: job creation must not depend on the AI service.
"""

import asyncio
import logging
import re
from typing import Any

from config import settings
from models.schemas.education import DegreeLevel
from models.schemas.job_requirements import (
    DEFAULT_WEIGHTS,
    JobRequirementProfile,
    SourceMode,
)
from services import gemini_client, prompt_builder
from services.education_normalizer import infer_degree_level, normalize_field_of_study
from services.lexical import tokenize, unique_list

logger = logging.getLogger(__name__)

SUMMARY_MAX_CHARS = 600
HEURISTIC_SUMMARY_CHARS = 300
HEURISTIC_KEYWORD_POOL = 12

_REQUIRED_SIGNAL_RE = re.compile(r"(required|must have|mandatory|minimum)", re.IGNORECASE)
_PREFERRED_SIGNAL_RE = re.compile(r"(preferred|nice to have|plus|desired)", re.IGNORECASE)

DEGREE_KEYWORDS = [
    "phd", "doctorate", "master", "mba", "bachelor", "b.sc", "bs", "ba",
    "diploma", "associate",
]


# Two-letter abbreviations stay whole words so "database" is not a BA.
# Longer names also take a plural or possessive ("Masters", "Bachelor's").
def _degree_keyword_re(kw: str) -> re.Pattern:
    suffix = "" if len(kw) <= 2 else r"(?:'?s)?"
    return re.compile(rf"\b{re.escape(kw)}{suffix}\b")


_DEGREE_KEYWORD_RES = [(kw, _degree_keyword_re(kw)) for kw in DEGREE_KEYWORDS]

FIELD_PHRASES = [
    "computer science",
    "software engineering",
    "information systems",
    "information technology",
    "business administration",
    "business",
    "economics",
    "engineering",
    "data science",
    "artificial intelligence",
    "machine learning",
    "cyber security",
    "cybersecurity",
]


# ---------------------------------------------------------------------------
# Field coercion for model output
# ---------------------------------------------------------------------------

def _as_str_list(value: Any, lower: bool = False) -> list[str]:
    if not isinstance(value, list):
        return []
    items = [v.lower() if lower else v for v in value if isinstance(v, str)]
    return unique_list(items)


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value)


def _parse_degree_level(value: Any) -> DegreeLevel | None:
    if not isinstance(value, str):
        return None
    return infer_degree_level(value)


def _unique_degrees(levels: list[DegreeLevel | None]) -> list[DegreeLevel]:
    result: list[DegreeLevel] = []
    for level in levels:
        if level and level not in result:
            result.append(level)
    return result


def _parse_degree_levels(value: Any) -> list[DegreeLevel]:
    if isinstance(value, list):
        return _unique_degrees([_parse_degree_level(v) for v in value])
    if isinstance(value, str):
        level = _parse_degree_level(value)
        return [level] if level else []
    return []


def _parse_field_list(value: Any) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    return unique_list(
        normalize_field_of_study(v) for v in value if isinstance(v, str)
    )


def _parse_weights(value: Any) -> dict[str, float]:
    if isinstance(value, dict):
        weights = {
            k: float(v) for k, v in value.items()
            if isinstance(k, str) and isinstance(v, (int, float)) and not isinstance(v, bool)
        }
        if weights:
            return weights
    return dict(DEFAULT_WEIGHTS)


def profile_from_ai_response(parsed: dict[str, Any]) -> JobRequirementProfile:
    """Build a profile from parsed model JSON.

    Each field is coerced on its own; invalid or missing fields fall back to
    None/empty without rejecting the rest of the response.
    """
    summary = parsed.get("summary")
    return JobRequirementProfile(
        must_have_skills=_as_str_list(parsed.get("mustHaveSkills"), lower=True),
        nice_to_have_skills=_as_str_list(parsed.get("niceToHaveSkills"), lower=True),
        role_keywords=_as_str_list(parsed.get("roleKeywords"), lower=True),
        years_exp_min=_as_int(parsed.get("yearsExpMin")),
        years_exp_max=_as_int(parsed.get("yearsExpMax")),
        languages=_as_str_list(parsed.get("languages")),
        responsibilities=_as_str_list(parsed.get("responsibilities")),
        red_flags=_as_str_list(parsed.get("redFlags")),
        summary=summary[:SUMMARY_MAX_CHARS] if isinstance(summary, str) else None,
        required_degree_level=_parse_degree_level(parsed.get("requiredDegreeLevel")),
        preferred_degree_levels=_parse_degree_levels(parsed.get("preferredDegreeLevels")),
        required_fields_of_study=_parse_field_list(parsed.get("requiredFieldsOfStudy")),
        preferred_fields_of_study=_parse_field_list(parsed.get("preferredFieldsOfStudy")),
        weights=_parse_weights(parsed.get("weights")),
        source_mode=SourceMode.AI,
        model_info={"provider": "gemini", "model": settings.gemini_model},
    )


# ---------------------------------------------------------------------------
# Heuristic fallback
# ---------------------------------------------------------------------------

def extract_education_signals(text: str) -> dict[str, Any]:
    """Assign degree/field mentions in a JD to required or preferred buckets.

    A required signal ("required", "must have", ...) wins over a preferred one.
    With no signal at all, fields default to preferred and degrees are dropped.
    """
    lower = text.lower()
    required_signal = bool(_REQUIRED_SIGNAL_RE.search(lower))
    preferred_signal = bool(_PREFERRED_SIGNAL_RE.search(lower))

    degree_matches = [
        infer_degree_level(kw) for kw, pattern in _DEGREE_KEYWORD_RES
        if pattern.search(lower)
    ]
    degrees = sorted(
        (d for d in degree_matches if d), key=lambda d: d.rank, reverse=True
    )
    fields = unique_list(
        normalize_field_of_study(phrase) for phrase in FIELD_PHRASES if phrase in lower
    )

    if required_signal:
        return {
            "required_degree_level": degrees[0] if degrees else None,
            "preferred_degree_levels": [],
            "required_fields_of_study": fields,
            "preferred_fields_of_study": [],
        }
    if preferred_signal:
        return {
            "required_degree_level": None,
            "preferred_degree_levels": _unique_degrees(degrees),
            "required_fields_of_study": [],
            "preferred_fields_of_study": fields,
        }
    return {
        "required_degree_level": None,
        "preferred_degree_levels": [],
        "required_fields_of_study": [],
        "preferred_fields_of_study": fields,
    }


def heuristic_profile(jd_text: str) -> JobRequirementProfile:
    """Deterministic requirement profile built from JD tokens alone."""
    top_keywords = unique_list(tokenize(jd_text))[:HEURISTIC_KEYWORD_POOL]
    education = extract_education_signals(jd_text)

    return JobRequirementProfile(
        must_have_skills=top_keywords[:6],
        nice_to_have_skills=top_keywords[6:10],
        role_keywords=top_keywords[:8],
        summary=jd_text[:HEURISTIC_SUMMARY_CHARS],
        source_mode=SourceMode.HEURISTIC,
        model_info={"provider": "heuristic"},
        **education,
    )


async def analyze_job(
    jd_text: str,
    title: str,
    location: str | None = None,
    remote_allowed: bool = False,
) -> JobRequirementProfile:
    """Analyze a job posting into a JobRequirementProfile. Never raises."""
    system_prompt, user_prompt = prompt_builder.build_requirement_prompts(
        jd_text, title, location=location, remote_allowed=remote_allowed
    )

    try:
        raw = await asyncio.wait_for(
            gemini_client.generate_text(
                system_prompt,
                user_prompt,
                max_tokens=settings.analyzer_max_tokens,
                temperature=settings.analyzer_temperature,
            ),
            timeout=settings.analyzer_timeout_seconds,
        )
        parsed = gemini_client.extract_json_object(raw)
        if parsed is not None:
            profile = profile_from_ai_response(parsed)
            logger.info("Job requirements extracted by Gemini for %r", title)
            return profile
        logger.warning("Gemini returned no usable JSON for %r, falling back to heuristic", title)
    except asyncio.TimeoutError:
        logger.warning(
            "Gemini job analysis timed out after %ss, falling back to heuristic",
            settings.analyzer_timeout_seconds,
        )
    except Exception as e:
        logger.warning("Gemini job analysis failed, falling back to heuristic: %s", e)

    return heuristic_profile(jd_text)
