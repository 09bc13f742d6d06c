"""Prompt templates for Gemini API calls."""

REQUIREMENT_SYSTEM_PROMPT = """You are an experienced recruiter analyst. Extract structured signals from the job description.

Return JSON with:
- mustHaveSkills: string[]
- niceToHaveSkills: string[]
- roleKeywords: string[]
- yearsExpMin: number | null
- yearsExpMax: number | null
- languages: string[]
- responsibilities: string[]
- redFlags: string[]
- summary: string
- requiredDegreeLevel: string | null (Diploma/Bachelor/Master/PhD)
- preferredDegreeLevels: string[]
- requiredFieldsOfStudy: string[]
- preferredFieldsOfStudy: string[]
- weights: object (skillWeight, experienceWeight, keywordWeight, educationWeight)

Keep arrays concise (max 12 items each). Respond with ONLY valid JSON (no markdown, no code fences)."""


def build_requirement_prompts(
    jd_text: str,
    title: str,
    location: str | None = None,
    remote_allowed: bool = False,
) -> tuple[str, str]:
    """Job requirement analysis: returns the (system, user) prompt pair."""
    user_prompt = f"""Job Title: {title}
Location: {location or "Not specified"}
Remote Allowed: {"Yes" if remote_allowed else "No"}
Job Description:
{jd_text}"""
    return REQUIREMENT_SYSTEM_PROMPT, user_prompt
