"""Identity masking for candidates a recruiter has not unlocked."""

from models.schemas.candidate import CandidateProfile


def build_anonymized_name(full_name: str | None, candidate_id: str) -> str:
    """Mask a display name.

    "Sara Al Qahtani" -> "Sara Q.", "Sara" -> "S***", no name -> "Candidate <id[:6]>".
    """
    if not full_name:
        return f"Candidate {candidate_id[:6]}"
    parts = full_name.split()
    if len(parts) <= 1:
        first_char = parts[0][0] if parts else ""
        return f"{first_char or 'C'}***"
    return f"{parts[0]} {parts[-1][0]}."


def redact_candidate(candidate: CandidateProfile, unlocked: bool) -> CandidateProfile:
    """Return a copy safe to show a recruiter.

    The name is masked unless the candidate is unlocked. Employer and salary
    privacy flags are honored regardless of unlock state.
    """
    updates: dict = {}
    if not unlocked:
        updates["display_name"] = build_anonymized_name(candidate.display_name, candidate.id)
    if candidate.hide_current_employer:
        updates["current_company"] = None
    if candidate.hide_salary_history:
        updates["desired_salary_min"] = None
        updates["desired_salary_max"] = None
    return candidate.model_copy(update=updates)
