"""Per (candidate, job) scoring output."""

from pydantic import BaseModel, Field


class ScoreResult(BaseModel):
    """Explainable fit score. Computed at query time, never persisted."""
    score: int = Field(default=0, ge=0, le=100)
    reasons: list[str] = []  # at most 5, most important first
    gaps: list[str] = []  # at most 4
    is_priority: bool = False


class JobRecommendation(BaseModel):
    """A ranked candidate recommendation for a job posting."""
    candidate_id: str
    rank: int  # 1-based
    match_score: int
    reasons: list[str] = []
    gaps: list[str] = []
    is_priority: bool = False
