from pydantic import BaseModel

from models.schemas.candidate import CandidateProfile


class Pagination(BaseModel):
    page: int = 1
    limit: int = 20
    total: int = 0
    total_pages: int = 0


class CandidateSearchResult(BaseModel):
    candidate: CandidateProfile  # anonymized/redacted unless unlocked
    unlocked: bool = False
    match_score: int = 0
    graduated_within_12_months: bool = False


class SearchResponse(BaseModel):
    candidates: list[CandidateSearchResult] = []
    pagination: Pagination = Pagination()


class JobRecommendationView(BaseModel):
    rank: int
    match_score: int
    reasons: list[str] = []
    gaps: list[str] = []
    is_priority: bool = False
    unlocked: bool = False
    candidate: CandidateProfile
