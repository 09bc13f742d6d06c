from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"

    # Job requirement analysis (one Gemini call per job, then heuristic fallback)
    analyzer_temperature: float = 0.2
    analyzer_max_tokens: int = 900
    analyzer_timeout_seconds: float = 20.0

    # Candidate search pagination
    search_default_limit: int = 20
    search_max_limit: int = 50

    # Job recommendations
    recommendation_pool_limit: int = 200  # candidates pulled from the store per job
    recommendation_top_n: int = 50  # recommendations kept after scoring

    # Education/experience backfill
    backfill_batch_size: int = 100

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
