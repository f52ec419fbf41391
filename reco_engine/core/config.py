from functools import lru_cache
from typing import Literal, Optional
import os
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from reco_engine.domain.services.constants import (
    DEFAULT_K,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_TOP_N,
    RECENCY_WINDOW_DAYS,
    SCORER_EUCLIDEAN,
    TRENDING_BASE_PROBABILITY,
    TRENDING_RECENCY_BOOST,
)

EnvName = Literal["development", "production"]

def _env_file_for(app_env: EnvName) -> str:
    return ".env.development" if app_env == "development" else ".env.production"

class Settings(BaseSettings):

    # Core
    APP_ENV: EnvName = Field("development", validation_alias="APP_ENV")  # same switch the factory reads
    APP_NAME: str = "RecommendationEngine"
    DEBUG: bool = False

    # Clustering
    k: int = Field(DEFAULT_K, ge=1)                                 # fixed, not scaled with catalogue size
    max_iterations: int = Field(DEFAULT_MAX_ITERATIONS, ge=1)

    # Ranking
    top_n: int = Field(DEFAULT_TOP_N, ge=0)                         # records taken per order
    scorer: str = SCORER_EUCLIDEAN                                  # key in scoring.SCORERS
    featured_limit: int = Field(8, ge=0)                            # products a section renders

    # Trending
    trending_enabled: bool = False
    recency_window_days: float = Field(RECENCY_WINDOW_DAYS, ge=0)
    trending_base_probability: float = Field(TRENDING_BASE_PROBABILITY, ge=0, le=1)
    trending_recency_boost: float = Field(TRENDING_RECENCY_BOOST, ge=0, le=1)
    random_seed: Optional[int] = None                               # None = system entropy

    # pydantic-settings config: env file is chosen in the factory below
    model_config = SettingsConfigDict(env_file=None, env_prefix="RECO_", case_sensitive=False, populate_by_name=True)

@lru_cache
def get_settings() -> Settings:
    """
    Factory that chooses the right .env file based on APP_ENV.
    Cached so every pipeline call shares one instance; pass an explicit
    Settings to recommend_products() to override per call.
    """
    app_env: EnvName = os.getenv("APP_ENV", "development")  # earliest switch
    env_file = _env_file_for(app_env)
    return Settings(
                _env_file=env_file,  # load .env.development or .env.production
                _env_file_encoding="utf-8"
    )
