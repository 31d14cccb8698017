from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator

from runsynth.core.constants import (
    HR_MAX_DEFAULT,
    HR_REST_DEFAULT,
    PACE_DEFAULT_S_PER_KM,
)


class Settings(BaseSettings):
    log_level: str = "INFO"
    # Comma-separated, e.g. "http://localhost:5173,http://localhost:3000"
    cors_origins: str = "*"

    # Fallbacks applied when a request omits a parameter or sends garbage
    default_pace_seconds_per_km: float = PACE_DEFAULT_S_PER_KM
    default_hr_rest: int = HR_REST_DEFAULT
    default_hr_max: int = HR_MAX_DEFAULT

    # Upper bound on files produced by one batch export
    max_export_variants: int = 10

    # Fixed seed makes every generated activity reproducible; None uses OS entropy
    random_seed: int | None = None

    # Allow empty env strings for optional fields
    @field_validator("random_seed", mode="before")
    @classmethod
    def _empty_to_none(cls, v):
        if v in ("", None, "null", "None"):
            return None
        return v

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
