from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = Field(alias="DATABASE_URL")

    # JWT Configuration (tokens are issued by the identity provider)
    secret_key: str = Field(alias="SECRET_KEY")
    algorithm: str = Field(default="HS256", alias="ALGORITHM")
    access_token_expire_minutes: int = Field(default=60, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    # First Admin User
    first_admin_email: str | None = Field(default=None, alias="FIRST_ADMIN_EMAIL")

    # Frontend URL for CORS
    frontend_url: str | None = Field(default=None, alias="FRONTEND_URL")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Roster policy
    allow_off_schedule_checkin: bool = Field(default=False, alias="ALLOW_OFF_SCHEDULE_CHECKIN")

    # Grading policy
    allow_demotion: bool = Field(default=True, alias="ALLOW_DEMOTION")
    profile_sync_attempts: int = Field(default=3, ge=1, alias="PROFILE_SYNC_ATTEMPTS")

    @field_validator("first_admin_email", "frontend_url", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for optional string fields."""
        if v == "":
            return None
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
