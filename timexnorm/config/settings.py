from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Normalizer configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    normalizer_timeout_millis: int = 1000
    normalizer_output_format: str = "simple"
    normalizer_failure_policy: str = "strict"

    parser_engine: str = "dateparser"
    parser_language: str = "en"

    worker_poll_interval_millis: int = 50
