from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "pitchfund"
    db_username: str = "pitchfund"
    db_password: str = "secret"

    draft_store: str = "memory"
    draft_dir: str = ".drafts"
    draft_quota_bytes: int = 5 * 1024 * 1024
    draft_debounce_seconds: float = 0.7
    paste_release_seconds: float = 1.0
    draft_default_fields: str = (
        "has_pro_rata_rights,fund,stage_at_investment,instrument,status,founder_role"
    )

    geocoder_provider: str = "mapbox"
    mapbox_access_token: str = ""
    mapbox_base_url: str = "https://api.mapbox.com"
    geocoder_timeout_seconds: int = 10
    geocoder_confidence_threshold: float = 0.8

    content_provider: str = "openai"
    content_openai_api_key: str = ""
    content_openai_model_name: str = "gpt-4o-mini"
    content_openai_timeout_seconds: int = 30
    content_openai_max_retries: int = 5
    content_max_transcript_tokens: int = 8000

    pdf_engine: str = "pdfplumber"

    @property
    def default_field_names(self) -> frozenset[str]:
        """Form fields whose values never count as real user data."""
        return frozenset(
            name.strip() for name in self.draft_default_fields.split(",") if name.strip()
        )
