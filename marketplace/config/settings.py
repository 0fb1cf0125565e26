from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    node_url: str = "http://localhost:8090/rpc"
    rpc_timeout_seconds: int = 30
    collaborator_timeout_seconds: float | None = None

    core_asset_id: str = "1.3.0"
    region_code: int = 1
    default_page_size: int = 100
