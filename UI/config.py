from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Console settings, read from CONSOLE_* environment variables or .env."""

    model_config = SettingsConfigDict(env_prefix="CONSOLE_", env_file=".env", extra="ignore")

    # Backend API
    API_BASE_URL: str = "http://localhost:8080/prometheus_web_war_exploded/api"
    API_TIMEOUT: float = 10.0

    # Screens fetch one large page and filter locally
    PAGE_SIZE: int = 100
    DASHBOARD_PAGE_SIZE: int = 1000

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8050
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"


settings = Settings()
