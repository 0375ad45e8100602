"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="WELLNESS_",
        extra="ignore",
    )

    # Service
    service_name: str = "bms-wellness-engine"
    log_level: str = "INFO"

    # Reference data (empty = bundled files in wellness_engine/data)
    risk_table_path: str = ""
    benchmarks_path: str = ""


settings = Settings()
