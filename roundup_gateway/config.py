"""Configuration management using Pydantic Settings"""

from decimal import Decimal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "roundup-gateway"
    log_level: str = "INFO"

    # Round-ups
    round_up_unit: Decimal = Decimal("1.00")  # Round each purchase up to the next whole unit

    # Projections
    default_risk_profile: str = "balanced"
    max_annual_return_rate: Decimal = Decimal("1.0")
    max_horizon_years: Decimal = Decimal("50")
    contribution_lookback_months: int = 6
    goal_max_months: int = 600  # 50 years
    growth_cap_rate: Decimal = Decimal("0.30")


settings = Settings()
