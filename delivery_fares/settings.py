"""Configuration settings for the delivery fare processor.

Only the run surface is configurable. Tariff constants live on
FareCalculator and are not settings.
"""

from datetime import timedelta, timezone
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FareSettings(BaseSettings):
    """Fare processor configuration."""

    max_workers: int = Field(
        default=10,
        ge=1,
        description="Maximum number of deliveries priced simultaneously",
    )
    input_path: str = Field(
        default="sample_data.csv",
        description="CSV file of delivery_id,lat,lng,unix_seconds pings",
    )
    output_path: str = Field(
        default="output.csv",
        description="CSV file receiving delivery_id,fare rows",
    )
    # Hour-of-day tariffs are evaluated in this offset
    utc_offset_minutes: int = Field(
        default=0,
        ge=-720,
        le=840,
        description="Fixed UTC offset applied to ping timestamps",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["text", "json"] = "text"
    environment: str = "development"

    model_config = SettingsConfigDict(env_prefix="FARE_", extra="ignore")

    def get_tzinfo(self) -> timezone:
        """Build the timezone used to interpret ping timestamps."""
        return timezone(timedelta(minutes=self.utc_offset_minutes))


def get_settings(**overrides: Any) -> FareSettings:
    """Get settings instance; keyword overrides take precedence over the environment."""
    return FareSettings(**overrides)
