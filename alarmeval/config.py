"""Configuration for the alarm evaluator."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from alarmeval.stats.domain.resolution import TimeResolution


class EvaluatorConfig(BaseSettings):
    """Configuration for alarm evaluation."""

    model_config = SettingsConfigDict(env_prefix="ALARM_EVALUATOR_", env_file=".env", extra="ignore")

    future_slots: int = Field(default=2, ge=0, description="Window slots accepting early samples")
    period_unit_ms: int = Field(default=1000, ge=1, description="Milliseconds per period unit")
    time_resolution: TimeResolution = Field(
        default=TimeResolution.ABSOLUTE, description="Adjustment applied to sample timestamps"
    )
    skip_invalid_alarms: bool = Field(
        default=True, description="Log and skip alarms whose expression fails to parse"
    )


class LoggingConfig(BaseSettings):
    """Configuration for logging."""

    model_config = SettingsConfigDict(env_prefix="ALARM_LOGGING_", env_file=".env", extra="ignore")

    level: str = Field(default="INFO", description="Minimum level for the stderr sink")
    file_path: str | None = Field(default=None, description="Optional log file path")
    rotation: str = Field(default="100 MB", description="Log file rotation size")
    retention: str = Field(default="30 days", description="Log file retention period")


class AppConfig(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    evaluator: EvaluatorConfig = Field(default_factory=EvaluatorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
