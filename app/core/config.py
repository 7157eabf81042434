from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

from app.requests.state import ExceptionPolicy


def _default_sla_hours() -> dict[str, float]:
    return {
        "Critical": 2,
        "High": 8,
        "Medium": 24,
        "Low": 72,
    }


class Settings(BaseSettings):
    """Application configuration read from environment variables."""

    app_name: str = Field(default="Facility Desk")
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="%(levelname)s %(name)s %(message)s")

    # Workflow configuration
    exception_policy: ExceptionPolicy = Field(default=ExceptionPolicy.ESCAPE_HATCH)
    load_sample_data: bool = Field(default=True)

    # SLA configuration (hours allowed per priority)
    sla_hours: dict[str, float] = Field(default_factory=_default_sla_hours)
    sla_at_risk_ratio: float = Field(default=0.75, gt=0, le=1)

    # Observability configuration
    otel_enabled: bool = Field(default=False)
    otel_service_name: str = Field(default="facility-desk")
    otel_exporter_otlp_endpoint: str | None = Field(default=None)
    otel_exporter_otlp_headers: str | None = Field(default=None)

    class Config:
        env_file = ".env"
        env_prefix = "FACILITY_"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of the application settings."""

    return Settings()
