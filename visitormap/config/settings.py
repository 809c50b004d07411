from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from visitormap.services.logparser.constants import ALLOWED_GEOIP_LOCALES


class GeoIPSettings(BaseSettings):
    """GeoIP configuration settings.

    Covers both the local GeoLite2 database used for live visitor tracking
    and the remote batch endpoint used to enrich access log entries.
    """

    model_config = SettingsConfigDict(env_prefix="GEOIP_", env_file=".env", extra="ignore")

    db_path: Path = Field(
        default=Path("data/GeoLite2-City.mmdb"),
        description="Path to GeoIP2/GeoLite2 database file",
    )
    locales: list[str] = Field(
        default=["en"],
        description="List of GeoIP locales to use",
    )
    validate_db_path: bool = Field(
        default=False,
        description="Validate that the GeoIP database file exists (set to True for production)"
    )
    validate_locales: bool = Field(
        default=True,
        description="Validate that the specified GeoIP locales are supported"
    )
    batch_url: str = Field(
        default="http://ip-api.com/batch",
        description="Bulk IP geolocation endpoint accepting a JSON array of {query, fields} objects",
    )
    batch_size: int = Field(default=100, description="Max IPs sent per batch request")
    timeout: float = Field(default=5.0, description="Timeout in seconds for each batch request")
    cache_max_entries: int = Field(
        default=10_000,
        description="Max resolved IPs kept in memory. Oldest entries are evicted first. 0 disables the bound.",
    )

    @model_validator(mode="after")
    def validate_geoip_db_exists(self) -> "GeoIPSettings":
        """Ensure GeoIP database file exists if validation is enabled."""
        if self.validate_db_path and not self.db_path.exists():
            raise ValueError(f"GeoIP database file not found: {self.db_path}")
        return self

    @model_validator(mode="after")
    def validate_geoip_locales(self) -> "GeoIPSettings":
        """Ensure GeoIP locales are valid if validation is enabled."""
        if self.validate_locales:
            invalid_locales = [loc for loc in self.locales if loc not in ALLOWED_GEOIP_LOCALES]
            if invalid_locales:
                raise ValueError(f"Invalid GeoIP locales: {invalid_locales}. Allowed locales are: {ALLOWED_GEOIP_LOCALES}")
        return self

    @model_validator(mode="after")
    def validate_batch_limits(self) -> "GeoIPSettings":
        """The batch endpoint accepts at most 100 queries per request."""
        if not 1 <= self.batch_size <= 100:
            raise ValueError(f"GeoIP batch size must be between 1 and 100, got {self.batch_size}")
        if self.cache_max_entries < 0:
            raise ValueError("GeoIP cache max entries cannot be negative")
        return self


class APISettings(BaseSettings):
    """API server configuration settings."""

    model_config = SettingsConfigDict(env_prefix="API_", env_file=".env", extra="ignore")

    host: str = Field(default="0.0.0.0", description="API server host")
    port: int = Field(default=3001, description="API server port")
    workers: int = Field(default=1, description="Number of worker processes")
    reload: bool = Field(default=False, description="Enable auto-reload on code changes")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )


class LogParserSettings(BaseSettings):
    """Access log configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOGPARSER_", env_file=".env", extra="ignore")

    log_path: Path = Field(
        default=Path("/var/log/nginx/access.log"),
        description="Path to the nginx access log file",
    )
    default_lines: int = Field(
        default=200,
        ge=1,
        description="Number of trailing log lines analysed when the request does not ask for a positive count",
    )


class VisitorSettings(BaseSettings):
    """Live visitor tracking settings."""

    model_config = SettingsConfigDict(env_prefix="VISITORS_", env_file=".env", extra="ignore")

    max_entries: int = Field(default=50, ge=1, description="Number of recent visitors kept in memory")


class StaticSettings(BaseSettings):
    """Static asset serving settings."""

    model_config = SettingsConfigDict(env_prefix="STATIC_", env_file=".env", extra="ignore")

    enabled: bool = Field(default=True, description="Serve static assets at /")
    directory: Path = Field(default=Path("public"), description="Directory holding the static assets")


class Settings(BaseSettings):
    """Main application settings.

    This class aggregates all configuration sections and provides
    a single point of access for application configuration.

    Configuration precedence (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values

    Example .env file:
        APP_DEBUG=true
        API_PORT=3001
        LOGPARSER_LOG_PATH=/var/log/nginx/access.log
        GEOIP_DB_PATH=/data/GeoLite2-City.mmdb
    """

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application metadata
    name: str = Field(default="VisitorMap", description="Application name")
    version: str = Field(default="0.1.0", description="Application version")
    description: str = Field(
        default="Live visitor tracking and access log geolocation analytics",
        description="Application description",
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )

    # Sub-configurations
    api: APISettings = Field(default_factory=APISettings)
    geoip: GeoIPSettings = Field(default_factory=GeoIPSettings)
    logparser: LogParserSettings = Field(default_factory=LogParserSettings)
    visitors: VisitorSettings = Field(default_factory=VisitorSettings)
    static: StaticSettings = Field(default_factory=StaticSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    This function is cached to ensure we only parse configuration once.
    Use this function throughout the application to access settings.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
