"""Provider settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. Environment variables (OPENSEARCH_PROVIDER_ prefix)
  2. YAML config file (if specified)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

_USER_AGENT = "opensearch-provider/0.1 (+https://github.com/opensearch-provider/opensearch-provider)"


class HttpSettings(BaseModel):
    """Transport configuration for requests against search endpoints."""

    timeout: float = Field(default=10.0, gt=0, description="Request timeout in seconds")
    user_agent: str = Field(default=_USER_AGENT, description="User-Agent header sent with every request")
    follow_redirects: bool = Field(default=True, description="Follow HTTP redirects")


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="console", description="Log format: json, console")


class Settings(BaseSettings):
    """Root settings.

    Configuration is loaded from environment variables with the
    OPENSEARCH_PROVIDER_ prefix. Nested settings use double underscores.

    Example:
        OPENSEARCH_PROVIDER_HTTP__TIMEOUT=5
        OPENSEARCH_PROVIDER_OBSERVABILITY__LOG_FORMAT=json
    """

    model_config = {
        "env_prefix": "OPENSEARCH_PROVIDER_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    http: HttpSettings = Field(default_factory=HttpSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file are used as defaults; environment variables
        still take precedence.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
