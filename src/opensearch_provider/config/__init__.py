"""Configuration."""

from opensearch_provider.config.settings import HttpSettings, ObservabilitySettings, Settings

__all__ = ["HttpSettings", "ObservabilitySettings", "Settings"]
