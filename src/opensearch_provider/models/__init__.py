"""Data models."""

from opensearch_provider.models.description import Description, Image, SyndicationRight, Url

__all__ = ["Description", "Image", "SyndicationRight", "Url"]
