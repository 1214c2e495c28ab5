"""opensearch-provider — Search clients built from OpenSearch description documents.

Quick start::

    from opensearch_provider import create_provider

    provider = await create_provider("engines/wikipedia.xml", type="file")
    suggestions = await provider.get_suggestions({"searchTerms": "solar"})
"""

from __future__ import annotations

from pathlib import Path

from opensearch_provider.exceptions import ConfigurationError
from opensearch_provider.provider import OpenSearchProvider

__version__ = "0.1.0"

__all__ = ["OpenSearchProvider", "__version__", "create_provider"]


async def create_provider(data: str | bytes | Path, type: str = "xml", **kwargs: object) -> OpenSearchProvider:
    """Create a provider from an XML string or a file path.

    Args:
        data: The description document (``type="xml"``) or its path (``type="file"``).
        type: Source type, ``"xml"`` or ``"file"``.
        **kwargs: Passed to the ``OpenSearchProvider`` constructor.

    Raises:
        ConfigurationError: If *type* is not supported.
    """
    if type == "xml":
        return await OpenSearchProvider.create_from_xml_string(data, **kwargs)  # type: ignore[arg-type]
    if type == "file":
        return await OpenSearchProvider.create_from_file(data, **kwargs)  # type: ignore[arg-type]
    raise ConfigurationError(f"Source type '{type}' not supported. Supported types: ['xml', 'file']")
