"""OpenSearch provider — Executes searches described by an OpenSearch description.

Implements OpenSearch 1.1
(http://www.opensearch.org/Specifications/OpenSearch/1.1), the Suggestions
extension
(http://www.opensearch.org/Specifications/OpenSearch/Extensions/Suggestions/1.1)
and Mozilla's flavour of the Parameter extension
(http://www.opensearch.org/Specifications/OpenSearch/Extensions/Parameter/1.0).

Usage::

    async with await OpenSearchProvider.create_from_file("wikipedia.xml") as provider:
        suggestions = await provider.get_suggestions({"searchTerms": "solar"})
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import aiofiles
import httpx

from opensearch_provider.config.settings import Settings
from opensearch_provider.core.normalizer import normalize
from opensearch_provider.core.parser import parse_xml
from opensearch_provider.core.request import RequestBuilder, expand_url
from opensearch_provider.core.templates import UrlTemplate, compile_templates
from opensearch_provider.exceptions import (
    ConfigurationError,
    DescriptionIOError,
    ParseError,
    RequestError,
)
from opensearch_provider.models.description import Description

logger = logging.getLogger(__name__)

SUGGESTIONS_TYPE = "application/x-suggestions+json"
HTML_TYPE = "text/html"

# Root element names: OpenSearch 1.1 first, then Mozilla's SearchPlugin
_ROOT_ELEMENTS = ("OpenSearchDescription", "SearchPlugin")


class OpenSearchProvider:
    """Search interface built from an OpenSearch description.

    The description and its compiled URL templates are fixed at
    construction; every operation only reads them.

    Args:
        definition: A normalized ``Description`` or the raw description tree
            (the ``OpenSearchDescription`` node of a parsed document).
        client: HTTP client used for requests. When omitted, one is created
            from *settings* on first use and closed by :meth:`close`.
        settings: Provider settings. Uses defaults if None.
    """

    def __init__(
        self,
        definition: Description | Mapping[str, Any],
        *,
        client: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._description = definition if isinstance(definition, Description) else normalize(definition)
        self._url_templates = tuple(compile_templates(self._description.urls))
        self._settings = settings or Settings()
        self._client = client
        self._owns_client = client is None
        logger.info(
            "OpenSearch provider ready: %s (%d URL templates)",
            self._description.short_name or "<unnamed>",
            len(self._url_templates),
        )

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    async def create_from_xml_string(cls, xml: str | bytes, **kwargs: Any) -> OpenSearchProvider:
        """Create a provider from the XML text of a description document.

        Args:
            xml: The description document.
            **kwargs: Passed to the constructor (``client``, ``settings``).

        Raises:
            ParseError: If the document is malformed or has no known root element.
        """
        tree = parse_xml(xml)
        for root in _ROOT_ELEMENTS:
            if root in tree:
                # An empty or text-only root element parses to a string
                node = tree[root]
                return cls(node if isinstance(node, Mapping) else {}, **kwargs)
        raise ParseError(
            f"Unexpected root element '{next(iter(tree))}', expected one of {list(_ROOT_ELEMENTS)}"
        )

    @classmethod
    async def create_from_file(cls, path: str | Path, **kwargs: Any) -> OpenSearchProvider:
        """Create a provider from a description document on disk.

        Raises:
            DescriptionIOError: If the file cannot be read.
            ParseError: If the document is malformed or has no known root element.
        """
        try:
            async with aiofiles.open(path, mode="rb") as f:
                data = await f.read()
        except OSError as e:
            raise DescriptionIOError(f"Cannot read description document {str(path)!r}: {e}") from e

        logger.debug("Read description document %s (%d bytes)", path, len(data))
        return await cls.create_from_xml_string(data, **kwargs)

    # ── Resources ────────────────────────────────────────────────────────

    async def __aenter__(self) -> OpenSearchProvider:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            http = self._settings.http
            self._client = httpx.AsyncClient(
                headers={"User-Agent": http.user_agent},
                timeout=http.timeout,
                follow_redirects=http.follow_redirects,
            )
        return self._client

    # ── Accessors ────────────────────────────────────────────────────────

    @property
    def description(self) -> Description:
        """The normalized description."""
        return self._description

    @property
    def url_templates(self) -> tuple[UrlTemplate, ...]:
        """Compiled URL templates, in document order."""
        return self._url_templates

    def find_url(self, type: str, rel: str | None = None) -> UrlTemplate | None:
        """Return the first URL template with the given type (and rel, if given)."""
        for url in self._url_templates:
            if url.type == type and (rel is None or url.rel == rel):
                return url
        return None

    def _require_url(self, type: str, rel: str | None = None) -> UrlTemplate:
        url = self.find_url(type, rel)
        if url is None:
            rel_hint = f" and rel '{rel}'" if rel is not None else ""
            raise ConfigurationError(f"No Url with type '{type}'{rel_hint} declared in the description")
        return url

    # ── Requests ─────────────────────────────────────────────────────────

    def build_url(self, params: Mapping[str, Any], type: str = HTML_TYPE, rel: str | None = "results") -> str:
        """Expand the URL template with the given type and rel.

        Raises:
            ConfigurationError: If no such URL is declared.
        """
        return expand_url(self._require_url(type, rel), params)

    async def _fetch_json(self, url: UrlTemplate, params: Mapping[str, Any]) -> Any:
        response = await RequestBuilder(self._get_client()).dispatch(url, params)
        if not 200 <= response.status_code < 300:
            logger.warning("Search endpoint answered %d %s", response.status_code, response.reason_phrase)
            raise RequestError(response.reason_phrase or f"HTTP {response.status_code}", response.status_code)
        try:
            return response.json()
        except ValueError as e:
            raise RequestError(f"Response body is not valid JSON: {e}", response.status_code) from e

    async def request(self, params: Mapping[str, Any], type: str, rel: str | None = "results") -> Any:
        """Send the request for the URL with the given type and rel and decode its JSON body.

        Raises:
            ConfigurationError: If no such URL is declared.
            RequestError: If the endpoint does not answer 2xx with JSON.
        """
        return await self._fetch_json(self._require_url(type, rel), params)

    async def get_suggestions(self, params: Mapping[str, Any]) -> list[Any]:
        """Fetch search suggestions.

        Queries the ``application/x-suggestions+json`` URL. When the response
        lacks query URLs (the optional 4th element), they are generated from
        the ``text/html`` URL, one per suggestion, and an empty descriptions
        list is inserted if that was missing too.

        Args:
            params: Template parameters; should at least set ``searchTerms``.

        Returns:
            ``[query, suggestions, descriptions, query_urls]``, or the response
            as received when it is already complete or no ``text/html`` URL exists.

        Raises:
            ConfigurationError: If no suggestions URL is declared.
            RequestError: If the endpoint does not answer 2xx with a JSON array.
        """
        url = self.find_url(SUGGESTIONS_TYPE)
        if url is None:
            raise ConfigurationError(
                f"No suggestions URL declared: the description needs a Url with type '{SUGGESTIONS_TYPE}'"
            )

        result = await self._fetch_json(url, params)
        if not isinstance(result, list):
            raise RequestError(f"Suggestions response must be a JSON array, got {type(result).__name__}")

        if len(result) < 4:
            html_url = self.find_url(HTML_TYPE)
            if html_url is None:
                return result

            if len(result) < 3:
                result.append([])

            suggestions = result[1] if len(result) > 1 else []
            if not isinstance(suggestions, list):
                raise RequestError(f"Suggestions must be a JSON array, got {type(suggestions).__name__}")
            result.append([expand_url(html_url, {**params, "searchTerms": term}) for term in suggestions])

        return result
