"""Request builder — Expands compiled URL templates into HTTP requests.

GET requests carry the Mozilla Param values as extra query parameters.
POST requests (the other method the Param extension allows) send them as
an ``application/x-www-form-urlencoded`` body to the expanded template.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any
from urllib.parse import unquote

import httpx

from opensearch_provider.core.templates import UrlTemplate
from opensearch_provider.exceptions import ConfigurationError, TemplateError

logger = logging.getLogger(__name__)


class HttpMethod(str, Enum):
    """HTTP methods a ``Url`` entry can be dispatched with."""

    GET = "get"
    POST = "post"

    @classmethod
    def of(cls, url_template: UrlTemplate) -> HttpMethod:
        """Resolve the method of *url_template*.

        Raises:
            ConfigurationError: If the method is not supported.
        """
        try:
            return cls(url_template.method)
        except ValueError:
            raise ConfigurationError(
                f"Unsupported method '{url_template.method}' for URL template "
                f"{url_template.template.source!r}. Supported methods: {[m.value for m in cls]}"
            ) from None


def _parse_url(value: str) -> httpx.URL:
    try:
        return httpx.URL(value)
    except httpx.InvalidURL as e:
        raise TemplateError(f"Expanded template is not a valid URL: {value!r}") from e


def expand_params(url_template: UrlTemplate, params: Mapping[str, Any]) -> dict[str, str]:
    """Expand every Param template, in declaration order.

    Values are percent-decoded: the template engine encodes what it
    substitutes, and the query or form serializer encodes again.
    """
    return {name: unquote(template.expand(params)) for name, template in url_template.params.items()}


def expand_url(url_template: UrlTemplate, params: Mapping[str, Any]) -> str:
    """Expand a GET template into a complete URL.

    Args:
        url_template: The compiled URL entry.
        params: Template parameters, e.g. ``{"searchTerms": "cats"}``.

    Returns:
        The base template expansion with each Param appended as a query parameter.
    """
    url = _parse_url(url_template.template.expand(params))
    for name, value in expand_params(url_template, params).items():
        url = url.copy_add_param(name, value)
    return str(url)


class RequestBuilder:
    """Builds and sends requests for compiled URL templates.

    Args:
        client: The HTTP client requests are sent through.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    def build_request(self, url_template: UrlTemplate, params: Mapping[str, Any]) -> httpx.Request:
        """Build the request for *url_template* without sending it.

        Raises:
            ConfigurationError: If the template's method is not supported.
            TemplateError: If the template cannot be expanded into a URL.
        """
        method = HttpMethod.of(url_template)
        if method is HttpMethod.GET:
            return self._client.build_request("GET", expand_url(url_template, params))

        url = _parse_url(url_template.template.expand(params))
        return self._client.build_request("POST", url, data=expand_params(url_template, params))

    async def dispatch(self, url_template: UrlTemplate, params: Mapping[str, Any]) -> httpx.Response:
        """Send the request for *url_template*.

        Transport errors from httpx propagate unchanged.
        """
        request = self.build_request(url_template, params)
        logger.debug("Dispatching %s %s", request.method, request.url)
        return await self._client.send(request)
