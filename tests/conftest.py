"""Shared test fixtures: description documents and mock transports."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Any

import httpx
import pytest

OPENSEARCH_XML = """<?xml version="1.0" encoding="UTF-8"?>
<OpenSearchDescription xmlns="http://a9.com/-/spec/opensearch/1.1/">
  <ShortName>Example</ShortName>
  <Description>Example web search</Description>
  <Tags>news sports</Tags>
  <Contact>admin@example.com</Contact>
  <Image height="16" width="16" type="image/x-icon">http://example.com/favicon.ico</Image>
  <Url type="text/html" template="http://example.com/?q={searchTerms}"/>
  <Url type="application/x-suggestions+json" rel="suggestions"
       template="http://example.com/suggest?q={searchTerms}"/>
  <Language>en-us</Language>
  <AdultContent>false</AdultContent>
</OpenSearchDescription>
"""

SEARCHPLUGIN_XML = """<?xml version="1.0" encoding="UTF-8"?>
<SearchPlugin xmlns="http://www.mozilla.org/2006/browser/search/"
              xmlns:os="http://a9.com/-/spec/opensearch/1.1/">
  <os:ShortName>Mozilla Example</os:ShortName>
  <os:InputEncoding>UTF-8</os:InputEncoding>
  <os:Url type="text/html" method="GET" template="http://example.com/search">
    <os:Param name="q" value="{searchTerms}"/>
    <os:Param name="format" value="html"/>
  </os:Url>
  <SearchForm>http://example.com/</SearchForm>
</SearchPlugin>
"""


@pytest.fixture
def opensearch_xml() -> str:
    return OPENSEARCH_XML


@pytest.fixture
def searchplugin_xml() -> str:
    return SEARCHPLUGIN_XML


class RecordingHandler:
    """Mock transport handler answering every request with a fixed JSON body."""

    def __init__(self, body: Any, status_code: int = 200) -> None:
        self.body = body
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)


@pytest.fixture
def make_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Build an ``httpx.AsyncClient`` whose transport is the given handler."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def recording_handler() -> type[RecordingHandler]:
    return RecordingHandler


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """Undo ``setup_logging`` so handlers bound to captured streams do not leak."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    loggers = {name: logging.getLogger(name).level for name in ("opensearch_provider", "httpx", "httpcore")}
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, saved in loggers.items():
        logging.getLogger(name).setLevel(saved)
