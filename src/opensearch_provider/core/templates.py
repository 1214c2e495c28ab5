"""Template compiler — Builds expandable URL templates from normalized ``Url`` entries.

OpenSearch URL templates are close to RFC 6570 level-1 templates, with one
extension: a trailing ``?`` marks a parameter as optional
(``{startPage?}``). Templates are expanded with ``uritemplate``; the
optional marker is dropped before compilation so such parameters expand by
their plain name, and an unset parameter expands to the empty string.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from functools import cached_property
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from uritemplate import URITemplate

from opensearch_provider.exceptions import TemplateError
from opensearch_provider.models.description import Url

_OPTIONAL_MARKER_RE = re.compile(r"\{([^{}]*?)\?\}")


class ExpandableTemplate:
    """A URL template compiled on first use.

    Compilation is deferred so that a malformed template in the description
    only fails the operations that actually expand it.
    """

    def __init__(self, source: str) -> None:
        self.source = source

    @cached_property
    def _compiled(self) -> URITemplate:
        try:
            return URITemplate(_OPTIONAL_MARKER_RE.sub(r"{\1}", self.source))
        except (ValueError, IndexError) as e:
            raise TemplateError(f"Invalid URL template {self.source!r}: {e}") from e

    @property
    def variable_names(self) -> set[str]:
        """Names of the variables the template references."""
        return set(self._compiled.variable_names)

    def expand(self, params: Mapping[str, Any]) -> str:
        """Expand the template with *params*.

        Raises:
            TemplateError: If the template cannot be compiled or expanded.
        """
        compiled = self._compiled
        try:
            return compiled.expand(dict(params))
        except (ValueError, TypeError) as e:
            raise TemplateError(f"Cannot expand URL template {self.source!r}: {e}") from e

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExpandableTemplate):
            return NotImplemented
        return self.source == other.source

    def __hash__(self) -> int:
        return hash(self.source)

    def __repr__(self) -> str:
        return f"ExpandableTemplate({self.source!r})"


class UrlTemplate(BaseModel):
    """Compiled view of a ``Url``: the template and every Param value are expandable."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True, arbitrary_types_allowed=True)

    template: ExpandableTemplate
    type: str | None = None
    rel: str = "results"
    index_offset: int = Field(default=1, alias="indexOffset")
    page_offset: int = Field(default=1, alias="pageOffset")
    method: str = "get"
    params: dict[str, ExpandableTemplate] = Field(default_factory=dict, alias="Param")


def compile_url(url: Url) -> UrlTemplate:
    """Compile a single ``Url`` entry."""
    fields = url.model_dump(exclude={"template", "params"})
    return UrlTemplate(
        template=ExpandableTemplate(url.template),
        params={name: ExpandableTemplate(value) for name, value in url.params.items()},
        **fields,
    )


def compile_templates(urls: Iterable[Url]) -> list[UrlTemplate]:
    """Compile every ``Url`` of a description, preserving order."""
    return [compile_url(url) for url in urls]
