"""Description models — Canonical form of an OpenSearch description document.

Field aliases follow the element and attribute names used by OpenSearch 1.1
(http://www.opensearch.org/Specifications/OpenSearch/1.1), so a normalized
tree validates directly and ``model_dump(by_alias=True)`` round-trips to the
document vocabulary. Unknown elements are kept as extra fields.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SyndicationRight(str, Enum):
    """Degree to which search results may be queried, displayed and redistributed."""

    OPEN = "open"
    LIMITED = "limited"
    PRIVATE = "private"
    CLOSED = "closed"


class Image(BaseModel):
    """An icon or image associated with the search engine."""

    model_config = ConfigDict(extra="allow", frozen=True)

    src: str = Field(default="", description="Image URL (element text)")
    height: int | None = Field(default=None, description="Height in pixels")
    width: int | None = Field(default=None, description="Width in pixels")
    type: str | None = Field(default=None, description="Image MIME type")


class Url(BaseModel):
    """A search interface declared by the description."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    template: str = Field(default="", description="URL template with {parameter} placeholders")
    type: str | None = Field(default=None, description="MIME type of the resource the template points at")
    rel: str = Field(default="results", description="Role of the resource: results, suggestions, self, collection")
    index_offset: int = Field(default=1, alias="indexOffset", description="Index of the first search result")
    page_offset: int = Field(default=1, alias="pageOffset", description="Page number of the first set of results")
    method: str = Field(default="get", description="Lower-cased HTTP method (Mozilla Param extension)")
    params: dict[str, str] = Field(
        default_factory=dict,
        alias="Param",
        description="Extra query parameters as name -> value template (Mozilla Param extension)",
    )


class Description(BaseModel):
    """A normalized OpenSearch description.

    Every array-shaped field is a list, even when the document declared a
    single element or none at all.
    """

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    short_name: str = Field(default="", alias="ShortName")
    long_name: str = Field(default="", alias="LongName")
    description: str = Field(default="", alias="Description")
    contact: str = Field(default="", alias="Contact")
    developer: str = Field(default="", alias="Developer")
    attribution: str = Field(default="", alias="Attribution")
    syndication_right: SyndicationRight = Field(default=SyndicationRight.OPEN, alias="SyndicationRight")
    adult_content: bool = Field(default=False, alias="AdultContent")
    query: Any = Field(default=None, alias="Query", description="Example queries, passed through as parsed")
    tags: list[str] = Field(default_factory=list, alias="Tags")
    images: list[Image] = Field(default_factory=list, alias="Image")
    input_encodings: list[str] = Field(default_factory=lambda: ["UTF-8"], alias="InputEncoding")
    languages: list[str] = Field(default_factory=lambda: ["*"], alias="Language")
    output_encodings: list[str] = Field(default_factory=lambda: ["UTF-8"], alias="OutputEncoding")
    urls: list[Url] = Field(default_factory=list, alias="Url")
