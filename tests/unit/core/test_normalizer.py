"""Tests for the description normalizer."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from opensearch_provider.core.normalizer import ARRAY_FIELDS, normalize, parse_int
from opensearch_provider.core.parser import parse_xml
from opensearch_provider.models.description import SyndicationRight

# ── Defaults ──────────────────────────────────────────────────────────────────


class TestDefaults:
    def test_empty_tree(self) -> None:
        d = normalize({})
        assert d.short_name == ""
        assert d.tags == []
        assert d.urls == []
        assert d.images == []
        assert d.query is None
        assert d.syndication_right is SyndicationRight.OPEN
        assert d.adult_content is False
        assert d.languages == ["*"]
        assert d.input_encodings == ["UTF-8"]
        assert d.output_encodings == ["UTF-8"]

    def test_defaults_are_not_shared_between_calls(self) -> None:
        first = normalize({})
        second = normalize({})
        assert first.languages == second.languages
        assert first.languages is not second.languages

    def test_non_mapping_raises_type_error(self) -> None:
        with pytest.raises(TypeError, match="mapping"):
            normalize("<OpenSearchDescription/>")  # type: ignore[arg-type]

    def test_description_is_frozen(self) -> None:
        d = normalize({"ShortName": "Example"})
        with pytest.raises(ValidationError):
            d.short_name = "Other"  # type: ignore[misc]


# ── Array shapes ──────────────────────────────────────────────────────────────


class TestArrayShapes:
    @pytest.mark.parametrize(
        "raw",
        [
            {},
            {"Image": "http://example.com/a.png", "Url": {"template": "http://a/"}},
            {
                "Image": ["http://example.com/a.png", "http://example.com/b.png"],
                "Url": [{"template": "http://a/"}, {"template": "http://b/"}],
                "Language": ["en", "de"],
            },
            {"InputEncoding": "ISO-8859-1", "OutputEncoding": "UTF-16", "Language": "fr"},
        ],
    )
    def test_array_fields_are_always_lists(self, raw: dict[str, Any]) -> None:
        dumped = normalize(raw).model_dump(by_alias=True)
        for name in ARRAY_FIELDS:
            assert isinstance(dumped[name], list), name

    def test_scalar_is_wrapped(self) -> None:
        d = normalize({"Language": "en-us", "InputEncoding": "ISO-8859-1"})
        assert d.languages == ["en-us"]
        assert d.input_encodings == ["ISO-8859-1"]


# ── Scalars ───────────────────────────────────────────────────────────────────


class TestScalars:
    def test_tags_string_is_split(self) -> None:
        assert normalize({"Tags": "news sports"}).tags == ["news", "sports"]

    def test_tags_split_on_any_whitespace(self) -> None:
        assert normalize({"Tags": "  news\n\tsports  "}).tags == ["news", "sports"]

    def test_text_field_with_attributes_uses_element_text(self) -> None:
        d = normalize({"ShortName": {"lang": "en", "src": "Example"}})
        assert d.short_name == "Example"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("false", False), ("FALSE", False), ("0", False), ("no", False), ("true", True), ("1", True), (True, True)],
    )
    def test_adult_content(self, value: Any, expected: bool) -> None:
        assert normalize({"AdultContent": value}).adult_content is expected

    def test_syndication_right_is_case_insensitive(self) -> None:
        assert normalize({"SyndicationRight": "LIMITED"}).syndication_right is SyndicationRight.LIMITED

    def test_unknown_syndication_right_falls_back_to_open(self) -> None:
        assert normalize({"SyndicationRight": "sometimes"}).syndication_right is SyndicationRight.OPEN

    def test_unknown_fields_pass_through(self) -> None:
        d = normalize({"SearchForm": "http://example.com/", "Query": {"role": "example", "searchTerms": "cat"}})
        assert d.model_extra == {"SearchForm": "http://example.com/"}
        assert d.query == {"role": "example", "searchTerms": "cat"}


# ── Images ────────────────────────────────────────────────────────────────────


class TestImages:
    def test_attributes_are_parsed(self) -> None:
        d = normalize({"Image": {"height": "16", "width": "32", "type": "image/png", "src": "http://a/i.png"}})
        image = d.images[0]
        assert (image.src, image.height, image.width, image.type) == ("http://a/i.png", 16, 32, "image/png")

    def test_missing_attributes_are_none(self) -> None:
        image = normalize({"Image": "http://a/i.png"}).images[0]
        assert image.src == "http://a/i.png"
        assert image.height is None
        assert image.width is None
        assert image.type is None

    def test_malformed_dimensions(self) -> None:
        image = normalize({"Image": {"height": "16px", "width": "wide", "src": "x"}}).images[0]
        assert image.height == 16
        assert image.width is None


# ── Urls ──────────────────────────────────────────────────────────────────────


class TestUrls:
    def test_defaults(self) -> None:
        url = normalize({"Url": {"template": "http://example.com/?q={searchTerms}"}}).urls[0]
        assert url.rel == "results"
        assert url.method == "get"
        assert url.index_offset == 1
        assert url.page_offset == 1
        assert url.params == {}
        assert url.type is None

    def test_explicit_attributes(self) -> None:
        url = normalize(
            {
                "Url": {
                    "template": "http://example.com/",
                    "type": "application/rss+xml",
                    "rel": "collection",
                    "indexOffset": "0",
                    "pageOffset": "2",
                    "method": "POST",
                }
            }
        ).urls[0]
        assert url.rel == "collection"
        assert url.index_offset == 0
        assert url.page_offset == 2
        assert url.method == "post"

    def test_empty_method_defaults_to_get(self) -> None:
        assert normalize({"Url": {"template": "http://a/", "method": ""}}).urls[0].method == "get"

    def test_unparseable_offset_defaults_to_one(self) -> None:
        assert normalize({"Url": {"template": "http://a/", "indexOffset": "first"}}).urls[0].index_offset == 1

    def test_single_param(self) -> None:
        url = normalize({"Url": {"template": "http://a/", "Param": {"name": "format", "value": "json"}}}).urls[0]
        assert url.params == {"format": "json"}

    def test_params_keep_declaration_order(self) -> None:
        url = normalize(
            {
                "Url": {
                    "template": "http://a/",
                    "Param": [
                        {"name": "q", "value": "{searchTerms}"},
                        {"name": "client", "value": "firefox"},
                        {"value": "orphan"},
                    ],
                }
            }
        ).urls[0]
        assert list(url.params.items()) == [("q", "{searchTerms}"), ("client", "firefox")]

    def test_param_without_value_is_empty(self) -> None:
        url = normalize({"Url": {"template": "http://a/", "Param": {"name": "q"}}}).urls[0]
        assert url.params == {"q": ""}

    def test_extra_url_attributes_pass_through(self) -> None:
        url = normalize({"Url": {"template": "http://a/", "resultDomain": "example.com"}}).urls[0]
        assert url.model_extra == {"resultDomain": "example.com"}

    def test_raw_tree_is_not_mutated(self) -> None:
        raw: dict[str, Any] = {"Url": {"template": "http://a/", "Param": {"name": "q", "value": "x"}}}
        normalize(raw)
        assert raw == {"Url": {"template": "http://a/", "Param": {"name": "q", "value": "x"}}}


# ── Parsed documents ──────────────────────────────────────────────────────────


class TestParsedDocuments:
    def test_opensearch_document(self, opensearch_xml: str) -> None:
        d = normalize(parse_xml(opensearch_xml)["OpenSearchDescription"])
        assert d.short_name == "Example"
        assert d.tags == ["news", "sports"]
        assert d.languages == ["en-us"]
        assert d.adult_content is False
        assert [u.type for u in d.urls] == ["text/html", "application/x-suggestions+json"]
        assert d.urls[1].rel == "suggestions"
        assert d.images[0].height == 16

    def test_searchplugin_document(self, searchplugin_xml: str) -> None:
        d = normalize(parse_xml(searchplugin_xml)["SearchPlugin"])
        assert d.short_name == "Mozilla Example"
        assert d.urls[0].method == "get"
        assert d.urls[0].params == {"q": "{searchTerms}", "format": "html"}


class TestParseInt:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [("16", 16), (" 16", 16), ("-1", -1), ("+3", 3), ("16px", 16), (7, 7), ("px16", None), ("", None)],
    )
    def test_parse_int(self, value: Any, expected: int | None) -> None:
        assert parse_int(value, None) == expected
