"""Description normalizer — Turns a parsed XML tree into a ``Description``.

Parsed description trees are loosely shaped: an element that occurs once is
a scalar rather than a one-item list, attributes are optional strings and a
text-only element may arrive as a dict when it carries attributes. This
module applies the OpenSearch 1.1 defaults and coerces every field into the
shape ``Description`` guarantees, so nothing downstream has to re-check.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from opensearch_provider.core.parser import TEXT_KEY
from opensearch_provider.models.description import Description, SyndicationRight

logger = logging.getLogger(__name__)

ARRAY_FIELDS = ("Image", "InputEncoding", "Language", "OutputEncoding", "Url")
_TEXT_FIELDS = ("ShortName", "LongName", "Description", "Contact", "Developer", "Attribution")
_FALSE_VALUES = frozenset({"", "false", "0", "no"})
_INT_RE = re.compile(r"\s*([+-]?\d+)")


def _default_tree() -> dict[str, Any]:
    """Build the default skeleton (a fresh copy per call)."""
    return {
        "ShortName": "",
        "Description": "",
        "Tags": [],
        "Contact": "",
        "Url": [],
        "LongName": "",
        "Image": [],
        "Query": None,
        "Developer": "",
        "Attribution": "",
        "SyndicationRight": "open",
        "AdultContent": False,
        "Language": ["*"],
        "OutputEncoding": ["UTF-8"],
        "InputEncoding": ["UTF-8"],
    }


def parse_int(value: Any, default: int | None) -> int | None:
    """Parse the leading integer of an attribute value.

    Leading whitespace and a sign are accepted and trailing characters
    ignored, so ``"16px"`` parses as 16. Returns *default* when no digits
    lead the value.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    match = _INT_RE.match(str(value))
    return int(match.group(1)) if match else default


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, list) else [value]


def _text(value: Any) -> str:
    if isinstance(value, Mapping):
        return str(value.get(TEXT_KEY, ""))
    if isinstance(value, list):
        return _text(value[0]) if value else ""
    return "" if value is None else str(value)


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return _text(value).strip().lower() not in _FALSE_VALUES


def _syndication_right(value: Any) -> SyndicationRight:
    try:
        return SyndicationRight(_text(value).strip().lower())
    except ValueError:
        logger.debug("Unknown SyndicationRight %r, using 'open'", value)
        return SyndicationRight.OPEN


def _tags(value: Any) -> list[str]:
    if isinstance(value, str):
        return value.split()
    tags: list[str] = []
    for item in _as_list(value):
        tags.extend(_text(item).split())
    return tags


def _normalize_image(item: Any) -> dict[str, Any]:
    image = dict(item) if isinstance(item, Mapping) else {TEXT_KEY: _text(item)}
    image["height"] = parse_int(image["height"], None) if "height" in image else None
    image["width"] = parse_int(image["width"], None) if "width" in image else None
    image["type"] = image.get("type") or None
    image.setdefault(TEXT_KEY, "")
    return image


def _normalize_params(value: Any) -> dict[str, str]:
    params: dict[str, str] = {}
    for param in _as_list(value):
        if not isinstance(param, Mapping) or "name" not in param:
            logger.debug("Skipping Param without a name: %r", param)
            continue
        params[str(param["name"])] = _text(param.get("value", ""))
    return params


def _normalize_url(item: Any) -> dict[str, Any]:
    url = dict(item) if isinstance(item, Mapping) else {"template": _text(item)}
    url["rel"] = url["rel"] if "rel" in url else "results"
    url["indexOffset"] = parse_int(url["indexOffset"], 1) if "indexOffset" in url else 1
    url["pageOffset"] = parse_int(url["pageOffset"], 1) if "pageOffset" in url else 1

    # Mozilla Param extension
    url["method"] = str(url.get("method") or "").lower() or "get"
    url["Param"] = _normalize_params(url["Param"]) if "Param" in url else {}
    return url


def normalize(raw: Mapping[str, Any]) -> Description:
    """Normalize a parsed description tree.

    Args:
        raw: The ``OpenSearchDescription`` (or ``SearchPlugin``) node of a
            tree produced by :func:`~opensearch_provider.core.parser.parse_xml`
            or built by hand with the same shape.

    Returns:
        The canonical ``Description``. Unknown fields are kept as extras.

    Raises:
        TypeError: If *raw* is not a mapping.
    """
    if not isinstance(raw, Mapping):
        raise TypeError(f"Description tree must be a mapping, got {type(raw).__name__}")

    tree = _default_tree()
    tree.update(raw)

    for name in _TEXT_FIELDS:
        tree[name] = _text(tree[name])
    tree["Tags"] = _tags(tree["Tags"])
    tree["AdultContent"] = _as_bool(tree["AdultContent"])
    tree["SyndicationRight"] = _syndication_right(tree["SyndicationRight"])

    for name in ARRAY_FIELDS:
        tree[name] = _as_list(tree[name])

    tree["Image"] = [_normalize_image(image) for image in tree["Image"]]
    tree["Url"] = [_normalize_url(url) for url in tree["Url"]]
    for name in ("InputEncoding", "Language", "OutputEncoding"):
        tree[name] = [_text(value) for value in tree[name]]

    return Description.model_validate(tree)
