"""XML tree parser — Converts description documents into plain dict trees.

The tree shape is what the normalizer expects:
  - attributes are merged onto their element's dict
  - a child element appears under its local name; a repeated name becomes
    a list, a single occurrence stays a scalar
  - an element with neither attributes nor children collapses to its text
  - otherwise non-blank text is stored under ``TEXT_KEY``

Namespace prefixes are dropped, so Mozilla ``SearchPlugin`` documents that
use ``os:ShortName`` read the same as plain OpenSearch documents.
"""

from __future__ import annotations

from typing import Any

from lxml import etree

from opensearch_provider.exceptions import ParseError

TEXT_KEY = "src"


def _local_name(name: str) -> str:
    return etree.QName(name).localname


def _add(node: dict[str, Any], key: str, value: Any) -> None:
    if key not in node:
        node[key] = value
    elif isinstance(node[key], list):
        node[key].append(value)
    else:
        node[key] = [node[key], value]


def _convert(element: etree._Element) -> Any:
    children = [child for child in element if isinstance(child.tag, str)]
    # Character data is split across the element text and the tails of its children
    text = (element.text or "") + "".join(child.tail or "" for child in element)

    if not children and not element.attrib:
        return text

    node: dict[str, Any] = {}
    for name, value in element.attrib.items():
        _add(node, _local_name(name), value)
    for child in children:
        _add(node, _local_name(child.tag), _convert(child))
    if text.strip():
        _add(node, TEXT_KEY, text)
    return node


def parse_xml(data: str | bytes) -> dict[str, Any]:
    """Parse an XML document into a ``{root_name: tree}`` dict.

    Args:
        data: The document. ``str`` input is parsed as Unicode and its
            encoding declaration ignored; ``bytes`` honour the declaration.

    Returns:
        A single-key dict mapping the root element's local name to its tree.

    Raises:
        ParseError: If the document is not well-formed XML.
    """
    if isinstance(data, str):
        parser = etree.XMLParser(encoding="utf-8", resolve_entities=False, no_network=True)
        data = data.encode("utf-8")
    else:
        parser = etree.XMLParser(resolve_entities=False, no_network=True)

    try:
        root = etree.fromstring(data, parser=parser)
    except etree.XMLSyntaxError as e:
        raise ParseError(f"Invalid description document: {e}") from e

    return {_local_name(root.tag): _convert(root)}
