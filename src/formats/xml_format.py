"""XML format handler.

Elements become mappings: attributes are collected under ``@attributes``,
direct text under ``#text``, and repeated child tags are grouped into a
sequence. Namespaced names keep the prefix declared in the document
(``p:item``); namespace declarations themselves are not kept. Serialized
output is not entity-escaped.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Any, Optional

from .base import FormatHandler
from .errors import ParseError
from .values import (
    ATTRIBUTES_KEY,
    RESERVED_KEYS,
    TEXT_KEY,
    Value,
    VMapping,
    VNull,
    VScalar,
    VSequence,
)

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
ROOT_TAG = "root"
ITEM_TAG = "item"
INDENT = "  "
XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


def _direct_text(element: ET.Element) -> str:
    """Return the last non-blank text fragment directly inside element."""
    fragments = [element.text] + [child.tail for child in element]
    text = ""
    for fragment in fragments:
        if fragment and fragment.strip():
            text = fragment.strip()
    return text


def _qualified_name(name: str, prefixes: dict[str, str]) -> str:
    """Turn ElementTree's ``{uri}local`` form back into ``prefix:local``."""
    if not name.startswith("{"):
        return name
    uri, _, local = name[1:].partition("}")
    prefix = prefixes.get(uri)
    return f"{prefix}:{local}" if prefix else local


def _parse_document(text: str) -> tuple[ET.Element, dict[str, str]]:
    """Parse markup, returning the root and a namespace URI to prefix map.

    Raises:
        ET.ParseError: If the markup is malformed or has no root element
    """
    parser = ET.XMLPullParser(events=("start-ns", "end"))
    parser.feed(text)
    parser.close()

    prefixes = {XML_NAMESPACE: "xml"}
    root = None
    for event, item in parser.read_events():
        if event == "start-ns":
            prefix, uri = item
            # First binding of a URI wins
            prefixes.setdefault(uri, prefix)
        else:
            root = item
    return root, prefixes


def element_to_value(
    element: ET.Element, prefixes: Optional[dict[str, str]] = None
) -> Value:
    """Convert an element and its descendants into a value tree.

    Args:
        element: Element to convert
        prefixes: Namespace URI to prefix map used to name namespaced
                  tags and attributes; unknown URIs keep only the local name
    """
    prefixes = prefixes or {XML_NAMESPACE: "xml"}
    text = _direct_text(element)
    children = list(element)

    if not element.attrib and not children:
        return VScalar(text) if text else VMapping()

    node = VMapping()
    if element.attrib:
        attributes = VMapping()
        for name, attr_value in element.attrib.items():
            attributes.set(_qualified_name(name, prefixes), VScalar(attr_value))
        node.set(ATTRIBUTES_KEY, attributes)
    if text:
        node.set(TEXT_KEY, VScalar(text))

    for child in children:
        child_value = element_to_value(child, prefixes)
        tag = _qualified_name(child.tag, prefixes)
        existing = node.get(tag)
        if existing is None:
            node.set(tag, child_value)
        elif isinstance(existing, VSequence):
            # Elements never parse to a sequence, so this is an earlier group.
            existing.append(child_value)
        else:
            node.set(tag, VSequence([existing, child_value]))

    return node


class XMLFormat(FormatHandler):
    """Convert between XML documents and value trees."""

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return ["xml"]

    def parse(self, text: str) -> Value:
        """Parse an XML document starting at its root element.

        Args:
            text: XML source text

        Returns:
            Value tree for the root element

        Raises:
            ParseError: If the markup is malformed or has no root element
        """
        try:
            root, prefixes = _parse_document(text)
        except ET.ParseError as e:
            raise ParseError(f"Invalid XML: {e}") from e
        logger.debug(f"Parsing XML document with root <{root.tag}>")
        return element_to_value(root, prefixes)

    def serialize(self, value: Value, metadata: dict[str, Any]) -> str:
        """Write the value tree under a ``<root>`` element.

        Returns:
            XML text with a declaration and 2-space indentation
        """
        if not isinstance(value, (VMapping, VSequence)):
            return f"{XML_DECLARATION}\n<{ROOT_TAG}>{self._leaf_text(value)}</{ROOT_TAG}>"

        if isinstance(value, VSequence):
            body = "".join(self._write_element(ITEM_TAG, item, 1) for item in value.items)
        else:
            body = self._write_children(value, 1)
        return f"{XML_DECLARATION}\n<{ROOT_TAG}>\n{body}</{ROOT_TAG}>"

    def _write_children(self, mapping: VMapping, depth: int) -> str:
        xml = ""
        for key, child in mapping.items():
            if key in RESERVED_KEYS:
                continue
            if isinstance(child, VSequence):
                for item in child.items:
                    xml += self._write_element(key, item, depth)
            else:
                xml += self._write_element(key, child, depth)
        return xml

    def _write_element(self, tag: str, value: Value, depth: int) -> str:
        spaces = INDENT * depth
        if isinstance(value, VMapping):
            return f"{spaces}<{tag}>\n{self._write_children(value, depth + 1)}{spaces}</{tag}>\n"
        if isinstance(value, VSequence):
            inner = "".join(self._write_element(ITEM_TAG, item, depth + 1) for item in value.items)
            return f"{spaces}<{tag}>\n{inner}{spaces}</{tag}>\n"
        return f"{spaces}<{tag}>{self._leaf_text(value)}</{tag}>\n"

    @staticmethod
    def _leaf_text(value: Value) -> str:
        if isinstance(value, VNull):
            return ""
        return str(value)
