from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from lxml import etree

from courtside.ingestion.providers.base.errors import ProviderParseError


@dataclass(frozen=True)
class XmlDocument:
    root: etree._Element

    def iter_elements(self, tag: str) -> Iterator[etree._Element]:
        """All elements named ``tag`` (root included), in document order."""
        return self.root.iter(tag)


def element_text(parent: etree._Element, tag: str) -> str:
    """Trimmed text of the first ``tag`` child/descendant, '' when missing."""
    el = parent.find(f".//{tag}")
    if el is None or el.text is None:
        return ""
    return el.text.strip()


def element_int(parent: etree._Element, tag: str) -> int:
    """Integer value of ``tag``; 0 when missing or unparsable."""
    text = element_text(parent, tag)
    try:
        return int(text)
    except ValueError:
        return 0


def parse_xml_document(raw: str | bytes) -> XmlDocument:
    """
    Parse an XML payload, failing loudly on syntax errors.

    An empty body is also a parse failure rather than an empty result.
    """
    if isinstance(raw, str):
        if not raw.strip():
            raise ProviderParseError("Empty XML response.")
        data = raw.encode("utf-8")
    else:
        if not raw.strip():
            raise ProviderParseError("Empty XML response.")
        data = raw

    parser = etree.XMLParser(resolve_entities=False, no_network=True, recover=False)
    try:
        root = etree.fromstring(data, parser=parser)
    except etree.XMLSyntaxError as e:
        raise ProviderParseError(f"Failed to parse XML: {e}") from e

    if root is None:
        raise ProviderParseError("XML document has no root element.")

    return XmlDocument(root=root)
