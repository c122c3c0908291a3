"""
Generic XML Tree

Converts SEC EDGAR XML documents (e.g. NPORT-P primary_doc.xml) into plain
nested dicts/lists/strings so that field lookup can tolerate the naming
differences between filers.

Tree shape:
- {root_tag: root_value}
- Tag names are lower-cased with namespace prefixes stripped
- Attributes are merged into the same dict as child elements
- A leaf element with no attributes becomes its (stripped) text
- Text inside an element that also has attributes/children is kept under "_"
- A child tag seen once is a single value; a repeated tag becomes a list
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from bs4 import BeautifulSoup, Tag
from bs4.element import CData, NavigableString, PreformattedString
from lxml import etree

logger = logging.getLogger(__name__)

TEXT_KEY = "_"

Tree = Union[Dict[str, Any], List[Any], str]


class XMLTreeError(ValueError):
    """Raised when a document cannot be turned into a tree."""


def parse_xml(markup: Union[str, bytes]) -> Dict[str, Any]:
    """
    Parse XML markup into a generic tree.

    Args:
        markup: Raw XML document

    Returns:
        Dictionary with a single key (the root tag name)

    Raises:
        XMLTreeError: If the markup is not well-formed XML
    """
    check_well_formed(markup)

    soup = BeautifulSoup(markup, 'xml')

    root = next((child for child in soup.contents if isinstance(child, Tag)), None)
    if root is None:
        raise XMLTreeError("Document has no root element")

    return {_tag_name(root): _convert(root)}


def check_well_formed(markup: Union[str, bytes]) -> None:
    """
    Reject markup that is not well-formed XML.

    BeautifulSoup's xml builder recovers from broken markup, so truncated
    downloads and HTML error pages are caught here with a strict lxml parse.

    Raises:
        XMLTreeError: On any XML syntax error, including an empty document
    """
    data = markup.encode("utf-8") if isinstance(markup, str) else markup
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        etree.fromstring(data, parser)
    except etree.XMLSyntaxError as e:
        raise XMLTreeError(f"Malformed XML document: {e}") from e


def _tag_name(tag: Tag) -> str:
    """Lower-case tag name without namespace prefix."""
    return tag.name.split(":")[-1].lower()


def _is_text(node) -> bool:
    # Comments, doctypes and processing instructions are PreformattedStrings too
    if isinstance(node, CData):
        return True
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def _add(obj: Dict[str, Any], key: str, value: Any) -> None:
    """Store value under key, turning repeated keys into a list."""
    if key not in obj:
        obj[key] = value
    elif isinstance(obj[key], list):
        obj[key].append(value)
    else:
        obj[key] = [obj[key], value]


def _convert(tag: Tag) -> Tree:
    obj: Dict[str, Any] = {}

    for attr, value in tag.attrs.items():
        if isinstance(value, list):
            value = " ".join(value)
        _add(obj, str(attr), str(value))

    text_parts = []
    for child in tag.children:
        if isinstance(child, Tag):
            _add(obj, _tag_name(child), _convert(child))
        elif _is_text(child):
            text_parts.append(str(child))

    text = "".join(text_parts).strip()

    if not obj:
        return text
    if text:
        obj[TEXT_KEY] = text
    return obj


def resolve(node: Any, *paths: str) -> Optional[Any]:
    """
    Return the value of the first key-path that is present.

    Paths are dotted ("issuer.name"). A missing or non-dict intermediate
    level makes that path absent. Empty values ("", {}, []) count as absent.

    Example:
        resolve(inv, "identifiers.ticker", "ticker", "Ticker")
    """
    for path in paths:
        current = node
        for key in path.split("."):
            if not isinstance(current, dict):
                current = None
                break
            current = current.get(key)
        if current:
            return current
    return None


def as_list(value: Any) -> List[Any]:
    """Wrap a lone occurrence of a repeatable element into a list."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def scalar_text(value: Any) -> str:
    """
    Text content of a resolved value.

    EDGAR writes some identifiers as attributes (<ticker value="AAPL"/>),
    so a dict falls back to its "value" attribute, then its text.
    """
    if value is None:
        return ""
    if isinstance(value, dict):
        return str(value.get("value") or value.get(TEXT_KEY) or "")
    if isinstance(value, list):
        return ",".join(scalar_text(item) for item in value)
    return str(value)


def iter_entries(value: Any) -> Iterable[Dict[str, Any]]:
    """Yield the dict entries of a repeatable element, skipping stray text."""
    for entry in as_list(value):
        if isinstance(entry, dict):
            yield entry
        else:
            logger.debug(f"Skipping non-element entry: {entry!r}")
