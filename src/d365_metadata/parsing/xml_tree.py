"""
XML to tree conversion for OData metadata

Builds a plain dict tree from the $metadata XML: namespaces are stripped,
attributes are merged into the element object, and an element that occurs
once under its parent is stored as an object while repeated ones become a list.
"""

import xml.etree.ElementTree as ET
from typing import Any, Dict, Union
import structlog

logger = structlog.get_logger(__name__)

TEXT_KEY = "_"

Node = Union[str, Dict[str, Any]]


class MetadataFormatError(Exception):
    """Metadata document is malformed or lacks required nodes"""
    pass


def strip_namespace(name: str) -> str:
    """Drop a ``{uri}`` or ``prefix:`` qualifier from a tag or attribute name"""
    if name.startswith("{"):
        name = name.split("}", 1)[1]
    return name.rsplit(":", 1)[-1]


def _add_value(target: Dict[str, Any], key: str, value: Any) -> None:
    # Second occurrence turns the slot into a list, later ones append to it
    if key not in target:
        target[key] = value
    elif isinstance(target[key], list):
        target[key].append(value)
    else:
        target[key] = [target[key], value]


def element_to_node(element: ET.Element) -> Node:
    """Convert one element (recursively) into its tree form"""
    node: Dict[str, Any] = {}

    for attr_name, attr_value in element.attrib.items():
        _add_value(node, strip_namespace(attr_name), attr_value)

    for child in element:
        _add_value(node, strip_namespace(child.tag), element_to_node(child))

    text = (element.text or "").strip()
    if not node:
        return text
    if text:
        node[TEXT_KEY] = text
    return node


def parse_metadata_xml(xml_text: Union[str, bytes]) -> Dict[str, Any]:
    """
    Parse $metadata XML into ``{root_name: root_node}``.

    Raises:
        MetadataFormatError: If the document is not well-formed XML
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise MetadataFormatError(f"Invalid metadata format: {e}") from e

    tree = {strip_namespace(root.tag): element_to_node(root)}
    logger.debug("Parsed metadata XML", root=strip_namespace(root.tag))
    return tree
