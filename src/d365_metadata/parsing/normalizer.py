"""
Metadata normalization

Flattens the parsed $metadata tree into the JSON entity description:

    {"entities": [{"name", "keys", "properties", "navigationProperties"}]}
"""

from typing import Any, Dict, List, Optional
import structlog

from .xml_tree import MetadataFormatError

logger = structlog.get_logger(__name__)

MISSING_SCHEMA_MESSAGE = "Invalid metadata format: Missing Schema."

# Precedence for the annotation value
ANNOTATION_VALUE_ATTRIBUTES = ("String", "Bool", "EnumMember")


def as_list(value: Any) -> List[Any]:
    """Treat an absent node, a single node or a list of nodes as a list"""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _attr(node: Any, name: str) -> Optional[Any]:
    if isinstance(node, dict):
        return node.get(name)
    return None


def _root_node(tree: Dict[str, Any]) -> Any:
    if "Edmx" in tree:
        return tree["Edmx"]
    if len(tree) == 1:
        return next(iter(tree.values()))
    return None


def extract_annotations(annotation_node: Any) -> List[Dict[str, Any]]:
    annotations = []
    for annotation in as_list(annotation_node):
        value = ""
        for attribute in ANNOTATION_VALUE_ATTRIBUTES:
            candidate = _attr(annotation, attribute)
            if candidate is not None:
                value = candidate
                break
        annotations.append({"term": _attr(annotation, "Term"), "value": value})
    return annotations


def extract_key_properties(key_node: Any) -> List[Any]:
    return [_attr(ref, "Name") for ref in as_list(_attr(key_node, "PropertyRef"))]


def extract_properties(property_node: Any) -> List[Dict[str, Any]]:
    return [
        {
            "name": _attr(prop, "Name"),
            "type": _attr(prop, "Type"),
            "nullable": _attr(prop, "Nullable") == "true",
            "annotations": extract_annotations(_attr(prop, "Annotation")),
        }
        for prop in as_list(property_node)
    ]


def extract_navigation_properties(navigation_node: Any) -> List[Dict[str, Any]]:
    return [
        {"name": _attr(nav, "Name"), "type": _attr(nav, "Type")}
        for nav in as_list(navigation_node)
    ]


def normalize_entity(entity_type: Any) -> Dict[str, Any]:
    """Build the descriptor of a single EntityType node"""
    return {
        "name": _attr(entity_type, "Name"),
        "keys": extract_key_properties(_attr(entity_type, "Key")),
        "properties": extract_properties(_attr(entity_type, "Property")),
        "navigationProperties": extract_navigation_properties(
            _attr(entity_type, "NavigationProperty")
        ),
    }


def normalize_metadata(tree: Dict[str, Any]) -> Dict[str, List[Dict[str, Any]]]:
    """
    Convert a parsed metadata tree into ``{"entities": [...]}``.

    Entities are emitted in document order, schema by schema. Navigation
    targets are not checked against the declared entities.

    Raises:
        MetadataFormatError: If ``DataServices.Schema`` is not present under the root
    """
    schemas = _attr(_attr(_root_node(tree), "DataServices"), "Schema")
    if not schemas:
        raise MetadataFormatError(MISSING_SCHEMA_MESSAGE)

    entities: List[Dict[str, Any]] = []
    seen: Dict[str, Optional[str]] = {}

    for schema in as_list(schemas):
        namespace = _attr(schema, "Namespace")
        for entity_type in as_list(_attr(schema, "EntityType")):
            entity = normalize_entity(entity_type)
            name = entity["name"]

            if isinstance(name, str):
                folded = name.lower()
                if folded in seen:
                    logger.warning("Duplicate entity name in metadata",
                                   entity_name=name,
                                   first_namespace=seen[folded],
                                   duplicate_namespace=namespace)
                else:
                    seen[folded] = namespace

            entities.append(entity)

    logger.info("Metadata normalized",
                schemas=len(as_list(schemas)),
                entities=len(entities))
    return {"entities": entities}
