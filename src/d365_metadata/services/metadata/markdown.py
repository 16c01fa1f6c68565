"""
Markdown rendering of entity descriptors

Section order is fixed: Keys, Properties, Navigation Properties.
"""

from typing import Any, Dict, List


def _nullable_tag(prop: Dict[str, Any]) -> str:
    return "_[Nullable]_" if prop.get("nullable") else "_[Not Nullable]_"


def render_entity_markdown(entity: Dict[str, Any]) -> str:
    lines: List[str] = [f"# Entity: {entity.get('name')}", "", "## Keys"]
    lines.extend(f"- {key}" for key in entity.get("keys", []))

    lines.extend(["", "## Properties"])
    lines.extend(
        f"- **{prop.get('name')}** ({prop.get('type')}) {_nullable_tag(prop)}"
        for prop in entity.get("properties", [])
    )

    lines.extend(["", "## Navigation Properties"])
    navigation = entity.get("navigationProperties", [])
    if navigation:
        lines.extend(f"- **{nav.get('name')}** → {nav.get('type')}" for nav in navigation)
    else:
        lines.append("- None")

    return "\n".join(lines) + "\n"
