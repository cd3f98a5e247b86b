"""
AST serialization: JSON-compatible dicts for SysML-lite trees.

Each node becomes ``{"type": ..., "properties": {...}, "children": [...]}``
with canonical property keys. Spans are not serialized.

NaN and infinite property values (a malformed number lexes to NaN) have no
JSON spelling, so they are written as ``{"$float": "nan" | "inf" | "-inf"}``
and turned back into floats on load. NaN always loads as ``math.nan``.

Example:
    from sysml import parse_string
    from sysml.serialization import to_json, from_json

    root = parse_string("package P { part A; }")
    assert from_json(to_json(root)) == root
"""

import json
import math
from typing import Any, Dict, Optional

from .parser.ast_nodes import ASTNode, NodeType


FLOAT_TAG = "$float"

_NON_FINITE = {
    "nan": math.nan,
    "inf": math.inf,
    "-inf": -math.inf,
}


def _encode_value(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return {FLOAT_TAG: "nan"}
        return {FLOAT_TAG: "inf" if value > 0 else "-inf"}
    return value


def _decode_value(value: Any) -> Any:
    if isinstance(value, dict) and set(value) == {FLOAT_TAG}:
        try:
            return _NON_FINITE[value[FLOAT_TAG]]
        except KeyError:
            raise ValueError(f"Unknown {FLOAT_TAG} value: {value[FLOAT_TAG]!r}") from None
    return value


def to_dict(node: ASTNode) -> Dict[str, Any]:
    """Convert a node and its subtree to plain dicts and lists."""
    return {
        "type": node.type.value,
        "properties": {key: _encode_value(value) for key, value in node.properties.items()},
        "children": [to_dict(child) for child in node.children],
    }


def from_dict(data: Dict[str, Any]) -> ASTNode:
    """
    Rebuild a tree from ``to_dict`` output.

    Raises:
        ValueError: If a node has an unknown type or a bad ``$float`` tag
        KeyError: If a node has no type
    """
    properties = {key: _decode_value(value) for key, value in (data.get("properties") or {}).items()}
    node = ASTNode(NodeType(data["type"]), properties)
    for child in data.get("children", ()):
        node.add_child(from_dict(child))
    return node


def to_json(node: ASTNode, indent: Optional[int] = None) -> str:
    """Serialize a tree to strict JSON with sorted keys."""
    return json.dumps(to_dict(node), indent=indent, sort_keys=True, allow_nan=False)


def from_json(text: str) -> ASTNode:
    """Deserialize a tree from ``to_json`` output."""
    return from_dict(json.loads(text))
