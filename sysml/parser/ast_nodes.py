"""
Abstract Syntax Tree node definitions for SysML-lite.

Every grammar production produces one ``ASTNode`` tagged with a ``NodeType``.
Node-specific data lives in an open ``properties`` mapping; a key is only
present when the corresponding optional syntax appeared in the source.

Valid property keys per node type:

    package      name
    part         name, specializes
    attribute    name, propType, defaultValue
    port         name, propType
    connection   name, fromRef, toRef
    requirement  name
    usecase      name
    generic      name
    root         (none)

Author: xwest
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple
from dataclasses import dataclass
from enum import Enum

from ..lexer.tokens import SourceLocation


class NodeType(str, Enum):
    """Enumeration of all AST node types."""

    ROOT = "root"
    PACKAGE = "package"
    PART = "part"
    ATTRIBUTE = "attribute"
    PORT = "port"
    CONNECTION = "connection"
    REQUIREMENT = "requirement"
    USECASE = "usecase"
    GENERIC = "generic"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SourceSpan:
    """Represents a span of source text (start and end locations)."""
    start: SourceLocation
    end: SourceLocation

    def __str__(self) -> str:
        if self.start.filename == self.end.filename:
            return f"{self.start.filename}:{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"
        return f"{self.start}-{self.end}"


class Properties(dict):
    """
    Property bag of an AST node.

    Keys are stored under their canonical names. The short spellings
    ``type``, ``from`` and ``to`` are accepted for ``propType``, ``fromRef``
    and ``toRef``.
    """

    ALIASES: Dict[str, str] = {
        "type": "propType",
        "from": "fromRef",
        "to": "toRef",
    }

    def __init__(self, *args, **kwargs):
        super().__init__()
        self.update(*args, **kwargs)

    @classmethod
    def canonical(cls, key: str) -> str:
        return cls.ALIASES.get(key, key)

    def __setitem__(self, key: str, value: Any):
        super().__setitem__(self.canonical(key), value)

    def __getitem__(self, key: str) -> Any:
        return super().__getitem__(self.canonical(key))

    def __contains__(self, key: object) -> bool:
        if isinstance(key, str):
            key = self.canonical(key)
        return super().__contains__(key)

    def __delitem__(self, key: str):
        super().__delitem__(self.canonical(key))

    def get(self, key: str, default: Any = None) -> Any:
        return super().get(self.canonical(key), default)

    def pop(self, key: str, *default: Any) -> Any:
        return super().pop(self.canonical(key), *default)

    def setdefault(self, key: str, default: Any = None) -> Any:
        return super().setdefault(self.canonical(key), default)

    def update(self, *args, **kwargs):
        for key, value in dict(*args, **kwargs).items():
            self[key] = value

    def copy(self) -> "Properties":
        return Properties(self)


class ASTNode:
    """
    A node of the syntax tree.

    Nodes are built by a single parse routine and left alone once that
    routine returns. Children are kept in source order and there are no
    parent references.
    """

    def __init__(
        self,
        node_type: NodeType,
        properties: Optional[Dict[str, Any]] = None,
        span: Optional[SourceSpan] = None
    ):
        self.type = NodeType(node_type)
        self.properties = Properties(properties or {})
        self.children: List['ASTNode'] = []
        self.span = span

    def add_child(self, child: 'ASTNode') -> 'ASTNode':
        """Append a child node and return self."""
        self.children.append(child)
        return self

    @property
    def name(self) -> Optional[str]:
        return self.properties.get("name")

    @property
    def key(self) -> Tuple[NodeType, Optional[str]]:
        """
        Coarse identity used by viewers for selection.

        Two distinct nodes with the same type and name share a key.
        """
        return (self.type, self.name)

    def same_element(self, other: Optional['ASTNode']) -> bool:
        """Check whether ``other`` has the same (type, name) key."""
        return other is not None and self.key == other.key

    def walk(self) -> Iterator['ASTNode']:
        """Yield this node and all of its descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def accept(self, visitor: 'ASTVisitor') -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    def __eq__(self, other) -> bool:
        """Deep structural equality over type, properties and children."""
        if not isinstance(other, ASTNode):
            return NotImplemented
        return (self.type == other.type and
                dict(self.properties) == dict(other.properties) and
                self.children == other.children)

    __hash__ = None

    def __str__(self) -> str:
        if self.name is not None:
            return f"{self.type.value} {self.name}"
        return self.type.value

    def __repr__(self) -> str:
        return (f"ASTNode({self.type.value!r}, {dict(self.properties)!r}, "
                f"children={len(self.children)})")


class ASTVisitor:
    """
    Visitor base for traversing AST nodes.

    ``visit`` dispatches to ``visit_<type>`` (for example ``visit_part``)
    and falls back to ``generic_visit``, which visits the children.
    """

    def visit(self, node: ASTNode) -> Any:
        method = getattr(self, f"visit_{node.type.value}", self.generic_visit)
        return method(node)

    def generic_visit(self, node: ASTNode) -> Any:
        for child in node.children:
            self.visit(child)


def count_elements(root: ASTNode) -> int:
    """Count the nodes below ``root`` (the root itself is not counted)."""
    return sum(1 for _ in root.walk()) - 1
