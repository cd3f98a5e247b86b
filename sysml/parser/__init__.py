"""
SysML-lite Parser Package

Implements a keyword-dispatched recursive descent parser for the SysML v2
subset and the AST it produces.

Key Features:
- One rule per element kind (package, part, attribute, port, connection,
  requirement, use case) plus a generic skip-to-';' fallback
- Open property bags with "absent means unspecified" semantics
- Stop-on-first-error with the partial tree returned and the error logged

Author: xwest
"""

from .ast_nodes import (
    ASTNode, ASTVisitor, NodeType, Properties, SourceSpan, count_elements
)
from .parser import Parser, parse_tokens, parse_string, parse_file
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser",
    "parse_tokens",
    "parse_string",
    "parse_file",

    # AST nodes
    "ASTNode", "ASTVisitor", "NodeType", "Properties", "SourceSpan",
    "count_elements",

    # Error handling
    "ParseError",
]
