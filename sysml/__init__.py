"""
SysML-lite

A small text-to-tree front end for a subset of the SysML v2 textual
notation: packages, parts, attributes, ports, connections, requirements and
use cases.

Architecture:
    sysml/
    ├── lexer/           # Tokenization
    ├── parser/          # Recursive descent parsing and the AST
    ├── serialization.py # AST <-> JSON
    └── cli.py           # sysml-parse command

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__email__ = "dev@neuralscript.org"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenType, tokenize_string, tokenize_file
from .parser import (
    Parser, ASTNode, NodeType, ParseError, parse_tokens, parse_string, parse_file
)

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "Token",
    "TokenType",
    "ASTNode",
    "NodeType",
    "ParseError",

    # Convenience functions
    "tokenize_string",
    "tokenize_file",
    "parse_tokens",
    "parse_string",
    "parse_file",

    # Version info
    "__version__",
    "__author__",
    "__email__",
    "__license__",
]
