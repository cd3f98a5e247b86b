"""
Token definitions for the SysML-lite lexer.

This module defines the token types produced by the lexer:
- Keywords (the fixed SysML v2 subset below)
- Identifiers
- Literals (strings, numbers)
- Operators and punctuation
- Comments (kept in the stream for IDE features)

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any


class TokenType(Enum):
    """
    Enumeration of all token types in SysML-lite.

    The lexer only knows these broad categories; the parser tells keywords
    apart by their value.
    """

    KEYWORD = auto()                # package, part, attribute, ...
    IDENTIFIER = auto()             # Vehicle, mass, _tmp1
    STRING = auto()                 # "text", 'text'
    NUMBER = auto()                 # 1500.0, 42
    OPERATOR = auto()               # = < > ! + - * /
    PUNCTUATION = auto()            # { } ( ) ; : , .
    COMMENT = auto()                # // line, /* block */
    EOF = auto()                    # End of input


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source text.

    Line and column are 1-based, offset is the 0-based character index.
    """
    filename: str
    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token.

    Contains the token type, lexeme (raw text), decoded value and the
    location of the token's first character.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any                      # str for textual kinds, float for NUMBER, None for EOF
    location: SourceLocation

    def __str__(self) -> str:
        if self.value is not None and self.value != self.lexeme:
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    @property
    def kind(self) -> TokenType:
        """Alias of ``type``."""
        return self.type

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a keyword."""
        return self.type == TokenType.KEYWORD

    @property
    def is_identifier(self) -> bool:
        """Check if this token is an identifier."""
        return self.type == TokenType.IDENTIFIER

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.type in (TokenType.STRING, TokenType.NUMBER)


# Lookup tables used by the lexer

# Reserved words, case-sensitive
KEYWORDS = frozenset({
    # Structure
    "package", "part", "attribute", "port", "connection", "interface",
    "block",

    # Requirements and behaviour
    "requirement", "constraint", "activity", "state", "transition",
    "use", "case", "actor", "subject", "stakeholder", "concern",

    # Views
    "view", "viewpoint", "rendering", "expose", "import",

    # Modifiers
    "private", "protected", "public", "abstract", "readonly", "derived",
    "end", "redefines", "specializes", "conjugates",
})

PUNCTUATION = frozenset("{}();:,.")

OPERATORS = frozenset("=<>!+-*/")

QUOTES = frozenset("\"'")

DIGITS = frozenset("0123456789")

IDENTIFIER_START = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_")

IDENTIFIER_CONTINUE = IDENTIFIER_START | DIGITS

BYTE_ORDER_MARK = "\ufeff"
