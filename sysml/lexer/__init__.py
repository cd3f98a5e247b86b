"""
SysML-lite Lexer Package

Implements the character-level tokenizer for the SysML v2 subset.

Key Features:
- Fixed, case-sensitive keyword set
- Single- and double-quoted strings with backslash escapes
- Line and block comments kept as COMMENT tokens
- 1-based line/column tracking for every token
- Never raises; degraded input is reported as warnings

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation, KEYWORDS
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import Diagnostic, LexerWarning

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "KEYWORDS",
    "Diagnostic",
    "LexerWarning",
    "tokenize_string",
    "tokenize_file",
]
