"""
Error handling for the SysML-lite parser.

A ParseError is raised by the grammar rules and unwinds to the single
recovery boundary in Parser.parse(), where it is logged and recorded.

Author: xwest
"""

from typing import Optional, List

from ..lexer.tokens import Token, TokenType, SourceLocation
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception raised when the parser meets a token the grammar cannot accept.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
        self.token = token

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


# Parser error codes
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P002": "Unexpected end of input",
    "P003": "Unexpected closing delimiter",
    "P004": "Nesting too deep",
}

# Suggestions keyed by the punctuation the grammar wanted
_MISSING_TOKEN_SUGGESTIONS = {
    "}": ["Add a closing brace '}'"],
    "{": ["Add an opening brace '{' to start a body"],
}


def describe_expected(token_type: TokenType, value: Optional[str] = None) -> str:
    """Render an expected token as e.g. PUNCTUATION '}'."""
    if value is not None:
        return f"{token_type.name} '{value}'"
    return token_type.name


def describe_found(token: Optional[Token]) -> str:
    """Render the token actually found, or EOF."""
    if token is None or token.type == TokenType.EOF:
        return "EOF"
    return f"{token.type.name} '{token.value}'"


def create_unexpected_token_error(
    token_type: TokenType,
    value: Optional[str],
    found: Optional[Token],
    eof_location: SourceLocation
) -> ParseError:
    """Create the error raised by expect() on a mismatch."""
    expected_str = describe_expected(token_type, value)
    found_str = describe_found(found)
    at_eof = found_str == "EOF"

    return ParseError(
        message=f"Expected {expected_str} but got {found_str}",
        location=found.location if found is not None else eof_location,
        token=found,
        code="P002" if at_eof else "P001",
        help_text=(f"The input ended while {expected_str} was still required." if at_eof
                   else f"The parser expected to see {expected_str} at this position."),
        suggestions=_MISSING_TOKEN_SUGGESTIONS.get(value, [])
    )


def create_stray_token_error(found: Token) -> ParseError:
    """Create an error for a top-level token that no rule can consume."""
    return ParseError(
        message=f"Unexpected {describe_found(found)} at top level",
        location=found.location,
        token=found,
        code="P003",
        help_text="This token does not close any open body.",
        suggestions=["Remove the extra closing brace"]
    )


def create_nesting_error(
    found: Optional[Token],
    location: SourceLocation,
    limit: Optional[int] = None
) -> ParseError:
    """Create an error for a body nested deeper than the parser (or the interpreter stack) allows."""
    message = f"Nesting deeper than {limit} levels" if limit is not None else "Nesting too deep"
    return ParseError(
        message=message,
        location=found.location if found is not None else location,
        token=found,
        code="P004",
        help_text="Element bodies are parsed recursively and the nesting limit was reached.",
        suggestions=["Split the model into flatter packages"]
    )
