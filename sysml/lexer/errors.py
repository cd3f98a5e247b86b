"""
Diagnostics for the SysML-lite lexer.

The lexer is a total function: malformed input never raises. Anything the
lexer had to guess about is recorded as a warning with source location
information so tools can still point at it.

Author: xwest
"""

from typing import Optional, List
from dataclasses import dataclass

from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """Base record for diagnostics (errors, warnings, info)."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning", "info", "hint"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerWarning:
    """
    Represents degraded lexical input that was tokenized on a best-effort basis.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="warning",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    @property
    def message(self) -> str:
        return self.diagnostic.message

    def __str__(self) -> str:
        return str(self.diagnostic)


# Warning codes
WARNING_CODES = {
    "L001": "Unterminated string literal",
    "L002": "Unterminated block comment",
    "L003": "Malformed numeric literal",
}


def create_unterminated_string_warning(quote: str, location: SourceLocation) -> LexerWarning:
    """Create a warning for a string literal that runs to end of input."""
    return LexerWarning(
        message="Unterminated string literal",
        location=location,
        code="L001",
        help_text=f"String literals must be closed with a matching {quote} quote.",
        suggestions=[f"Add a closing {quote} quote", "Check for escaped quotes in the string"]
    )


def create_unterminated_comment_warning(location: SourceLocation) -> LexerWarning:
    """Create a warning for a block comment missing its closing delimiter."""
    return LexerWarning(
        message="Unterminated block comment",
        location=location,
        code="L002",
        help_text="The comment runs to the end of the input.",
        suggestions=["Add a closing '*/'"]
    )


def create_malformed_number_warning(lexeme: str, location: SourceLocation) -> LexerWarning:
    """Create a warning for a numeric literal that does not parse as a float."""
    return LexerWarning(
        message=f"Malformed numeric literal: '{lexeme}'",
        location=location,
        code="L003",
        help_text="The literal was read as NaN.",
        suggestions=["Use at most one decimal point"]
    )
