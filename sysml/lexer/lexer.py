"""
SysML-lite Lexer - turns model source text into tokens

Single forward scan with one character of lookahead. The lexer never
raises: unterminated strings and comments or odd numbers still produce a
token, and a warning is recorded for them instead.

xwest
"""

import math
import os
from typing import List, Union

from .tokens import (
    Token, TokenType, SourceLocation, KEYWORDS, PUNCTUATION, OPERATORS,
    QUOTES, DIGITS, IDENTIFIER_START, IDENTIFIER_CONTINUE, BYTE_ORDER_MARK
)
from .errors import (
    Diagnostic, LexerWarning, create_unterminated_string_warning,
    create_unterminated_comment_warning, create_malformed_number_warning
)
from ..utils.logger import get_logger


logger = get_logger(__name__)


class Lexer:
    """
    SysML-lite lexical analyzer.

    Converts source text into a list of tokens terminated by exactly one
    EOF token. Comments are kept in the output as COMMENT tokens.
    """

    def __init__(self, source: str, filename: str = "<unknown>"):
        """
        Initialize the lexer with source text.

        Args:
            source: Source text
            filename: Name of source file for diagnostics
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []
        self.warnings: List[LexerWarning] = []

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source.

        Returns:
            List of tokens, the last one being the only EOF token
        """
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens = []
        self.warnings = []

        while True:
            self._skip_whitespace()
            token = self._next_token()
            self.tokens.append(token)
            if token.type == TokenType.EOF:
                break

        return self.tokens

    def _next_token(self) -> Token:
        """Scan the token starting at the current position."""
        location = self._location()

        if self.pos >= len(self.source):
            return Token(TokenType.EOF, "", None, location)

        current_char = self.source[self.pos]

        # Comments
        if current_char == '/' and self._peek() == '/':
            return self._tokenize_line_comment(location)
        if current_char == '/' and self._peek() == '*':
            return self._tokenize_block_comment(location)

        # String literals, either quote style
        if current_char in QUOTES:
            return self._tokenize_string(location)

        if current_char in DIGITS:
            return self._tokenize_number(location)

        # Identifiers and keywords
        if current_char in IDENTIFIER_START:
            return self._tokenize_identifier_or_keyword(location)

        if current_char in PUNCTUATION:
            self._advance()
            return Token(TokenType.PUNCTUATION, current_char, current_char, location)

        if current_char in OPERATORS:
            self._advance()
            return Token(TokenType.OPERATOR, current_char, current_char, location)

        # Anything else becomes a one-character identifier
        self._advance()
        return Token(TokenType.IDENTIFIER, current_char, current_char, location)

    def _tokenize_line_comment(self, location: SourceLocation) -> Token:
        """Tokenize a // comment. The newline is left for the whitespace skipper."""
        start_pos = self.pos

        while self.pos < len(self.source) and self.source[self.pos] != '\n':
            self._advance()

        lexeme = self.source[start_pos:self.pos]
        return Token(TokenType.COMMENT, lexeme, lexeme, location)

    def _tokenize_block_comment(self, location: SourceLocation) -> Token:
        """Tokenize a /* */ comment; the value excludes both delimiters."""
        start_pos = self.pos
        self._advance_by(2)  # Skip /*

        value_parts = []

        while (self.pos < len(self.source) and
               not (self.source[self.pos] == '*' and self._peek() == '/')):
            value_parts.append(self.source[self.pos])
            self._advance()

        if self.pos < len(self.source):
            self._advance_by(2)  # Skip */
        else:
            self._warn(create_unterminated_comment_warning(location))

        lexeme = self.source[start_pos:self.pos]
        return Token(TokenType.COMMENT, lexeme, ''.join(value_parts), location)

    def _tokenize_string(self, location: SourceLocation) -> Token:
        """
        Tokenize a string literal.

        The closing quote must be the same character as the opening one.
        A backslash keeps the next character as-is, so there are no escape
        translations like \\n.
        """
        start_pos = self.pos
        quote = self.source[self.pos]
        self._advance()  # Skip opening quote

        value_parts = []

        while self.pos < len(self.source) and self.source[self.pos] != quote:
            if self.source[self.pos] == '\\':
                self._advance()  # Skip backslash
                if self.pos < len(self.source):
                    value_parts.append(self.source[self.pos])
                    self._advance()
            else:
                value_parts.append(self.source[self.pos])
                self._advance()

        if self.pos < len(self.source):
            self._advance()  # Skip closing quote
        else:
            self._warn(create_unterminated_string_warning(quote, location))

        lexeme = self.source[start_pos:self.pos]
        return Token(TokenType.STRING, lexeme, ''.join(value_parts), location)

    def _tokenize_number(self, location: SourceLocation) -> Token:
        """Tokenize a run of digits and dots as a float."""
        start_pos = self.pos

        while self.pos < len(self.source) and (self.source[self.pos] in DIGITS or
                                                self.source[self.pos] == '.'):
            self._advance()

        lexeme = self.source[start_pos:self.pos]

        try:
            value = float(lexeme)
        except ValueError:
            # e.g. 1.2.3
            value = math.nan
            self._warn(create_malformed_number_warning(lexeme, location))

        return Token(TokenType.NUMBER, lexeme, value, location)

    def _tokenize_identifier_or_keyword(self, location: SourceLocation) -> Token:
        """Tokenize an identifier or keyword."""
        start_pos = self.pos

        while self.pos < len(self.source) and self.source[self.pos] in IDENTIFIER_CONTINUE:
            self._advance()

        lexeme = self.source[start_pos:self.pos]
        token_type = TokenType.KEYWORD if lexeme in KEYWORDS else TokenType.IDENTIFIER

        return Token(token_type, lexeme, lexeme, location)

    def _skip_whitespace(self):
        """Skip whitespace, tracking lines. A byte-order mark counts as whitespace."""
        while self.pos < len(self.source) and (self.source[self.pos].isspace() or
                                               self.source[self.pos] == BYTE_ORDER_MARK):
            self._advance()

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _advance_by(self, count: int):
        """Advance position by multiple characters."""
        for _ in range(count):
            self._advance()

    def _peek(self, offset: int = 1) -> str:
        """Peek at character ahead without advancing."""
        peek_pos = self.pos + offset
        if peek_pos < len(self.source):
            return self.source[peek_pos]
        return '\0'

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def _warn(self, warning: LexerWarning):
        self.warnings.append(warning)
        logger.debug("%s at %s", warning.message, warning.diagnostic.location)

    def has_warnings(self) -> bool:
        """Check if the lexer had to degrade any input."""
        return len(self.warnings) > 0

    def get_diagnostics(self) -> List[Diagnostic]:
        """Get all diagnostics recorded by the last tokenize() call."""
        return [warning.diagnostic for warning in self.warnings]


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source text
        filename: Filename for diagnostics

    Returns:
        List of tokens
    """
    return Lexer(source, filename).tokenize()


def tokenize_file(filepath: Union[str, os.PathLike]) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Args:
        filepath: Path to a UTF-8 source file, with or without a BOM

    Returns:
        List of tokens

    Raises:
        OSError: If the file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8-sig') as f:
        source = f.read()

    return tokenize_string(source, str(filepath))
