"""
SysML-lite recursive descent parser

Turns the lexer's token list into an AST rooted at a ``root`` node.
Elements are picked by keyword; anything the grammar does not know is
skipped up to the next ';' or '}' as a generic element.

Failure policy: the first ParseError stops the whole parse. The error is
logged and recorded in ``Parser.errors``; the caller gets the root with
every element completed before the failure. Rules never recover locally.

Author: xwest
"""

import os
from typing import Callable, Dict, List, Optional, Union

from ..lexer.tokens import Token, TokenType, SourceLocation
from ..utils.logger import get_logger
from .ast_nodes import ASTNode, NodeType, SourceSpan
from .errors import (
    ParseError, create_unexpected_token_error, create_stray_token_error, create_nesting_error
)


logger = get_logger(__name__)


class Parser:
    """
    SysML-lite recursive descent parser.

    A single cursor moves forward over the token list; no token is read
    again after it has been consumed. Build a new Parser for every parse.
    """

    def __init__(self, tokens: List[Token], max_depth: int = 100):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: List of tokens from the lexer. COMMENT tokens are dropped.
            max_depth: Deepest allowed nesting of element bodies
        """
        self.tokens = [token for token in tokens if token.type != TokenType.COMMENT]
        self.position = 0
        self.errors: List[ParseError] = []
        self.max_depth = max_depth
        self.depth = 0

        # Keyword -> rule. Keywords missing here fall through to the generic rule.
        self.element_parsers: Dict[str, Callable[[], ASTNode]] = {
            "package": self._parse_package,
            "part": self._parse_part,
            "attribute": self._parse_attribute,
            "port": self._parse_port,
            "connection": self._parse_connection,
            "requirement": self._parse_requirement,
            "use": self._parse_use_case,
        }

    def parse(self) -> ASTNode:
        """
        Parse the token stream into an AST.

        Returns:
            The root node. On a syntax error it holds the top-level elements
            parsed before the failing one; the error is logged and kept in
            ``self.errors`` but not raised.
        """
        root = ASTNode(NodeType.ROOT, span=self._program_span())

        try:
            while not self._is_at_end():
                start = self.position
                element = self.parse_element()

                # Only a stray '}' can leave the cursor where it was
                if self.position == start:
                    raise create_stray_token_error(self.current())

                if element is not None:
                    root.add_child(element)

        except RecursionError:
            # The interpreter stack ran out before max_depth was reached
            self._record(create_nesting_error(self.current(), self._end_location()))

        except ParseError as e:
            self._record(e)

        logger.debug("Parsed %d top-level elements", len(root.children))
        return root

    def parse_element(self) -> Optional[ASTNode]:
        """Dispatch one element on the current keyword."""
        token = self.current()
        if token is None or token.type == TokenType.EOF:
            return None

        if token.type == TokenType.KEYWORD:
            element_parser = self.element_parsers.get(token.value)
            if element_parser is not None:
                return element_parser()

        return self._parse_generic()

    # Element rules

    def _parse_package(self) -> ASTNode:
        """package IDENT? ('{' element* '}')?"""
        start = self.position
        node = ASTNode(NodeType.PACKAGE)
        self.expect(TokenType.KEYWORD, "package")

        self._capture_identifier(node, "name")

        if self._check_value("{"):
            self._parse_body(node)

        return self._finish(node, start)

    def _parse_part(self) -> ASTNode:
        """part IDENT? ('specializes' IDENT)? ('{' element* '}' | ';')?"""
        start = self.position
        node = ASTNode(NodeType.PART)
        self.expect(TokenType.KEYWORD, "part")

        self._capture_identifier(node, "name")

        # Matched by value, whatever the token type
        if self._check_value("specializes"):
            self._advance()
            self._capture_identifier(node, "specializes")

        if self._check_value("{"):
            self._parse_body(node)
        elif self._check_value(";"):
            self._advance()

        return self._finish(node, start)

    def _parse_attribute(self) -> ASTNode:
        """attribute IDENT? (':' IDENT)? ('=' (NUMBER | STRING))? ';'?"""
        start = self.position
        node = ASTNode(NodeType.ATTRIBUTE)
        self.expect(TokenType.KEYWORD, "attribute")

        self._capture_identifier(node, "name")

        if self._check_value(":"):
            self._advance()
            self._capture_identifier(node, "propType")

        if self._check_value("="):
            self._advance()
            if self._check(TokenType.NUMBER) or self._check(TokenType.STRING):
                node.properties["defaultValue"] = self._advance().value

        self._match_value(";")
        return self._finish(node, start)

    def _parse_port(self) -> ASTNode:
        """port IDENT? (':' IDENT)? ';'?"""
        start = self.position
        node = ASTNode(NodeType.PORT)
        self.expect(TokenType.KEYWORD, "port")

        self._capture_identifier(node, "name")

        if self._check_value(":"):
            self._advance()
            self._capture_identifier(node, "propType")

        self._match_value(";")
        return self._finish(node, start)

    def _parse_connection(self) -> ASTNode:
        """
        connection IDENT? (':' IDENT IDENT?)? ';'?

        The two endpoints are bare identifiers. A dotted endpoint such as
        ``B.c`` stops after ``B``; the rest is left for the next element.
        """
        start = self.position
        node = ASTNode(NodeType.CONNECTION)
        self.expect(TokenType.KEYWORD, "connection")

        self._capture_identifier(node, "name")

        if self._check_value(":"):
            self._advance()
            if self._capture_identifier(node, "fromRef"):
                self._capture_identifier(node, "toRef")

        self._match_value(";")
        return self._finish(node, start)

    def _parse_requirement(self) -> ASTNode:
        """requirement IDENT? ('{' element* '}')?"""
        start = self.position
        node = ASTNode(NodeType.REQUIREMENT)
        self.expect(TokenType.KEYWORD, "requirement")

        self._capture_identifier(node, "name")

        if self._check_value("{"):
            self._parse_body(node)

        return self._finish(node, start)

    def _parse_use_case(self) -> ASTNode:
        """use 'case'? IDENT? ('{' element* '}')?"""
        start = self.position
        node = ASTNode(NodeType.USECASE)
        self.expect(TokenType.KEYWORD, "use")

        self._match_value("case")
        self._capture_identifier(node, "name")

        if self._check_value("{"):
            self._parse_body(node)

        return self._finish(node, start)

    def _parse_generic(self) -> ASTNode:
        """
        Fallback for anything without a dedicated rule.

        Takes a leading identifier as the name, skips up to the next ';' or
        '}' and eats the ';'. An unknown keyword is skipped without being
        recorded. '}' is left for the enclosing body.
        """
        start = self.position
        node = ASTNode(NodeType.GENERIC)

        self._capture_identifier(node, "name")

        while not self._is_at_end() and not self._check_value(";") and not self._check_value("}"):
            self._advance()

        self._match_value(";")
        return self._finish(node, start)

    def _parse_body(self, node: ASTNode):
        """'{' element* '}', appending each element to node."""
        if self.depth >= self.max_depth:
            raise create_nesting_error(self.current(), self._end_location(), self.max_depth)

        self.expect(TokenType.PUNCTUATION, "{")
        self.depth += 1
        try:
            while not self._check_value("}") and not self._is_at_end():
                element = self.parse_element()
                if element is not None:
                    node.add_child(element)
        finally:
            self.depth -= 1

        self.expect(TokenType.PUNCTUATION, "}")

    # Utility methods

    def current(self) -> Optional[Token]:
        """Return the token under the cursor, or None past the end."""
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return None

    def expect(self, token_type: TokenType, value: Optional[str] = None) -> Token:
        """Consume a token of the given type (and value, if given) or raise."""
        token = self.current()
        if token is None or token.type != token_type or (value is not None and token.value != value):
            raise create_unexpected_token_error(token_type, value, token, self._end_location())
        return self._advance()

    def _advance(self) -> Token:
        """Consume and return the current token."""
        token = self.current()
        if token is not None:
            self.position += 1
        return token

    def _check(self, token_type: TokenType) -> bool:
        """Check the current token's type without consuming."""
        token = self.current()
        return token is not None and token.type == token_type

    def _check_value(self, value: str) -> bool:
        """Check the current token's value without consuming, whatever its type."""
        token = self.current()
        return token is not None and token.value == value

    def _match_value(self, value: str) -> bool:
        """Consume the current token if it has the given value."""
        if self._check_value(value):
            self._advance()
            return True
        return False

    def _capture_identifier(self, node: ASTNode, key: str) -> bool:
        """Store a current IDENTIFIER under ``key`` and consume it."""
        if self._check(TokenType.IDENTIFIER):
            node.properties[key] = self._advance().value
            return True
        return False

    def _is_at_end(self) -> bool:
        token = self.current()
        return token is None or token.type == TokenType.EOF

    def _finish(self, node: ASTNode, start: int) -> ASTNode:
        """Attach the span from the token at ``start`` to the last consumed one."""
        end = self.position - 1 if self.position > start else start
        node.span = SourceSpan(self.tokens[start].location, self.tokens[end].location)
        return node

    def _end_location(self) -> SourceLocation:
        if self.tokens:
            return self.tokens[-1].location
        return SourceLocation("<unknown>", 1, 1, 0)

    def _program_span(self) -> SourceSpan:
        start_location = self.tokens[0].location if self.tokens else self._end_location()
        return SourceSpan(start_location, self._end_location())

    def _record(self, error: ParseError):
        self.errors.append(error)
        logger.error("Parse error: %s (at %s)", error.message, error.location)

    def has_errors(self) -> bool:
        """Check if the last parse stopped on an error."""
        return len(self.errors) > 0


def parse_tokens(tokens: List[Token]) -> ASTNode:
    """Parse an already tokenized source with a fresh Parser."""
    return Parser(tokens).parse()


def parse_string(source: str, filename: str = "<string>") -> ASTNode:
    """
    Convenience function to parse a source string.

    Args:
        source: Source text
        filename: Filename for diagnostics

    Returns:
        Root AST node (possibly partial, see Parser.parse)
    """
    from ..lexer import tokenize_string

    return parse_tokens(tokenize_string(source, filename))


def parse_file(filepath: Union[str, os.PathLike]) -> ASTNode:
    """
    Convenience function to parse a source file.

    Raises:
        OSError: If the file cannot be read
    """
    from ..lexer import tokenize_file

    return parse_tokens(tokenize_file(filepath))
