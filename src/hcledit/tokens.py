"""
Token System for hcledit

Every node of a parsed document keeps the exact tokens it was built from.
Attribute values are never turned into expression trees: they stay token
streams so that they can be written back verbatim.

ARCHITECTURAL RULE:
    Tokens carry source text, not meaning.
    Nothing here evaluates, normalizes or re-quotes a value.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable


class TokenType(Enum):
    """
    Lexical categories of HCL source.

    Only EQUAL and COMMENT matter to value extraction; the others let the
    parser find where attributes and blocks begin and end.
    """

    IDENT = "ident"
    NUMBER = "number"
    STRING = "string"
    HEREDOC = "heredoc"

    EQUAL = "="
    LBRACE = "{"
    RBRACE = "}"
    LBRACK = "["
    RBRACK = "]"
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","
    DOT = "."
    OPERATOR = "operator"

    COMMENT = "comment"
    NEWLINE = "newline"


OPENING = {TokenType.LBRACE, TokenType.LBRACK, TokenType.LPAREN}
CLOSING = {TokenType.RBRACE, TokenType.RBRACK, TokenType.RPAREN}


@dataclass(frozen=True)
class Token:
    """
    A single lexical token.

    Properties:
        type: TokenType enum
        text: Literal source text of the token
        leading: Whitespace found before the token on the same line
        line: 1-based source line where the token starts

    Example:
        name = "value"   # comment

    Becomes:
        Token(IDENT, "name"), Token(EQUAL, "=", leading=" "),
        Token(STRING, '"value"', leading=" "),
        Token(COMMENT, "# comment", leading="   "), Token(NEWLINE, "\\n")

    IMPORTANT:
        This object is immutable (frozen=True).
        `line` is position metadata and does not take part in equality.
    """

    type: TokenType
    text: str
    leading: str = ""
    line: int = field(default=1, compare=False)


def tokens_to_string(tokens: Iterable[Token]) -> str:
    """Concatenate tokens back into source text, leading whitespace included."""
    return "".join(t.leading + t.text for t in tokens)
