"""
Core Document Model Objects

Defines the tree that the parser builds from HCL source:
    - Attributes (name = expression)
    - Blocks (type, labels and a nested body)
    - Trivia (comments and blank lines between them)
    - Bodies (ordered containers of the above)
    - Files (root container)

ARCHITECTURAL RULE:
    These objects:
        - Keep every source token, so a File can be written back verbatim
        - Know nothing about addresses or lookups
        - Never interpret attribute values
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional, Union

from hcledit.tokens import Token, TokenType


@dataclass
class Attribute:
    """
    Represents a single `name = expression` assignment.

    Properties:
        name:
            Attribute name (e.g., "ami")

        tokens:
            Full token stream of the assignment: the name, the `=`,
            the expression, an optional trailing comment and the newline.

    IMPORTANT:
        The expression is kept as raw tokens. It is never evaluated.
    """

    name: str
    tokens: List[Token] = field(default_factory=list)

    def build_tokens(self) -> List[Token]:
        return list(self.tokens)

    def expr_tokens(self) -> List[Token]:
        """
        Tokens after the `=` sign, without the terminating newline.

        A trailing comment on the same line is part of the result.
        Returns an empty list if the stream has no `=`.
        """
        for i, token in enumerate(self.tokens):
            if token.type == TokenType.EQUAL:
                expr = self.tokens[i + 1:]
                break
        else:
            return []

        if expr and expr[-1].type == TokenType.NEWLINE:
            expr = expr[:-1]
        return expr


@dataclass
class Trivia:
    """Comments and blank lines that belong to no attribute or block."""

    tokens: List[Token] = field(default_factory=list)

    def build_tokens(self) -> List[Token]:
        return list(self.tokens)


@dataclass
class Body:
    """
    Ordered collection of attributes, blocks and trivia.

    Source order is preserved. Names are not required to be unique:
    duplicate attributes and duplicate blocks are legal, and lookups
    return the first occurrence.
    """

    items: List[Union[Attribute, "Block", Trivia]] = field(default_factory=list)

    def attributes(self) -> List[Attribute]:
        return [item for item in self.items if isinstance(item, Attribute)]

    def blocks(self) -> List["Block"]:
        return [item for item in self.items if isinstance(item, Block)]

    def get_attribute(self, name: str) -> Optional[Attribute]:
        """
        Retrieve an attribute by name.

        Args:
            name: Attribute name

        Returns:
            First Attribute with that name or None if not found
        """
        for attr in self.attributes():
            if attr.name == name:
                return attr
        return None

    def set_attribute_raw(self, name: str, expr_tokens: List[Token]) -> Attribute:
        """
        Set `name = <expr_tokens>` in this body, replacing an existing
        attribute of the same name or appending a new one.

        Used only on bodies the tool builds itself; parsed input is never
        passed here.
        """
        expr = list(expr_tokens)
        if expr:
            expr[0] = replace(expr[0], leading=" ")

        tokens = [Token(TokenType.IDENT, name), Token(TokenType.EQUAL, "=", " ")]
        tokens.extend(expr)
        tokens.append(Token(TokenType.NEWLINE, "\n"))

        attr = Attribute(name=name, tokens=tokens)
        for i, item in enumerate(self.items):
            if isinstance(item, Attribute) and item.name == name:
                self.items[i] = attr
                return attr
        self.items.append(attr)
        return attr

    def build_tokens(self) -> List[Token]:
        tokens: List[Token] = []
        for item in self.items:
            tokens.extend(item.build_tokens())
        return tokens


@dataclass
class Block:
    """
    Represents a typed, optionally labeled container.

    Example:
        resource "aws_instance" "foo" {
          ami = "x"
        }

    Becomes:
        Block(type="resource", labels=["aws_instance", "foo"], body=Body([...]))

    Properties:
        type:
            Block type name (e.g., "resource", "provisioner")

        labels:
            Ordered label values, unquoted (may be empty)

        body:
            Nested Body

        open_tokens / close_tokens:
            Header tokens up to and including the `{` line, and the `}`
            line. Only the writer uses them.
    """

    type: str
    labels: List[str] = field(default_factory=list)
    body: Body = field(default_factory=Body)
    open_tokens: List[Token] = field(default_factory=list)
    close_tokens: List[Token] = field(default_factory=list)

    def build_tokens(self) -> List[Token]:
        return self.open_tokens + self.body.build_tokens() + self.close_tokens


@dataclass
class File:
    """
    Root container for a parsed document.

    Properties:
        body: Top-level Body
        filename: Source name, used only in messages
    """

    body: Body = field(default_factory=Body)
    filename: str = "<stdin>"
