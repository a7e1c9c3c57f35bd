"""
Raw value extraction for attributes.

There is no value-as-string accessor on an attribute, so the value is
rebuilt from its tokens: everything after the `=` up to a comment.
"""

from typing import List

from hcledit.model import Attribute
from hcledit.tokens import Token, TokenType, tokens_to_string


class MalformedAttributeError(ValueError):
    """Raised when an attribute's tokens contain no `=`."""
    pass


def get_attribute_value_as_string(attr: Attribute) -> str:
    """
    Return the value of an attribute as unevaluated source text.

    For `name = "value" # comment` this is `"value"`: quotes are kept,
    the comment and surrounding whitespace are dropped, and internal
    formatting is left untouched.

    Raises:
        MalformedAttributeError: If the attribute has no `=` token
    """
    tokens = attr.build_tokens()
    i = 0
    while i < len(tokens) and tokens[i].type != TokenType.EQUAL:
        i += 1

    if i == len(tokens):
        raise MalformedAttributeError(f"failed to find '=' in attribute {attr.name!r}")

    value_tokens: List[Token] = []
    for token in tokens[i + 1:]:
        if token.type == TokenType.COMMENT:
            break
        value_tokens.append(token)

    return tokens_to_string(value_tokens).strip()
