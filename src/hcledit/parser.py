"""
HCL Parser (Layer 1: Tokens → Document Model).

Builds a File tree out of the lexer's tokens. Only structure is parsed:
attributes and blocks are recognized, but an attribute's expression is kept
as the raw tokens that make it up.

Grammar:
    body      := (attribute | block | trivia)*
    attribute := IDENT "=" expression
    block     := IDENT (IDENT | STRING)* "{" body "}"

An expression ends at the first newline or line-ending comment outside of
brackets, or at a `}` that closes the enclosing block, so one-line blocks
such as `a { b = "1" }` are accepted. An inline `/* */` comment followed by
more code stays part of the expression.
"""

import logging
import os
import re
from typing import List, Tuple

from hcledit.lexer import HCLParseError, tokenize
from hcledit.model import Attribute, Block, Body, File, Trivia
from hcledit.tokens import CLOSING, OPENING, Token, TokenType

logger = logging.getLogger(__name__)

_ESCAPES = {'n': '\n', 't': '\t', 'r': '\r', '"': '"', '\\': '\\'}
_ESCAPE_RE = re.compile(r'\\(.)')


def _unquote_label(token: Token, filename: str) -> str:
    """Turn a quoted block label into its plain string value."""
    inner = token.text[1:-1]
    if '${' in inner or '%{' in inner:
        raise HCLParseError(f"template sequences are not allowed in block labels: {token.text}", filename, token.line)
    return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(0)), inner)


def _ends_line(tokens: List[Token], pos: int) -> bool:
    """True if the comment at `pos` runs to the end of its line."""
    comment = tokens[pos]
    if comment.text.startswith(('#', '//')):
        return True
    return pos + 1 >= len(tokens) or tokens[pos + 1].type == TokenType.NEWLINE


def _parse_attribute(tokens: List[Token], pos: int, filename: str) -> Tuple[Attribute, int]:
    """Parse `name = expression` starting at the name token."""
    name_token = tokens[pos]
    attr_tokens = [name_token, tokens[pos + 1]]
    pos += 2

    depth = 0
    value_count = 0
    while pos < len(tokens):
        token = tokens[pos]
        if depth == 0:
            if token.type == TokenType.NEWLINE:
                attr_tokens.append(token)
                pos += 1
                break
            if token.type == TokenType.RBRACE:
                break
            if token.type == TokenType.COMMENT and _ends_line(tokens, pos):
                attr_tokens.append(token)
                pos += 1
                if pos < len(tokens) and tokens[pos].type == TokenType.NEWLINE:
                    attr_tokens.append(tokens[pos])
                    pos += 1
                break

        if token.type in OPENING:
            depth += 1
        elif token.type in CLOSING:
            if depth == 0:
                raise HCLParseError(f"unbalanced {token.text!r} in value of {name_token.text!r}", filename, token.line)
            depth -= 1

        if token.type not in (TokenType.NEWLINE, TokenType.COMMENT):
            value_count += 1
        attr_tokens.append(token)
        pos += 1

    if depth > 0:
        raise HCLParseError(f"unclosed bracket in value of {name_token.text!r}", filename, name_token.line)
    if value_count == 0:
        raise HCLParseError(f"missing value for attribute {name_token.text!r}", filename, name_token.line)

    return Attribute(name=name_token.text, tokens=attr_tokens), pos


def _parse_block(tokens: List[Token], pos: int, filename: str) -> Tuple[Block, int]:
    """Parse a block header, its body and the closing brace."""
    type_token = tokens[pos]
    open_tokens = [type_token]
    labels: List[str] = []
    pos += 1

    while pos < len(tokens):
        token = tokens[pos]
        if token.type == TokenType.IDENT:
            labels.append(token.text)
        elif token.type == TokenType.STRING:
            labels.append(_unquote_label(token, filename))
        elif token.type == TokenType.LBRACE:
            open_tokens.append(token)
            pos += 1
            break
        else:
            raise HCLParseError(
                f"unexpected {token.text!r} in header of block {type_token.text!r}", filename, token.line
            )
        open_tokens.append(token)
        pos += 1
    else:
        raise HCLParseError(f"missing '{{' after header of block {type_token.text!r}", filename, type_token.line)

    if pos < len(tokens) and tokens[pos].type == TokenType.NEWLINE:
        open_tokens.append(tokens[pos])
        pos += 1

    body, pos = _parse_body(tokens, pos, filename, in_block=True)

    if pos >= len(tokens) or tokens[pos].type != TokenType.RBRACE:
        raise HCLParseError(f"unclosed block {type_token.text!r}", filename, type_token.line)

    close_tokens = [tokens[pos]]
    pos += 1
    if pos < len(tokens) and tokens[pos].type == TokenType.NEWLINE:
        close_tokens.append(tokens[pos])
        pos += 1

    block = Block(
        type=type_token.text,
        labels=labels,
        body=body,
        open_tokens=open_tokens,
        close_tokens=close_tokens,
    )
    return block, pos


def _parse_body(tokens: List[Token], pos: int, filename: str, in_block: bool) -> Tuple[Body, int]:
    """Parse body items until a closing brace (inside a block) or end of input."""
    body = Body()
    trivia: List[Token] = []

    while pos < len(tokens):
        token = tokens[pos]

        if token.type in (TokenType.NEWLINE, TokenType.COMMENT):
            trivia.append(token)
            pos += 1
            continue

        if token.type == TokenType.RBRACE:
            if not in_block:
                raise HCLParseError("unexpected '}'", filename, token.line)
            break

        if token.type != TokenType.IDENT:
            raise HCLParseError(f"expected attribute or block, got {token.text!r}", filename, token.line)

        if trivia:
            body.items.append(Trivia(trivia))
            trivia = []

        if pos + 1 < len(tokens) and tokens[pos + 1].type == TokenType.EQUAL:
            node, pos = _parse_attribute(tokens, pos, filename)
        else:
            node, pos = _parse_block(tokens, pos, filename)
        body.items.append(node)

    if trivia:
        body.items.append(Trivia(trivia))

    return body, pos


def parse_string(src: str, filename: str = "<stdin>") -> File:
    """
    Parse HCL source into a File.

    Args:
        src: HCL source text
        filename: Used only in error messages

    Returns:
        File whose tokens reproduce `src` exactly

    Raises:
        HCLParseError: If tokenizing or parsing fails
    """
    tokens = tokenize(src, filename)
    body, _ = _parse_body(tokens, 0, filename, in_block=False)
    logger.debug("parsed %s: %d tokens, %d top-level items", filename, len(tokens), len(body.items))
    return File(body=body, filename=filename)


def parse_file(filepath: str) -> File:
    """
    Parse an HCL file into a File.

    Raises:
        FileNotFoundError: If file doesn't exist
        HCLParseError: If parsing fails
    """
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"HCL file not found: {filepath}")

    return parse_string(content, filename=os.path.basename(filepath))


__all__ = [
    "parse_string",
    "parse_file",
    "HCLParseError",
]
