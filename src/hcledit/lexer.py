"""
HCL Lexer (Layer 1: Raw Text → Tokens).

Splits HCL source into Token objects without losing a single character:
whitespace before a token is stored on the token itself, so joining the
tokens back together reproduces the input exactly.

Recognized:
    - Identifiers, numbers, operators and punctuation
    - Quoted strings, including nested ${...} / %{...} templates
    - Heredocs (<<EOF and <<-EOF)
    - Comments: #, // and /* ... */
    - Newlines (significant in HCL, they terminate attributes)
"""

import re
from typing import List, Optional

from hcledit.tokens import Token, TokenType


class HCLParseError(Exception):
    """Raised when HCL source cannot be tokenized or parsed."""

    def __init__(self, message: str, filename: str = "<stdin>", line: Optional[int] = None):
        self.filename = filename
        self.line = line
        location = f"{filename}:{line}" if line is not None else filename
        super().__init__(f"{location}: {message}")


# Token specification: (regex, token type). Order matters: longer operators
# must be tried before their prefixes.
_TOKEN_SPECS = [
    (r'\r?\n', TokenType.NEWLINE),
    (r'#[^\r\n]*', TokenType.COMMENT),
    (r'//[^\r\n]*', TokenType.COMMENT),
    (r'\d+(?:\.\d+)?(?:[eE][+-]?\d+)?', TokenType.NUMBER),
    (r'[^\W\d][\w-]*', TokenType.IDENT),
    (r'==|!=|<=|>=|&&|\|\||=>|\.\.\.|[-+*/%!<>?:]', TokenType.OPERATOR),
    (r'=', TokenType.EQUAL),
    (r'\{', TokenType.LBRACE),
    (r'\}', TokenType.RBRACE),
    (r'\[', TokenType.LBRACK),
    (r'\]', TokenType.RBRACK),
    (r'\(', TokenType.LPAREN),
    (r'\)', TokenType.RPAREN),
    (r',', TokenType.COMMA),
    (r'\.', TokenType.DOT),
]

_COMPILED_SPECS = [(re.compile(pattern), token_type) for pattern, token_type in _TOKEN_SPECS]
_WHITESPACE_RE = re.compile(r'[ \t]+')
_HEREDOC_RE = re.compile(r'<<(-?)([A-Za-z_][\w-]*)\r?\n')


def _scan_template(src: str, pos: int, filename: str, line: int) -> int:
    """Return the index just past the '}' closing a template opened before `pos`."""
    depth = 1
    while pos < len(src):
        c = src[pos]
        if c == '"':
            pos = _scan_quoted(src, pos, filename, line)
            continue
        if c == '{':
            depth += 1
        elif c == '}':
            depth -= 1
            if depth == 0:
                return pos + 1
        pos += 1
    raise HCLParseError("unterminated template sequence", filename, line)


def _scan_quoted(src: str, pos: int, filename: str, line: int) -> int:
    """Return the index just past the closing quote of the string at `pos`."""
    i = pos + 1
    while i < len(src):
        c = src[i]
        if c == '\\':
            i += 2
            continue
        if c == '"':
            return i + 1
        if c == '\n':
            break
        if src.startswith(('$${', '%%{'), i):
            i += 3
            continue
        if src.startswith(('${', '%{'), i):
            i = _scan_template(src, i + 2, filename, line)
            continue
        i += 1
    raise HCLParseError("unterminated quoted string", filename, line)


def _scan_heredoc(src: str, pos: int, filename: str, line: int) -> Optional[int]:
    """
    Return the index at the end of the heredoc closing marker, or None if
    `pos` does not start a heredoc header.

    The closing marker line may be indented (both plain and `<<-` forms).
    The returned index excludes the newline after the marker.
    """
    header = _HEREDOC_RE.match(src, pos)
    if not header:
        return None

    marker = header.group(2)
    i = header.end()
    while i < len(src):
        end = src.find('\n', i)
        if end == -1:
            end = len(src)
        if src[i:end].strip() == marker:
            return i + len(src[i:end].rstrip('\r'))
        i = end + 1
    raise HCLParseError(f"unterminated heredoc, expected closing marker {marker!r}", filename, line)


def tokenize(src: str, filename: str = "<stdin>") -> List[Token]:
    """
    Tokenize HCL source.

    Args:
        src: HCL source text
        filename: Used only in error messages

    Returns:
        List of tokens in source order. Whitespace at the very end of the
        input becomes an empty-text NEWLINE token so nothing is lost.

    Raises:
        HCLParseError: On unterminated strings, heredocs, comments or
            unknown characters
    """
    tokens: List[Token] = []
    pos = 0
    line = 1

    while pos < len(src):
        leading = ""
        ws = _WHITESPACE_RE.match(src, pos)
        if ws:
            leading = ws.group(0)
            pos = ws.end()
            if pos >= len(src):
                # Whitespace at end of input, kept as an empty newline-less token
                tokens.append(Token(TokenType.NEWLINE, "", leading, line))
                break

        c = src[pos]
        end = None
        token_type = None

        if c == '"':
            end = _scan_quoted(src, pos, filename, line)
            token_type = TokenType.STRING
        elif src.startswith('/*', pos):
            close = src.find('*/', pos + 2)
            if close == -1:
                raise HCLParseError("unterminated block comment", filename, line)
            end = close + 2
            token_type = TokenType.COMMENT
        elif src.startswith('<<', pos):
            end = _scan_heredoc(src, pos, filename, line)
            token_type = TokenType.HEREDOC

        if end is None:
            for pattern, spec_type in _COMPILED_SPECS:
                match = pattern.match(src, pos)
                if match:
                    end = match.end()
                    token_type = spec_type
                    break

        if end is None:
            raise HCLParseError(f"unexpected character {c!r}", filename, line)

        text = src[pos:end]
        tokens.append(Token(token_type, text, leading, line))
        line += text.count('\n')
        pos = end

    return tokens
