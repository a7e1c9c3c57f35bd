"""
HCL writer.

Turns a File back into source text. Parsed files keep all of their tokens,
so writing an unmodified parse result gives back the original input.
"""

from hcledit.model import Body, File
from hcledit.tokens import tokens_to_string


def new_empty_file(filename: str = "<stdin>") -> File:
    """Create a File with an empty body."""
    return File(body=Body(), filename=filename)


def write_body(body: Body) -> str:
    return tokens_to_string(body.build_tokens())


def write_file(file: File) -> str:
    """
    Render a File as HCL source.

    Args:
        file: File to render

    Returns:
        HCL source text
    """
    return write_body(file.body)


__all__ = ["new_empty_file", "write_body", "write_file"]
