"""
hcledit: address-based reading of HCL documents.

An address such as `resource.aws_instance.foo.ami` is resolved against a
parsed document that has no schema, so each segment after the first may be
a block label or a nested block type. The resolver decides by heuristic;
see `hcledit.resolver`.

ARCHITECTURAL GUARANTEE:
------------------------
Lookups never modify the parsed document, and attribute values are
returned as raw source text, never evaluated.
"""

__version__ = "0.1.0"

from hcledit.address import EmptyAddressError, parse_address
from hcledit.attribute_get import AttributeGet, OutputFormat, get_attribute
from hcledit.lexer import HCLParseError
from hcledit.model import Attribute, Block, Body, File
from hcledit.parser import parse_file, parse_string
from hcledit.resolver import find_attribute, find_longest_matching_blocks, longest_matching_labels
from hcledit.value import MalformedAttributeError, get_attribute_value_as_string
from hcledit.writer import write_file

__all__ = [
    "AttributeGet",
    "Attribute",
    "Block",
    "Body",
    "EmptyAddressError",
    "File",
    "HCLParseError",
    "MalformedAttributeError",
    "OutputFormat",
    "find_attribute",
    "find_longest_matching_blocks",
    "get_attribute",
    "get_attribute_value_as_string",
    "longest_matching_labels",
    "parse_address",
    "parse_file",
    "parse_string",
    "write_file",
]
