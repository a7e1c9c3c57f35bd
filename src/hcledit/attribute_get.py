"""
`attribute get`: read HCL, print the value of the attribute at an address.

AttributeGet is both a filter and a sink:
    - filter: reduce the document to a single attribute, renamed to the
      full address (e.g. `resource.aws_instance.foo.ami = "x"`)
    - sink: print that attribute's raw value followed by a newline

If nothing matches, the filtered file is empty and the output is empty.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, TextIO

from hcledit.editor import Editor, FileSink, Filter, HCLSource, Sink
from hcledit.model import File
from hcledit.resolver import find_attribute
from hcledit.serialization import result_to_json, result_to_yaml
from hcledit.value import get_attribute_value_as_string
from hcledit.writer import new_empty_file


class OutputFormat(Enum):
    """Output formats for `attribute get`."""
    VALUE = "value"  # Raw value text only
    HCL = "hcl"      # `address = value` as HCL
    JSON = "json"
    YAML = "yaml"


@dataclass
class AttributeGet(Filter, Sink):
    address: str

    def filter(self, file: File) -> File:
        """Return a new file holding only the matched attribute, if any."""
        attr, _ = find_attribute(file.body, self.address)

        out = new_empty_file(file.filename)
        if attr is not None:
            out.body.set_attribute_raw(self.address, attr.expr_tokens())
        return out

    def value(self, file: File) -> Optional[str]:
        attr = file.body.get_attribute(self.address)
        if attr is None:
            return None
        # Treat the expression as a string without interpreting it
        return get_attribute_value_as_string(attr)

    def sink(self, file: File) -> str:
        value = self.value(file)
        if value is None:
            return ""
        return value + "\n"


@dataclass
class StructuredSink(Sink):
    """Renders the filtered attribute as a JSON or YAML mapping."""

    attribute_get: AttributeGet
    output_format: OutputFormat

    def sink(self, file: File) -> str:
        value = self.attribute_get.value(file)
        address = self.attribute_get.address
        if self.output_format == OutputFormat.JSON:
            return result_to_json(address, value) + "\n"
        return result_to_yaml(address, value)


def _sink_for(f: AttributeGet, output_format: OutputFormat) -> Sink:
    if output_format == OutputFormat.VALUE:
        return f
    if output_format == OutputFormat.HCL:
        return FileSink()
    return StructuredSink(f, output_format)


def get_attribute(
    reader: TextIO,
    writer: TextIO,
    filename: str,
    address: str,
    output_format: OutputFormat = OutputFormat.VALUE,
) -> None:
    """
    Read HCL from `reader` and write the attribute at `address` to `writer`.

    Args:
        reader: Input stream
        writer: Output stream
        filename: Used only in error messages
        address: Dotted attribute address
        output_format: How to render the result

    Raises:
        EmptyAddressError: If address is empty
        HCLParseError: If the input is not valid HCL
        MalformedAttributeError: If the matched attribute has no `=`

    If an error occurs, nothing is written to `writer`.
    """
    f = AttributeGet(address=address)
    editor = Editor(
        source=HCLSource(filename=filename),
        filters=[f],
        sink=_sink_for(f, output_format),
    )
    editor.apply(reader, writer)
