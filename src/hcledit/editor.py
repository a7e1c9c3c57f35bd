"""
Editor pipeline: source → filters → sink.

    - A Source parses input text into a File
    - Each Filter maps a File to a new File
    - A Sink renders the final File as output text

Output is written in a single call at the very end, so if any stage
raises, nothing is written.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, TextIO

from hcledit.model import File
from hcledit.parser import parse_string
from hcledit.writer import write_file

logger = logging.getLogger(__name__)


class Source(ABC):
    """Turns input text into a File."""

    @abstractmethod
    def parse(self, src: str) -> File:
        ...


class Filter(ABC):
    """Maps a File to a new File. Must not modify its input."""

    @abstractmethod
    def filter(self, file: File) -> File:
        ...


class Sink(ABC):
    """Renders a File as output text."""

    @abstractmethod
    def sink(self, file: File) -> str:
        ...


@dataclass
class HCLSource(Source):
    filename: str = "<stdin>"

    def parse(self, src: str) -> File:
        return parse_string(src, filename=self.filename)


class FileSink(Sink):
    """Writes the whole File back as HCL."""

    def sink(self, file: File) -> str:
        return write_file(file)


@dataclass
class Editor:
    """
    Runs a pipeline over a text stream.

    Properties:
        source: Parses the input
        filters: Applied in order
        sink: Renders the result (defaults to plain HCL)
    """

    source: Source
    filters: List[Filter] = field(default_factory=list)
    sink: Sink = field(default_factory=FileSink)

    def apply(self, reader: TextIO, writer: TextIO) -> None:
        file = self.source.parse(reader.read())
        for f in self.filters:
            logger.debug("apply filter %s", type(f).__name__)
            file = f.filter(file)
        writer.write(self.sink.sink(file))
