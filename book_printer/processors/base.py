"""
Converter interface for book-printer.

A converter renders one manuscript file to LaTeX and writes the result to
a text stream. The document assembler depends only on this interface.
"""

from abc import ABC, abstractmethod
from typing import TextIO, Union
from pathlib import Path

from ..models import ConversionOptions


class ConversionError(Exception):
    """Raised when a converter fails to render a manuscript file."""

    def __init__(self, path: Union[str, Path], message: str):
        self.path = str(path)
        self.message = message
        super().__init__(f"{self.path}: {message}")


class Converter(ABC):
    """Renders a single markup file into the output stream."""

    @abstractmethod
    def convert(self, path: Union[str, Path], options: ConversionOptions, sink: TextIO) -> None:
        """
        Convert ``path`` and write the rendered body to ``sink``.

        Raises:
            OSError: If the file cannot be read
            ConversionError: If the file cannot be converted
        """
