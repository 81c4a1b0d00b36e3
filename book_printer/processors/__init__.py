"""
Conversion backends for book-printer.

This package contains the converter interface and the Pandoc-based
LaTeX renderer used for manuscript files.
"""

from .base import Converter, ConversionError
from .pandoc_runner import PandocConverter

__all__ = ["Converter", "ConversionError", "PandocConverter"]
