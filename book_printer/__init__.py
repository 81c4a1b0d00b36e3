"""
Book Printer - Assemble a typesetting-ready LaTeX book from manuscript files.

A small CLI that wraps each manuscript chapter, rendered by Pandoc, in a
fixed LaTeX preamble and footer.
"""

__version__ = "1.0.0"

from .models import ConversionOptions
from .assembler import BookAssembler, assemble
from .paper import PaperSizeResolver, resolve_paper_size

__all__ = ["ConversionOptions", "BookAssembler", "assemble", "PaperSizeResolver", "resolve_paper_size"]
