"""
Document assembly for book-printer.

Writes the complete LaTeX book: a fixed preamble, the converted body of
every manuscript file in argument order, and a fixed footer. The paper
size is the only value substituted into the template text.
"""

import logging
from pathlib import Path
from typing import Iterable, TextIO, Union, Optional

from .models import ConversionOptions
from .paper import paper_option
from .processors.base import Converter

logger = logging.getLogger(__name__)

DOCUMENT_CLASS = "\\documentclass[11pt,{paper},oneside]{{report}}\n"

PREAMBLE = r"""\usepackage{graphics,graphicx}
\usepackage{longtable,booktabs,array,calc}
\usepackage{colortbl}
\usepackage{fancyvrb}
\usepackage[T1]{fontenc}
\usepackage[utf8]{inputenc}
\usepackage{lmodern}
\usepackage{textcomp}
\usepackage{hyperref}

\providecommand{\tightlist}{%
  \setlength{\itemsep}{0pt}\setlength{\parskip}{0pt}}
\providecommand{\pandocbounded}[1]{#1}

\title{Using Perl~6}
\author{Jonathan S. Duff, Moritz Lenz, Carl M\"asak, Patrick R. Michaud, Jonathan Worthington}

\begin{document}

\maketitle
\tableofcontents
"""

FOOTER = "\\end{document}\n"


def render_document_class(paper_size: str) -> str:
    """Return the document class line for ``paper_size`` (e.g. ``a4``)."""
    return DOCUMENT_CLASS.format(paper=paper_option(paper_size))


def render_preamble(paper_size: str) -> str:
    """Return everything written before the first manuscript body."""
    return render_document_class(paper_size) + PREAMBLE


class BookAssembler:
    """
    Assembles the book from manuscript files.

    One pass, in order: preamble, one converter call per file, footer.
    Errors from the converter or from file access are not caught; output
    already written for earlier files stays in the stream.
    """

    def __init__(self, converter: Converter, paper_size: str,
                 options: Optional[ConversionOptions] = None):
        """
        Initialize the assembler.

        Args:
            converter: Backend rendering each manuscript file
            paper_size: Resolved paper size token (e.g. ``a4``)
            options: Options passed to the converter for every file
        """
        self.converter = converter
        self.paper_size = paper_size
        self.options = options or ConversionOptions()

    def assemble(self, paths: Iterable[Union[str, Path]], sink: TextIO) -> int:
        """
        Write the complete document to ``sink``.

        Args:
            paths: Manuscript files in book order
            sink: Output text stream

        Returns:
            Number of files converted
        """
        sink.write(render_preamble(self.paper_size))

        count = 0
        for path in paths:
            logger.info("Converting %s", path)
            self.converter.convert(path, self.options, sink)
            count += 1

        sink.write(FOOTER)
        sink.flush()

        logger.debug("Assembled %d file(s) on %s paper", count, self.paper_size)
        return count


def assemble(paths: Iterable[Union[str, Path]], converter: Converter, paper_size: str,
             sink: TextIO, options: Optional[ConversionOptions] = None) -> int:
    """
    Convenience function to assemble a book in one call.

    Returns:
        Number of files converted
    """
    return BookAssembler(converter, paper_size, options).assemble(paths, sink)
