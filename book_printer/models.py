"""
Data models for book-printer.

This module contains the small data structures passed between the CLI,
the document assembler and the conversion backends.
"""

from typing import List
from dataclasses import dataclass, field


@dataclass
class ConversionOptions:
    """
    Options handed to the converter for every manuscript file.

    ``accept_targets_as_text`` names the alternate-output targets whose
    content is rendered as ordinary text instead of being dropped.
    ``codes_in_verbatim`` controls whether inline markup inside code
    blocks is interpreted; when False code stays literal.
    """

    accept_targets_as_text: List[str] = field(default_factory=lambda: ["sidebar"])
    codes_in_verbatim: bool = False

    def to_dict(self) -> dict:
        """Convert options to dictionary."""
        return {
            'accept_targets_as_text': list(self.accept_targets_as_text),
            'codes_in_verbatim': self.codes_in_verbatim
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ConversionOptions':
        """Create ConversionOptions from dictionary."""
        targets = data.get('accept_targets_as_text', ["sidebar"])
        if isinstance(targets, str):
            targets = [t.strip() for t in targets.split(',') if t.strip()]
        return cls(
            accept_targets_as_text=list(targets or []),
            codes_in_verbatim=bool(data.get('codes_in_verbatim', False))
        )
