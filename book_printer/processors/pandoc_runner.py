"""
Pandoc LaTeX rendering for book-printer.

This module renders manuscript files to LaTeX body fragments using Pandoc
and the bundled Lua filter. No standalone document is produced here; the
preamble and footer come from the document assembler.
"""

import logging
import subprocess
import time
from pathlib import Path
from typing import Dict, Any, Optional, List, TextIO, Union

from .base import Converter, ConversionError
from ..models import ConversionOptions
from ..config import get_config

logger = logging.getLogger(__name__)

FILTERS_DIR = Path(__file__).parent.parent / 'filters'
BOOK_FILTER = FILTERS_DIR / 'book.lua'


class PandocConverter(Converter):
    """
    Pandoc runner that renders one manuscript file per call.

    The file is read here and piped to Pandoc on stdin, so a missing or
    unreadable input surfaces as the usual ``OSError`` before Pandoc runs.
    """

    def __init__(self, pandoc_config: Optional[Dict[str, Any]] = None):
        """
        Initialize the Pandoc converter.

        Args:
            pandoc_config: The ``pandoc`` configuration section. Defaults to
                the global configuration.
        """
        if pandoc_config is None:
            pandoc_config = get_config().get_pandoc_config()

        self.pandoc_config = pandoc_config
        self.executable = pandoc_config.get('executable', 'pandoc')
        self.input_format = pandoc_config.get('input_format', 'markdown')
        self.timeout = pandoc_config.get('timeout', 120)
        self.extra_args = list(pandoc_config.get('extra_args') or [])
        self.no_highlight_arg = pandoc_config.get('no_highlight_arg', '--no-highlight')
        self.filter_path = BOOK_FILTER

    def convert(self, path: Union[str, Path], options: ConversionOptions, sink: TextIO) -> None:
        """
        Render ``path`` to LaTeX and write it to ``sink``.

        Args:
            path: Manuscript file to convert
            options: Conversion options
            sink: Text stream receiving the rendered body

        Raises:
            OSError: If the file cannot be read
            ConversionError: If the file is not UTF-8, or Pandoc is missing,
                times out or fails
        """
        path = Path(path)
        try:
            source = path.read_text(encoding='utf-8')
        except UnicodeDecodeError as e:
            raise ConversionError(path, f"not valid UTF-8: {e}")

        start_time = time.time()
        args = self._build_pandoc_command(path, options)
        result = self._execute_pandoc(path, args, source)

        sink.write(result.stdout)
        logger.debug("Converted %s in %.2f seconds", path, time.time() - start_time)

    def _build_pandoc_command(self, path: Path, options: ConversionOptions) -> List[str]:
        """
        Build the Pandoc command line arguments.

        Args:
            path: Manuscript file being converted
            options: Conversion options

        Returns:
            List of command arguments
        """
        args = [
            self.executable,
            '--from', self.input_format,
            '--to', 'latex',
            self.no_highlight_arg,
            '--lua-filter', str(self.filter_path),
            '--metadata', f'input-format={self.input_format}',
            '--metadata', f"accept-targets-as-text={','.join(options.accept_targets_as_text)}",
            '--metadata', f"codes-in-verbatim={'true' if options.codes_in_verbatim else 'false'}",
        ]
        args.extend(self.extra_args)

        return args

    def _execute_pandoc(self, path: Path, args: List[str], source: str) -> subprocess.CompletedProcess:
        """
        Execute Pandoc with the file contents on stdin.

        Args:
            path: Manuscript file, used for error reporting
            args: Pandoc command arguments
            source: Manuscript text

        Returns:
            Completed process result
        """
        logger.debug("Executing Pandoc: %s", ' '.join(args[:5]))

        try:
            result = subprocess.run(
                args,
                input=source,
                capture_output=True,
                text=True,
                encoding='utf-8',
                timeout=self.timeout
            )
        except FileNotFoundError:
            raise ConversionError(path, f"{self.executable} is not installed or not in PATH")
        except subprocess.TimeoutExpired:
            raise ConversionError(path, f"Pandoc timed out after {self.timeout} seconds")

        if result.returncode != 0:
            error_output = (result.stderr or result.stdout or "Unknown error").strip()
            raise ConversionError(path, error_output)

        if result.stderr:
            logger.warning("%s: %s", path, result.stderr.strip())

        return result

    def get_pandoc_info(self) -> Dict[str, Any]:
        """
        Get information about the Pandoc installation.

        Returns:
            Dictionary with Pandoc information
        """
        try:
            result = subprocess.run(
                [self.executable, '--version'],
                capture_output=True,
                text=True,
                timeout=10
            )
        except (OSError, subprocess.SubprocessError) as e:
            return {
                'error': f"Failed to get Pandoc info: {e}",
                'pandoc_available': False
            }

        version_info = result.stdout.split('\n')[0] if result.returncode == 0 else "Unknown"

        return {
            'pandoc_version': version_info,
            'pandoc_available': result.returncode == 0,
            'input_format': self.input_format,
            'filter': str(self.filter_path),
            'filter_available': self.filter_path.exists()
        }
