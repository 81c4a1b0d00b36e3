"""
Paper size resolution for book-printer.

The document class needs a paper size. It is looked up once per run from
an ordered chain of strategies: the system paper configuration tool, an
environment variable, and finally a hard-coded default. The first
strategy to return a non-empty value wins.
"""

import functools
import logging
import os
import subprocess
from typing import Callable, Dict, Any, List, Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_PAPER_SIZE = "a4"
DEFAULT_PAPER_COMMAND = ("paperconf",)
DEFAULT_PAPER_ENV_VAR = "PAPER"

PaperStrategy = Callable[[], Optional[str]]


def query_system_paper(command: Sequence[str] = DEFAULT_PAPER_COMMAND,
                       timeout: float = 5) -> Optional[str]:
    """
    Ask the host for its configured paper size.

    Any failure to run the tool counts as "no answer".

    Args:
        command: Command line of the paper configuration tool
        timeout: Seconds to wait for the tool

    Returns:
        The reported size with trailing whitespace removed, or None
    """
    if not command:
        return None

    try:
        result = subprocess.run(
            list(command),
            capture_output=True,
            text=True,
            timeout=timeout
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("Paper size query %s failed: %s", command[0], e)
        return None

    if result.returncode != 0:
        logger.debug("Paper size query %s exited with %d", command[0], result.returncode)
        return None

    return result.stdout.rstrip() or None


def read_paper_env(env_var: str = DEFAULT_PAPER_ENV_VAR) -> Optional[str]:
    """Read the paper size override from the environment."""
    return os.environ.get(env_var) or None


def strategy_name(strategy: PaperStrategy) -> str:
    """Name of the function behind a strategy, unwrapping ``functools.partial``."""
    func = getattr(strategy, "func", strategy)
    return getattr(func, "__name__", repr(func))


class PaperSizeResolver:
    """
    Resolve the paper size through an ordered list of strategies.

    Strategies are zero-argument callables returning a size or None.
    The chain always ends in ``default``, so the result is never empty.
    """

    def __init__(self, strategies: Optional[List[PaperStrategy]] = None,
                 default: str = DEFAULT_PAPER_SIZE):
        if not default:
            raise ValueError("A non-empty fallback paper size is required")

        if strategies is None:
            strategies = [query_system_paper, read_paper_env]

        self.strategies = list(strategies)
        self.default = default

    @classmethod
    def from_config(cls, paper_config: Dict[str, Any]) -> 'PaperSizeResolver':
        """
        Build a resolver from the ``paper`` configuration section.

        Args:
            paper_config: Dictionary with ``command``, ``env_var``,
                ``default`` and ``timeout`` keys

        Returns:
            Configured resolver
        """
        command = paper_config.get('command', DEFAULT_PAPER_COMMAND)
        if isinstance(command, str):
            command = command.split()
        env_var = paper_config.get('env_var', DEFAULT_PAPER_ENV_VAR)
        timeout = paper_config.get('timeout', 5)

        strategies = [
            functools.partial(query_system_paper, command, timeout),
            functools.partial(read_paper_env, env_var),
        ]
        return cls(strategies, default=paper_config.get('default') or DEFAULT_PAPER_SIZE)

    def resolve(self) -> str:
        """
        Return the first non-empty paper size from the strategy chain.

        Returns:
            Paper size token such as ``a4`` or ``letter``
        """
        for strategy in self.strategies:
            size = strategy()
            if size:
                logger.debug("Paper size %r from %s", size, strategy_name(strategy))
                return size

        logger.debug("Paper size falling back to %r", self.default)
        return self.default


def paper_option(size: str) -> str:
    """Turn a paper size token into its document class option (``a4`` -> ``a4paper``)."""
    return f"{size}paper"


def resolve_paper_size(paper_config: Optional[Dict[str, Any]] = None) -> str:
    """
    Convenience function to resolve the paper size.

    Args:
        paper_config: Optional ``paper`` configuration section

    Returns:
        Resolved paper size token
    """
    if paper_config is None:
        return PaperSizeResolver().resolve()
    return PaperSizeResolver.from_config(paper_config).resolve()
