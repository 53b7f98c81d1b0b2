"""Interactive yes/no confirmation.

The prompt is drawn on stderr so a redirected stdout never swallows it.
Follows the best-effort pattern: if the prompt itself cannot be shown or
answered (no terminal, EOF, Ctrl-C), the answer is "no" rather than an error.
"""

from __future__ import annotations

import logging
import sys

import click

logger = logging.getLogger(__name__)


def ask(prompt: str, *, default: bool = True) -> bool:
    """Ask a yes/no question on the terminal. Never raises."""
    try:
        if not sys.stderr.isatty():
            logger.debug("stderr is not a terminal, treating confirmation as declined")
            return False
        return click.confirm(prompt, default=default, err=True)
    except Exception:
        # click.Abort (EOF, Ctrl-C) lands here too.
        logger.debug("Confirmation prompt failed, treating as declined", exc_info=True)
        return False
