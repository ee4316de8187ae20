"""Logging for gomodclean.

Records go through the same rich console the CLI draws its spinner and
tables on, so log lines interleave with live output instead of tearing it.
"""

import logging

from rich.logging import RichHandler

from gomodclean.display import console

logger = logging.getLogger("gomodclean")


def configure_logging(verbose: bool):
    """Attach a console handler to the package logger; DEBUG when verbose."""
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if not logger.handlers:
        handler = RichHandler(
            console=console,
            show_time=False,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
