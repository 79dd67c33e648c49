"""
Configuration du logging pour l'analyseur.

Les messages passent par un RichHandler sur stderr pour ne pas se mêler
aux rapports JSON/CSV écrits sur stdout.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """
    Configure le logging avec un handler rich.

    Args:
        verbose: Active le niveau DEBUG
        quiet: N'affiche que les erreurs

    Returns:
        Logger racine du paquet js_complexity
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        markup=False,
        show_time=verbose,
        show_path=verbose,
    )

    logger = logging.getLogger("js_complexity")
    # Reconfiguration idempotente: un seul handler rich à la fois
    for existing in list(logger.handlers):
        if isinstance(existing, RichHandler):
            logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    return logger
