import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level='WARNING', console=None):
    """Attach a RichHandler to the ``skinpack`` logger.

    Safe to call more than once; the level is updated and no second
    handler is added.
    """
    logger = logging.getLogger('skinpack')
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logger.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=console or Console(stderr=True),
                              show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter('%(message)s'))
        logger.addHandler(handler)
    return logger
