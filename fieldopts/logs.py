"""
Package logging.

Every module logs under the 'fieldopts' namespace and stays silent until a
handler is attached. enable_debug_logging() attaches a rich handler on stderr
that traces registry construction and every parsed token.
"""
import logging

from rich.console import Console
from rich.logging import RichHandler

from .utils import Unset

logger = logging.getLogger("fieldopts")
logger.addHandler(logging.NullHandler())

_handler = None


def enable_debug_logging(enabled=True, /, console=Unset):
    """
    turn the package debug trace on or off.

    parameters
    - enabled: bool, attach (True) or detach (False) the trace handler.
    - console: rich Console to write to; defaults to a stderr console.

    returns
    - the package logger.
    """
    global _handler
    if _handler is not None:
        logger.removeHandler(_handler)
        _handler = None

    if enabled:
        _handler = RichHandler(
            console=Console(stderr=True) if console is Unset else console,
            show_time=False,
            show_path=True,
            markup=False,
            rich_tracebacks=True,
        )
        _handler.setLevel(logging.DEBUG)
        logger.addHandler(_handler)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
    else:
        logger.setLevel(logging.NOTSET)
        logger.propagate = True
    return logger


__all__ = (
    "enable_debug_logging",
)
