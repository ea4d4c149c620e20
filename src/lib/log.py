"""
Verbosity-gated logging on top of loguru

The scanners, transformer and renderer are called by markdown-it, deep
below any code that knows how chatty a compile should be. Rather than
threading a verbosity argument through every rule, the compile pipeline
connects its CompileState here once and LOG() consults it:

    from mdjsx.lib.log import LOG, state_connectToLogger

    state_connectToLogger(state)
    LOG("Parsing Markdown source...", level=1)
    LOG(f"Parsed {count} block tokens", level=2)
    LOG("Closing </Foo> on line 3 did not compile", level=3)

Levels:
    1 = pipeline milestones
    2 = per-stage detail (token counts, tag sets)
    3 = scanner and transformer traces

Library use without a connected state is silent. The connection lives in
a ContextVar, so concurrent compiles in separate contexts keep their own
verbosity.
"""

import sys
from contextvars import ContextVar
from typing import Any, Optional

from loguru import logger


_connected_state: ContextVar[Optional[Any]] = ContextVar('mdjsx_state', default=None)

LOG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> │ "
    "<magenta>{module: <11}</magenta> │ "
    "<cyan>{function}:{line}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=LOG_FORMAT, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Make state.verbosity govern LOG() in the current context

    Args:
        state: Anything with a ``verbosity`` attribute, normally the
               CompileState at the start of compile_markdown()
    """
    _connected_state.set(state)


def state_disconnectFromLogger() -> None:
    """Detach the connected state; LOG() goes silent again"""
    _connected_state.set(None)


def verbosity_get() -> int:
    """Verbosity of the connected state, 0 when nothing is connected"""
    return getattr(_connected_state.get(), 'verbosity', 0)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Emit message when the connected verbosity is at least level

    Args:
        message: Text to log
        level: Required verbosity (1, 2 or 3)
        **kwargs: Passed through to loguru for message formatting
    """
    if verbosity_get() >= level:
        logger.opt(depth=1).debug(message, **kwargs)
