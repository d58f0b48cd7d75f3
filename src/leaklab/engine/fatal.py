"""
Fail-fast handling for allocation failures.

Running out of memory is the point of the exercise, so it is never recovered:
the error is logged and the process aborts, which also leaves a core dump
behind for the dump-analysis part of the lab.
"""

import logging
import os
from typing import Callable

from ..validation import handle_error, ErrorSeverity

logger = logging.getLogger(__name__)

FatalHandler = Callable[[BaseException, str], None]


def abort_process(error: BaseException, context: str) -> None:
    """Log ``error`` as critical and abort the interpreter."""
    handle_error(
        error=error,
        context=context,
        severity=ErrorSeverity.CRITICAL,
        reraise=False,
        logger=logger,
    )
    logging.shutdown()
    os.abort()
