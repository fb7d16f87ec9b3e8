"""Explicit failure-swallowing for external-call boundaries.

Status queries degrade to a default value instead of aborting. Every
such call goes through ``or_else`` and is logged there.
"""

import logging
from collections.abc import Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def or_else(
    default: T,
    call: Callable[[], T],
    what: str,
    level: int = logging.DEBUG,
) -> T:
    """Return ``call()``, or ``default`` if it raises.

    Args:
        default: Value returned when the call fails.
        call: Zero-argument callable wrapping the external query.
        what: Short description used in the log message.
        level: Log level for the failure (expected absence stays quiet).
    """
    try:
        return call()
    except Exception as e:
        logger.log(level, f"{what} failed, using default: {e}")
        return default
