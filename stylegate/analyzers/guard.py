"""Keep an analysis call from terminating the host process.

Some analyzers end with ``sys.exit`` (or ``os._exit``) even on success.
``no_exit()`` turns both into exceptions for the duration of the block and
absorbs them, so the exit is indistinguishable from a normal return.

The override of ``os._exit`` is process-wide. Entries are reentrant and
serialized by a lock: a second thread waits for the first block to finish
instead of running under its policy. Do not rely on this for parallel
analysis; run the analyzer as a subprocess instead.
"""

from __future__ import annotations

import logging
import os
import threading
from contextlib import contextmanager
from typing import Any, Callable, Iterator, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_lock = threading.RLock()
_depth = 0


class ExitAttempted(Exception):
    """Raised in place of a real ``os._exit``."""

    def __init__(self, code: Any = None):
        self.code = code
        super().__init__(f"exit attempted with code {code!r}")


def _intercept_exit(code: Any = 0) -> None:
    raise ExitAttempted(code)


@contextmanager
def no_exit() -> Iterator[None]:
    global _depth

    with _lock:
        original = os._exit
        if _depth == 0:
            os._exit = _intercept_exit
        _depth += 1
        try:
            yield
        except (SystemExit, ExitAttempted) as e:
            logger.debug("Swallowed exit request (code=%r)", e.code)
        finally:
            _depth -= 1
            if _depth == 0:
                os._exit = original


def run_isolated(action: Callable[..., T], *args: Any, **kwargs: Any) -> T | None:
    with no_exit():
        return action(*args, **kwargs)
    return None
