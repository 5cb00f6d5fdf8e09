"""Console-wide logging with an optional host callback."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Callable, Optional

LogCallback = Callable[[int, str], None]


@dataclass
class _LogTarget:
    """Where console log lines are sent."""

    callback: Optional[LogCallback] = None

    def replace(self, callback: Optional[LogCallback]) -> Optional[LogCallback]:
        previous, self.callback = self.callback, callback
        return previous


_target = _LogTarget()


class ConsoleError(RuntimeError):
    """Raised when the console reports an unrecoverable error."""


def set_log_callback(callback: Optional[LogCallback]) -> Optional[LogCallback]:
    """Install a host log callback (or None to log to the terminal).

    The callback receives a level from the ``logging`` module and the
    message followed by a newline. The previously installed callback is
    returned.
    """
    if callback is not None and not callable(callback):
        raise TypeError("log callback must be callable or None")
    return _target.replace(callback)


def log_line(message: str) -> None:
    """Write an informational line to the host log or to stdout."""
    if _target.callback is not None:
        _target.callback(logging.INFO, f"{message}\n")
    else:
        print(message, flush=True)


def fail(message: str) -> None:
    """Log an error and raise ConsoleError with the same message."""
    if _target.callback is not None:
        _target.callback(logging.ERROR, f"{message}\n")
    else:
        print(f"ERROR: {message}", file=sys.stderr, flush=True)
    raise ConsoleError(message)