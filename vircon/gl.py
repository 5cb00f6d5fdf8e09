"""Graphics error codes and result logging."""

from __future__ import annotations

from enum import IntEnum

from .log import fail, log_line


class GLError(IntEnum):
    """Error codes reported by the graphics library."""

    NO_ERROR = 0x0000
    INVALID_ENUM = 0x0500
    INVALID_VALUE = 0x0501
    INVALID_OPERATION = 0x0502
    STACK_OVERFLOW = 0x0503
    STACK_UNDERFLOW = 0x0504
    OUT_OF_MEMORY = 0x0505
    INVALID_FRAMEBUFFER_OPERATION = 0x0506
    TABLE_TOO_LARGE = 0x8031


def gl_error_string(code: int) -> str:
    """Return the symbolic name of an error code, or 'Unknown error'."""
    try:
        return f"GL_{GLError(code).name}"
    except ValueError:
        return "Unknown error"


def log_gl_result(entry_text: str, code: int) -> None:
    """Log the result of an operation; raise ConsoleError if it failed."""
    log_line(f"{entry_text}: {gl_error_string(code)}")
    if code != GLError.NO_ERROR:
        fail("An OpenGL error happened")