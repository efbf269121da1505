"""Errors that carry a numeric code alongside a formatted message."""

from __future__ import annotations

import sys
from typing import Any, TextIO


class CodedError(Exception):
    """An exception with an integer code and a human readable message."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


def new_error(code: int, fmt: str, *args: Any) -> CodedError:
    """Build a CodedError whose message is ``fmt`` formatted printf-style with ``args``."""
    message = fmt % args if args else fmt
    return CodedError(code, message)


def print_error(err: CodedError | None, file: TextIO | None = None) -> None:
    """Write ``Error [code]: message`` to ``file`` (standard error by default)."""
    if err is None:
        return
    stream = sys.stderr if file is None else file
    stream.write(f"Error [{err.code}]: {err.message}\n")


def is_error(err: object) -> bool:
    """Return True when ``err`` holds an error."""
    return err is not None