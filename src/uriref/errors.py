"""Exceptions raised by uriref."""

from typing import Self


class UriSyntaxError(ValueError):
    """Raised when a string cannot be parsed as a URI reference or component.

    Carries the offending input, a human-readable reason and the index of the
    violation (None when no single position is to blame).
    """

    def __init__(self: Self, input: str, reason: str, index: int | None = None) -> None:
        if index is not None and index < 0:
            raise ValueError("index must be non-negative")
        super().__init__(input, reason, index)
        self.input: str = input
        self.reason: str = reason
        self.index: int | None = index

    def __str__(self: Self) -> str:
        if self.index is None:
            return f"{self.reason}: {self.input}"
        return f"{self.reason} at index {self.index}: {self.input}"


class EncodedSlashError(ValueError):
    """Raised by decode() when "%2F" shows up and encoded slashes were not allowed."""

    def __init__(self: Self, input: str, index: int) -> None:
        super().__init__(input, index)
        self.input: str = input
        self.index: int = index

    def __str__(self: Self) -> str:
        return f"Encoded slash at index {self.index}: {self.input}"


class UriValidationError(ValueError):
    """Raised by the builder when a component or the built reference is invalid."""


class UriStateError(RuntimeError):
    """Raised when an operation conflicts with the state of its receiver."""
