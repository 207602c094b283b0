"""Error types and user-facing error formatting."""

from __future__ import annotations

from pydantic import ValidationError


class OptimizerError(Exception):
    """Base class for errors raised by gem_optimizer."""


class IncompatibleVersionError(OptimizerError):
    """An imported configuration envelope was written by an unsupported version."""

    def __init__(self, found: object, expected: str) -> None:
        self.found = found
        self.expected = expected
        super().__init__(
            f"Incompatible configuration version {found!r}; expected {expected!r}"
        )


def format_user_error(exc: BaseException) -> str:
    """One-line explanation of ``exc`` suitable for showing to a vehicle owner."""
    if isinstance(exc, IncompatibleVersionError):
        return (
            f"This configuration file was saved by version {exc.found} and cannot be "
            f"loaded by version {exc.expected}."
        )
    if isinstance(exc, ValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        where = ".".join(str(part) for part in first.get("loc", ())) or "input"
        return f"Invalid value for {where}: {first.get('msg', 'validation failed')}"
    if isinstance(exc, OptimizerError):
        return str(exc)
    return (
        "Optimization could not be completed; factory-based settings were returned "
        f"unchanged ({type(exc).__name__})."
    )
