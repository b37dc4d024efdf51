"""Exception hierarchy for fixture generation."""

from __future__ import annotations


class TestgenError(Exception):
    """
    Base exception for all fixture generation errors.

    Every subclass is fatal to the invocation: the CLI reports it and exits
    with status 1 before anything is written to standard output.

    Attributes:
        message: Human-readable error description.
    """

    # Keep pytest from collecting this class when imported into test modules.
    __test__ = False

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class ArgumentError(TestgenError, ValueError):
    """Raised for malformed or out-of-range invocation arguments."""


class UniverseError(TestgenError):
    """Raised when the derived key-value universe violates its own invariants."""


class SelectionError(TestgenError):
    """
    Raised when no key satisfies a requested (mode, position) combination.

    Attributes:
        mode: The existence mode token (`exist` or `nonexist`).
        position: The position token (`left`, `middle` or `right`).
        size: Number of keys in the index the selection ran against.
        detail: Why the combination could not be satisfied.
    """

    def __init__(self, mode: str, position: str, size: int, detail: str) -> None:
        self.mode = mode
        self.position = position
        self.size = size
        self.detail = detail
        super().__init__(f"cannot select {mode} {position} key among {size} keys: {detail}")


class CollaboratorError(TestgenError):
    """
    Raised when the tree/proof backend fails.

    The backend's exception is chained as `__cause__`.

    Attributes:
        operation: The backend operation that failed.
        key: The selected key the scenario is being proven for.
        mode: The existence mode token.
    """

    def __init__(self, operation: str, key: bytes, mode: str, cause: BaseException) -> None:
        self.operation = operation
        self.key = key
        self.mode = mode

        super().__init__(f"{operation} failed for key {key.hex()} ({mode}): {cause}")


class EncodingError(TestgenError):
    """Raised when a proof or fixture cannot be serialized or parsed."""
