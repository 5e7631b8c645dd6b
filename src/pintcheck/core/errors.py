"""Exception types raised by the harness."""

from typing import Optional


class ConfigurationError(ValueError):
    """A mandatory capability is missing or a harness parameter is invalid."""


class CallbackFailure(RuntimeError):
    """
    A user capability signalled an error.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, capability: str, cause: Optional[BaseException] = None, message: str = ""):
        self.capability = capability
        self.cause = cause

        if not message:
            message = f"capability '{capability}' failed"
            if cause is not None:
                message += f": {type(cause).__name__}: {cause}"

        super().__init__(message)
