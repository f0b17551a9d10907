"""Error taxonomy shared by every shellkit command.

All errors are surfaced to the immediate caller; nothing here is retried.
The CLI maps any ``ShellkitError`` to a single ``kind: message`` line and a
non-zero exit code.
"""


class ShellkitError(Exception):
    """Base class for errors reported to the user."""

    kind = "ShellkitError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidInputError(ShellkitError):
    """Bad path, bad option combination or missing destination.

    Raised before any file is written, so the operation is a no-op.
    """

    kind = "InvalidInputError"


class NotFoundError(ShellkitError):
    """The source path does not exist."""

    kind = "NotFoundError"


class ChunkIOError(ShellkitError):
    """Reading the source or writing an output failed mid-operation.

    Outputs written before the failure are left on disk. The underlying
    ``OSError`` (or decode error) is available as ``__cause__``.
    """

    kind = "IOError"

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path
