"""Error types raised by the message resolution engine and its collaborators."""

from typing import Optional


class FruitmailError(Exception):
    """Base class for every error the engine surfaces to callers."""


class InvalidIdentifierError(FruitmailError):
    """Raised when a caller-supplied identifier fails its format check.

    Raised before any AppleScript is built or run.
    """


class MessageNotFoundError(FruitmailError):
    """Raised when no message matched any resolution tier."""

    def __init__(self, message: str = "Message not found"):
        super().__init__(message)


class AppleScriptRuntimeError(FruitmailError):
    """Raised when Mail reported an error while running a well-formed script."""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"AppleScript error {code}: {message}")


class DispatchError(FruitmailError):
    """Raised when the script could not be run at all."""


class AppleScriptExecutionError(FruitmailError):
    """Raised by the osascript runner when the process fails.

    Only the dispatcher sees this; it is always re-labelled before
    reaching facade callers.
    """

    def __init__(self, message: str, returncode: Optional[int] = None):
        self.returncode = returncode
        super().__init__(message)


class MailDatabaseNotFoundError(FruitmailError):
    """Raised when no Mail envelope database can be located."""


class MailDatabaseAccessError(FruitmailError):
    """Raised when the Mail data directory cannot be read."""
