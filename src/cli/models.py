"""Exit codes reported by the label-organizer CLI."""

from enum import IntEnum

from src.confluence_client.errors import APIUnreachableError, InvalidCredentialsError
from src.label_operations.errors import BulkMutationError


class ExitCode(IntEnum):
    """Process exit status of a label-organizer command.

    Code 2 stays unused so it never collides with typer's own usage errors.
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    AUTH_ERROR = 3
    NETWORK_ERROR = 4
    PARTIAL_FAILURE = 5

    @classmethod
    def for_error(cls, error: Exception) -> "ExitCode":
        """Pick the exit code for a failed command.

        A bulk write that stopped half way is reported as a partial failure
        even when its underlying cause was an auth or network problem.
        """
        if isinstance(error, BulkMutationError):
            return cls.PARTIAL_FAILURE
        if isinstance(error, InvalidCredentialsError):
            return cls.AUTH_ERROR
        if isinstance(error, APIUnreachableError):
            return cls.NETWORK_ERROR
        return cls.GENERAL_ERROR
