"""Typed exception hierarchy for label operations.

ValidationError is raised before any API call is issued. BulkMutationError
reports a write that stopped part way, with the steps already applied.
"""

from typing import TYPE_CHECKING, Optional

from src.confluence_client.errors import APIError, LabelOrganizerError

if TYPE_CHECKING:
    from src.label_operations.models import MutationResult


class ValidationError(LabelOrganizerError):
    """Raised when a request fails its precondition checks."""

    def __init__(self, message: str, field: Optional[str] = None):
        if field:
            full_message = f"Invalid '{field}': {message}"
        else:
            full_message = message
        super().__init__(full_message)
        self.field = field
        self.original_message = message


class BulkMutationError(APIError):
    """Raised when a bulk label mutation aborts after a failed API call.

    Earlier calls are not rolled back; ``result`` lists what was applied
    and which item failed. The failing APIError is available as ``error``.
    """

    def __init__(self, operation: str, result: "MutationResult", error: APIError):
        applied = len(result.succeeded)
        super().__init__(
            f"{operation} aborted after {applied} applied step(s): {error}",
            error.resource,
        )
        self.operation = operation
        self.result = result
        self.error = error
