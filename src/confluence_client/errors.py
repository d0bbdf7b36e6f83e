"""Typed exception hierarchy for Confluence-related errors.

This module defines all custom exceptions used by the Confluence client library.
All exceptions inherit from ConfluenceError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import Optional


class LabelOrganizerError(Exception):
    """Base exception for all label-organizer errors.

    Use this to catch any application-level error from the tool.
    """
    pass


class ConfluenceError(LabelOrganizerError):
    """Base exception for all Confluence-related errors."""
    pass


class APIError(ConfluenceError):
    """Raised when a call to the Confluence REST API fails.

    Attributes:
        resource: REST path of the failed request (e.g. "rest/api/content")
    """

    def __init__(self, message: str, resource: Optional[str] = None):
        super().__init__(message)
        self.resource = resource


class InvalidCredentialsError(APIError):
    """Raised when API credentials are invalid or authentication fails."""

    def __init__(self, user: str, endpoint: str, resource: Optional[str] = None):
        super().__init__(
            f"API key is invalid (user: {user}, endpoint: {endpoint})",
            resource,
        )
        self.user = user
        self.endpoint = endpoint


class ContentNotFoundError(APIError):
    """Raised when a requested content item or space does not exist."""

    def __init__(self, resource: str):
        super().__init__(f"Resource {resource} not found", resource)


class APIUnreachableError(APIError):
    """Raised when the Confluence API is not available or unreachable."""

    def __init__(self, endpoint: str, resource: Optional[str] = None):
        super().__init__(f"API is not available at {endpoint}", resource)
        self.endpoint = endpoint


class APIAccessError(APIError):
    """Raised when API access fails after retries or due to access restrictions."""

    def __init__(
        self,
        message: str = "Confluence API failure (after 3 retries)",
        resource: Optional[str] = None,
    ):
        super().__init__(message, resource)
