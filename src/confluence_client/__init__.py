"""Confluence client library for the label organizer.

This package provides Python abstractions over the Confluence Cloud REST API
for the space, content and label calls used to organize labels.
"""

from .api_wrapper import APIWrapper
from .auth import Authenticator, Credentials
from .errors import (
    LabelOrganizerError,
    ConfluenceError,
    APIError,
    InvalidCredentialsError,
    ContentNotFoundError,
    APIUnreachableError,
    APIAccessError,
)

__all__ = [
    "APIWrapper",
    "Authenticator",
    "Credentials",
    "LabelOrganizerError",
    "ConfluenceError",
    "APIError",
    "InvalidCredentialsError",
    "ContentNotFoundError",
    "APIUnreachableError",
    "APIAccessError",
]
