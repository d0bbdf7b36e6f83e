"""Test fixtures for label organizer tests.

This module provides sample Confluence REST responses: content results
with label metadata, paginated envelopes, and space listings.
"""

from .sample_content import (
    content_result,
    content_page,
    SAMPLE_PAGES_RESPONSE,
    SAMPLE_BLOG_POSTS_RESPONSE,
    SAMPLE_SPACES,
)

__all__ = [
    'content_result',
    'content_page',
    'SAMPLE_PAGES_RESPONSE',
    'SAMPLE_BLOG_POSTS_RESPONSE',
    'SAMPLE_SPACES',
]
