"""Content retrieval for label operations.

Fetches pages and blog posts from a space, optionally filtered by label,
following the API's continuation links until every result has been read.
"""

import logging
from typing import TYPE_CHECKING, List, Optional

from src.label_operations.models import BLOG_POST, PAGE, ContentItem

if TYPE_CHECKING:
    from src.confluence_client.api_wrapper import APIWrapper

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100
LABELS_EXPAND = "metadata.labels"


class ContentFetcher:
    """Retrieves content items with their label metadata.

    Each call reads the result set page by page: the next request starts
    where the previous one ended, and the loop stops once a response has no
    'next' link or no results. The server may cap the page size below the
    requested limit, so a short page alone does not end the loop.

    Example:
        >>> fetcher = ContentFetcher(api, page_size=100)
        >>> pages = fetcher.fetch_pages("TEAM", expand_labels=True)
    """

    def __init__(self, api: "APIWrapper", page_size: int = DEFAULT_PAGE_SIZE):
        if page_size < 1:
            raise ValueError(f"page_size must be at least 1, got {page_size}")
        self.api = api
        self.page_size = page_size

    def fetch_content(
        self,
        space_key: str,
        content_type: Optional[str] = None,
        label: Optional[str] = None,
        expand_labels: bool = False,
        status: Optional[str] = None,
    ) -> List[ContentItem]:
        """Fetch every content item matching the filters.

        Args:
            space_key: Space to read from
            content_type: "page", "blogpost", or None for both
            label: Only content carrying this label
            expand_labels: Include label metadata on each item
            status: Content status filter (e.g., "current")

        Returns:
            Content items in API order

        Raises:
            APIError: If any request fails (no partial list is returned)
        """
        if content_type not in (None, PAGE, BLOG_POST):
            raise ValueError(f"Unsupported content type: {content_type}")

        items: List[ContentItem] = []
        start = 0
        while True:
            data = self.api.list_content(
                space_key,
                content_type=content_type,
                label=label,
                expand=LABELS_EXPAND if expand_labels else None,
                status=status,
                start=start,
                limit=self.page_size,
            )
            results = data.get("results") or []
            items.extend(ContentItem.from_api(result) for result in results)

            has_next = bool((data.get("_links") or {}).get("next"))
            if not results or not has_next:
                break
            start += len(results)

        logger.debug(
            f"Fetched {len(items)} item(s) from {space_key} "
            f"(type={content_type or 'any'}, label={label or '-'})"
        )
        return items

    def fetch_pages(
        self,
        space_key: str,
        expand_labels: bool = False,
        status: Optional[str] = None,
    ) -> List[ContentItem]:
        return self.fetch_content(space_key, PAGE, expand_labels=expand_labels, status=status)

    def fetch_blog_posts(self, space_key: str, expand_labels: bool = False) -> List[ContentItem]:
        return self.fetch_content(space_key, BLOG_POST, expand_labels=expand_labels)

    def fetch_labeled_content(self, space_key: str, label: str) -> List[ContentItem]:
        """Fetch pages, then blog posts, currently carrying a label.

        The content endpoint only returns pages when no type is given, so
        each type is listed separately.
        """
        pages = self.fetch_content(space_key, PAGE, label=label)
        blog_posts = self.fetch_content(space_key, BLOG_POST, label=label)
        return pages + blog_posts
