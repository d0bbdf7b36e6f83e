"""Builds the label usage index from fetched content."""

from typing import Dict, Iterable

from src.label_operations.models import ContentItem, LabelUsage


def aggregate(
    page_items: Iterable[ContentItem],
    blog_post_items: Iterable[ContentItem],
) -> Dict[str, LabelUsage]:
    """Tally label occurrences across pages and blog posts.

    Every label occurrence the API reports is counted, including a repeat
    within one item's list. The mapping keeps first-seen order (page scan,
    then labels first met in the blog post scan); callers sort if they need to.

    Args:
        page_items: Pages with label metadata
        blog_post_items: Blog posts with label metadata

    Returns:
        Mapping of label name to its LabelUsage

    Example:
        >>> usage = aggregate(pages, posts)
        >>> usage["draft"].total_count
        3
    """
    usage: Dict[str, LabelUsage] = {}

    for item in page_items:
        for name in item.labels:
            usage.setdefault(name, LabelUsage(name)).page_count += 1

    for item in blog_post_items:
        for name in item.labels:
            usage.setdefault(name, LabelUsage(name)).blog_post_count += 1

    return usage
