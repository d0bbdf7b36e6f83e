"""Data models for label operations.

All models use dataclasses. Nothing here is persisted: every object is
rebuilt from the Confluence API on each request.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

PAGE = "page"
BLOG_POST = "blogpost"


@dataclass
class OrganizerConfig:
    """Settings for label operations (loaded from .label-organizer/config.yaml).

    Attributes:
        fallback_space_key: Space used when no space can be resolved
        page_size: Results requested per content API call
        max_workers: Parallel items per mutation (1 = strictly sequential)
        request_timeout: Per-request HTTP timeout in seconds
    """
    fallback_space_key: str = "DEV"
    page_size: int = 100
    max_workers: int = 1
    request_timeout: int = 30


class ResolutionSource(Enum):
    """Where a resolved space key came from."""
    CONTEXT = "context"
    API = "api"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class SpaceResolution:
    """Outcome of space key resolution.

    Attributes:
        space_key: The key to operate on (never empty)
        source: How the key was obtained
        reason: Why the fallback was used (None unless source is FALLBACK)
    """
    space_key: str
    source: ResolutionSource
    reason: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.source is ResolutionSource.FALLBACK


@dataclass
class ContentItem:
    """A page or blog post with the label names the API reported for it.

    Attributes:
        content_id: Confluence content ID
        title: Content title
        content_type: "page" or "blogpost"
        labels: Label names in API order (empty when not expanded)
    """
    content_id: str
    title: str
    content_type: str = PAGE
    labels: List[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "ContentItem":
        """Build a ContentItem from a REST content result."""
        labels_data = data.get("metadata", {}).get("labels", {}).get("results", [])
        return cls(
            content_id=str(data.get("id", "")),
            title=data.get("title", ""),
            content_type=data.get("type", PAGE),
            labels=[label.get("name", "") for label in labels_data if label.get("name")],
        )


@dataclass(frozen=True)
class ContentReference:
    """Minimal page projection used to pick pages for labelling."""
    id: str
    title: str

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "title": self.title}


@dataclass
class LabelUsage:
    """Usage tally for one label across pages and blog posts.

    total_count is derived so it can never drift from its parts.
    """
    name: str
    page_count: int = 0
    blog_post_count: int = 0

    @property
    def total_count(self) -> int:
        return self.page_count + self.blog_post_count

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "pageCount": self.page_count,
            "blogPostCount": self.blog_post_count,
            "totalCount": self.total_count,
        }


@dataclass(frozen=True)
class AddLabelRequest:
    label_name: str
    page_ids: Tuple[str, ...]


@dataclass(frozen=True)
class DeleteLabelsRequest:
    labels: Tuple[str, ...]


@dataclass(frozen=True)
class MergeLabelsRequest:
    source_labels: Tuple[str, ...]
    target_label: str


@dataclass
class MutationResult:
    """Per-item outcome of a bulk label mutation.

    Attributes:
        succeeded: (content_id, step) pairs applied, in order; step is
            "+label" for an attach and "-label" for a detach
        failed: (content_id, reason) pairs that failed
        skipped: Labels skipped without any API call
    """
    succeeded: List[Tuple[str, str]] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failed

    @property
    def succeeded_ids(self) -> List[str]:
        """Content IDs touched by at least one applied step, first-seen order."""
        seen: Dict[str, None] = {}
        for content_id, _ in self.succeeded:
            seen.setdefault(content_id, None)
        return list(seen)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "succeeded": [list(step) for step in self.succeeded],
            "failed": [list(failure) for failure in self.failed],
            "skipped": list(self.skipped),
        }
