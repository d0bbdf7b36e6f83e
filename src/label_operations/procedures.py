"""Procedure surface for label operations.

LabelProcedures is what a presentation layer calls: it resolves the space,
then delegates to the fetcher and aggregator for reads or to the mutator for
writes. handle() accepts the camelCase procedure names and JSON-style
payloads and returns JSON-ready values.
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, List, Optional

from src.label_operations.content_fetcher import ContentFetcher
from src.label_operations.errors import ValidationError
from src.label_operations.label_aggregator import aggregate
from src.label_operations.label_mutator import LabelMutator
from src.label_operations.models import (
    ContentReference,
    LabelUsage,
    MutationResult,
    OrganizerConfig,
)
from src.label_operations.space_resolver import SpaceResolver

if TYPE_CHECKING:
    from src.confluence_client.api_wrapper import APIWrapper

logger = logging.getLogger(__name__)

Context = Optional[Dict[str, Any]]


class LabelProcedures:
    """List, add, delete and merge labels in one Confluence space.

    Every call resolves its space anew; nothing is cached between calls.

    Example:
        >>> procedures = LabelProcedures(api, OrganizerConfig())
        >>> labels = procedures.get_labels({"spaceKey": "TEAM"})
        >>> procedures.handle("mergeLabels", {"sourceLabels": ["old"], "targetLabel": "new"})
        {'success': True, 'succeeded': [...], 'failed': [], 'skipped': []}
    """

    def __init__(self, api: "APIWrapper", config: Optional[OrganizerConfig] = None):
        self.api = api
        self.config = config or OrganizerConfig()
        self.resolver = SpaceResolver(api, self.config.fallback_space_key)
        self.fetcher = ContentFetcher(api, page_size=self.config.page_size)
        self.mutator = LabelMutator(api, self.fetcher, max_workers=self.config.max_workers)

    def _space_key(self, context: Context) -> str:
        hint = (context or {}).get("spaceKey")
        resolution = self.resolver.resolve(hint)
        logger.info(f"Operating on space {resolution.space_key} (from {resolution.source.value})")
        return resolution.space_key

    def get_labels(self, context: Context = None) -> List[LabelUsage]:
        """Return usage records for every label on pages and blog posts.

        Records come in first-seen order, not sorted.
        """
        space_key = self._space_key(context)
        pages = self.fetcher.fetch_pages(space_key, expand_labels=True)
        blog_posts = self.fetcher.fetch_blog_posts(space_key, expand_labels=True)
        usage = aggregate(pages, blog_posts)
        logger.info(
            f"Found {len(usage)} label(s) on {len(pages)} page(s) and {len(blog_posts)} blog post(s)"
        )
        return list(usage.values())

    def get_pages(self, context: Context = None) -> List[ContentReference]:
        """Return id and title of every current page in the space."""
        space_key = self._space_key(context)
        pages = self.fetcher.fetch_pages(space_key, status="current")
        return [ContentReference(id=page.content_id, title=page.title) for page in pages]

    def add_label(self, label_name: str, page_ids: Iterable[str]) -> MutationResult:
        return self.mutator.add_label(label_name, page_ids)

    def delete_labels(self, labels: Iterable[str], context: Context = None) -> MutationResult:
        # Validate before resolving so a bad request costs no API call
        if not labels:
            raise ValidationError("at least one label is required", "labels")
        return self.mutator.delete_labels(self._space_key(context), labels)

    def merge_labels(
        self,
        source_labels: Iterable[str],
        target_label: str,
        context: Context = None,
    ) -> MutationResult:
        if not target_label or not str(target_label).strip():
            raise ValidationError("label name cannot be empty", "targetLabel")
        if not source_labels:
            raise ValidationError("at least one label is required", "sourceLabels")
        return self.mutator.merge_labels(self._space_key(context), source_labels, target_label)

    def handle(self, name: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        """Dispatch a procedure by name with a JSON-style payload.

        Args:
            name: One of getLabels, getPages, addLabel, deleteLabels, mergeLabels
            payload: Request fields (context, labelName, pageIds, labels,
                sourceLabels, targetLabel)

        Returns:
            JSON-ready result

        Raises:
            ValidationError: Unknown procedure or invalid request
            APIError: Any API failure (BulkMutationError for partial writes)
        """
        handlers: Dict[str, Callable[[Dict[str, Any]], Any]] = {
            "getLabels": lambda p: [
                record.to_dict() for record in self.get_labels(p.get("context"))
            ],
            "getPages": lambda p: [
                page.to_dict() for page in self.get_pages(p.get("context"))
            ],
            "addLabel": lambda p: self.add_label(
                p.get("labelName"), p.get("pageIds") or []
            ).to_dict(),
            "deleteLabels": lambda p: self.delete_labels(
                p.get("labels") or [], p.get("context")
            ).to_dict(),
            "mergeLabels": lambda p: self.merge_labels(
                p.get("sourceLabels") or [], p.get("targetLabel"), p.get("context")
            ).to_dict(),
        }
        handler = handlers.get(name)
        if handler is None:
            raise ValidationError(f"unknown procedure '{name}'", "name")

        logger.debug(f"Handling procedure {name}")
        return handler(payload or {})
