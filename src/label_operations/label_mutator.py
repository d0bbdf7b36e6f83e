"""Bulk label mutations: add, delete and merge.

Every operation is a series of independent per-item API calls with no
rollback. The first failed call stops the operation and raises
BulkMutationError carrying the steps already applied. Requests are validated
before any call is issued.

With max_workers > 1 the items of one label are processed in a thread pool.
Each item's own steps (attach then detach for a merge) still run in order
inside a single task; only the order across items is lost.
"""

import logging
import re
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

from src.confluence_client.api_wrapper import CONTENT_PATH
from src.confluence_client.errors import APIAccessError, APIError
from src.label_operations.errors import BulkMutationError, ValidationError
from src.label_operations.models import (
    AddLabelRequest,
    DeleteLabelsRequest,
    MergeLabelsRequest,
    MutationResult,
)

if TYPE_CHECKING:
    from src.confluence_client.api_wrapper import APIWrapper
    from src.label_operations.content_fetcher import ContentFetcher

logger = logging.getLogger(__name__)

ATTACH = "+"
DETACH = "-"

# (content_id, steps) where each step is ATTACH/DETACH followed by a label name
WorkUnit = Tuple[str, List[str]]

_CONTENT_ID = re.compile(r'^\d+$')


def _clean_label(name: Optional[str], field: str) -> str:
    if name is None or not str(name).strip():
        raise ValidationError("label name cannot be empty", field)
    return str(name).strip()


def _clean_labels(names: Optional[Iterable[str]], field: str) -> List[str]:
    """Strip, validate and de-duplicate label names, keeping first-seen order."""
    if isinstance(names, str):
        names = [names]
    cleaned: List[str] = []
    for name in names or []:
        label = _clean_label(name, field)
        if label not in cleaned:
            cleaned.append(label)
    if not cleaned:
        raise ValidationError("at least one label is required", field)
    return cleaned


def _clean_page_ids(page_ids: Optional[Iterable[str]]) -> List[str]:
    if isinstance(page_ids, str):
        page_ids = [page_ids]
    cleaned: List[str] = []
    for page_id in page_ids or []:
        page_id = str(page_id).strip()
        if not _CONTENT_ID.match(page_id):
            raise ValidationError(f"'{page_id}' is not a numeric content id", "pageIds")
        if page_id not in cleaned:
            cleaned.append(page_id)
    if not cleaned:
        raise ValidationError("select at least one page", "pageIds")
    return cleaned


class LabelMutator:
    """Applies label mutations to content, one API call per item step.

    Example:
        >>> mutator = LabelMutator(api, fetcher)
        >>> result = mutator.merge_labels("TEAM", ["old"], "new")
        >>> result.succeeded
        [('123', '+new'), ('123', '-old')]
    """

    def __init__(
        self,
        api: "APIWrapper",
        fetcher: "ContentFetcher",
        max_workers: int = 1,
    ):
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.api = api
        self.fetcher = fetcher
        self.max_workers = max_workers
        self._lock = threading.Lock()

    def add_label(self, label_name: str, page_ids: Iterable[str]) -> MutationResult:
        """Attach one label to each selected page.

        Args:
            label_name: Label to attach
            page_ids: IDs of the pages to label

        Returns:
            MutationResult listing one attach step per page

        Raises:
            ValidationError: Empty label name or empty selection (no call issued)
            BulkMutationError: An attach failed; earlier attaches stay applied
        """
        request = AddLabelRequest(
            label_name=_clean_label(label_name, "labelName"),
            page_ids=tuple(_clean_page_ids(page_ids)),
        )
        operation = f"add_label({request.label_name})"
        logger.info(f"Adding label '{request.label_name}' to {len(request.page_ids)} page(s)")

        result = MutationResult()
        units = [(page_id, [ATTACH + request.label_name]) for page_id in request.page_ids]
        self._execute(operation, units, result)

        logger.info(f"Label '{request.label_name}' added to {len(result.succeeded_ids)} page(s)")
        return result

    def delete_labels(self, space_key: str, labels: Iterable[str]) -> MutationResult:
        """Remove labels from all content in a space that carries them.

        For each label the full set of labelled content is fetched before the
        first detach call is issued.

        Raises:
            ValidationError: No label given (no call issued)
            BulkMutationError: A lookup or detach failed; earlier detaches stay applied
        """
        request = DeleteLabelsRequest(labels=tuple(_clean_labels(labels, "labels")))
        operation = f"delete_labels({', '.join(request.labels)})"
        logger.info(f"Deleting {len(request.labels)} label(s) in space {space_key}")

        result = MutationResult()
        for label in request.labels:
            items = self._lookup(operation, space_key, label, result)
            logger.debug(f"  '{label}' is on {len(items)} item(s)")
            units = [(item.content_id, [DETACH + label]) for item in items]
            self._execute(operation, units, result)

        logger.info(f"Deleted labels with {len(result.succeeded)} detach call(s)")
        return result

    def merge_labels(
        self,
        space_key: str,
        source_labels: Iterable[str],
        target_label: str,
    ) -> MutationResult:
        """Replace source labels with the target label on all their content.

        The target is attached before the source is detached, so a failure
        between the two leaves the target in place. Sources equal to the
        target are skipped without any API call.

        Raises:
            ValidationError: Empty target, no sources, or every source equals the target
            BulkMutationError: A lookup, attach or detach failed
        """
        target = _clean_label(target_label, "targetLabel")
        sources = _clean_labels(source_labels, "sourceLabels")
        skipped = [source for source in sources if source == target]
        request = MergeLabelsRequest(
            source_labels=tuple(source for source in sources if source != target),
            target_label=target,
        )
        if not request.source_labels:
            raise ValidationError(
                f"every source label equals the target '{target}'", "sourceLabels"
            )

        operation = f"merge_labels({', '.join(request.source_labels)} -> {target})"
        logger.info(
            f"Merging {len(request.source_labels)} label(s) into '{target}' in space {space_key}"
        )

        result = MutationResult(skipped=skipped)
        for source in request.source_labels:
            items = self._lookup(operation, space_key, source, result)
            logger.debug(f"  '{source}' is on {len(items)} item(s)")
            units = [(item.content_id, [ATTACH + target, DETACH + source]) for item in items]
            self._execute(operation, units, result)

        logger.info(f"Merged into '{target}' on {len(result.succeeded_ids)} item(s)")
        return result

    def _lookup(self, operation: str, space_key: str, label: str, result: MutationResult):
        """Fetch content carrying a label; a failure is recorded as 'label:<name>'.

        An item without a numeric id fails the lookup before any write.
        """
        try:
            items = self.fetcher.fetch_labeled_content(space_key, label)
            bad = [item for item in items if not _CONTENT_ID.match(item.content_id)]
            if bad:
                raise APIAccessError(
                    f"Lookup of label '{label}' returned content with invalid id '{bad[0].content_id}'",
                    CONTENT_PATH,
                )
        except APIError as e:
            result.failed.append((f"label:{label}", str(e)))
            logger.error(f"  ✗ Lookup of label '{label}' failed: {e}")
            raise BulkMutationError(operation, result, e) from e
        return items

    def _execute(self, operation: str, units: List[WorkUnit], result: MutationResult) -> None:
        """Run work units, sequentially or in a bounded pool.

        Raises:
            BulkMutationError: On the first failed step
        """
        if self.max_workers == 1 or len(units) <= 1:
            for content_id, steps in units:
                try:
                    self._apply_unit(content_id, steps, result)
                except APIError as e:
                    raise BulkMutationError(operation, result, e) from e
            return

        stop = threading.Event()
        first_error: Optional[APIError] = None

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                executor.submit(self._apply_unit_unless_stopped, stop, content_id, steps, result): content_id
                for content_id, steps in units
            }
            for future in as_completed(futures):
                try:
                    future.result()
                except APIError as e:
                    stop.set()
                    if first_error is None:
                        first_error = e

        if first_error is not None:
            raise BulkMutationError(operation, result, first_error) from first_error

    def _apply_unit_unless_stopped(
        self,
        stop: threading.Event,
        content_id: str,
        steps: List[str],
        result: MutationResult,
    ) -> None:
        if stop.is_set():
            return
        try:
            self._apply_unit(content_id, steps, result)
        except APIError:
            stop.set()
            raise

    def _apply_unit(self, content_id: str, steps: List[str], result: MutationResult) -> None:
        """Apply one item's steps in order, recording each outcome."""
        for step in steps:
            action, label = step[0], step[1:]
            try:
                if action == ATTACH:
                    self.api.attach_label(content_id, label)
                else:
                    self.api.detach_label(content_id, label)
            except APIError as e:
                with self._lock:
                    result.failed.append((content_id, str(e)))
                logger.error(f"  ✗ {step} on {content_id} failed: {e}")
                raise
            with self._lock:
                result.succeeded.append((content_id, step))
            logger.debug(f"  ✓ {step} on {content_id}")
