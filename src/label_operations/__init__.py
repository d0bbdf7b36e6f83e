"""Label listing, aggregation and bulk mutation for a Confluence space.

This package turns the Confluence client into the label organizer's
operations: resolve the space, fetch labelled content, tally label usage,
and add, delete or merge labels across content.
"""

from .content_fetcher import ContentFetcher
from .errors import BulkMutationError, ValidationError
from .label_aggregator import aggregate
from .label_mutator import LabelMutator
from .models import (
    ContentItem,
    ContentReference,
    LabelUsage,
    MutationResult,
    OrganizerConfig,
    ResolutionSource,
    SpaceResolution,
)
from .procedures import LabelProcedures
from .space_resolver import SpaceResolver

__all__ = [
    'ContentFetcher',
    'BulkMutationError',
    'ValidationError',
    'aggregate',
    'LabelMutator',
    'ContentItem',
    'ContentReference',
    'LabelUsage',
    'MutationResult',
    'OrganizerConfig',
    'ResolutionSource',
    'SpaceResolution',
    'LabelProcedures',
    'SpaceResolver',
]
