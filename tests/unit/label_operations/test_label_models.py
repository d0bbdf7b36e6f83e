"""Unit tests for label_operations.models module."""

from src.label_operations.models import (
    ContentItem,
    LabelUsage,
    MutationResult,
    ResolutionSource,
    SpaceResolution,
)
from tests.fixtures import content_result


class TestContentItem:
    """Test cases for ContentItem.from_api."""

    def test_reads_label_metadata(self):
        item = ContentItem.from_api(content_result("42", "Title", ["a", "b"], content_type="blogpost"))

        assert item == ContentItem("42", "Title", "blogpost", ["a", "b"])

    def test_missing_metadata_means_no_labels(self):
        item = ContentItem.from_api({"id": 7, "title": "Bare"})

        assert item.content_id == "7"
        assert item.content_type == "page"
        assert item.labels == []


class TestLabelUsage:
    """Test cases for LabelUsage."""

    def test_total_tracks_counts(self):
        usage = LabelUsage("a")
        usage.page_count += 2
        usage.blog_post_count += 1

        assert usage.total_count == 3


class TestMutationResult:
    """Test cases for MutationResult."""

    def test_success_depends_on_failures(self):
        assert MutationResult().success
        assert not MutationResult(failed=[("1", "boom")]).success

    def test_succeeded_ids_first_seen_order(self):
        result = MutationResult(succeeded=[("2", "+t"), ("1", "+t"), ("2", "-s")])

        assert result.succeeded_ids == ["2", "1"]

    def test_to_dict(self):
        result = MutationResult(succeeded=[("1", "+t")], skipped=["t"])

        assert result.to_dict() == {
            "success": True,
            "succeeded": [["1", "+t"]],
            "failed": [],
            "skipped": ["t"],
        }


class TestSpaceResolution:
    """Test cases for SpaceResolution."""

    def test_is_fallback(self):
        assert SpaceResolution("DEV", ResolutionSource.FALLBACK, "no spaces found").is_fallback
        assert not SpaceResolution("TEAM", ResolutionSource.CONTEXT).is_fallback
