"""Unit tests for label_operations.content_fetcher module."""

import pytest
from unittest.mock import Mock

from src.confluence_client.errors import APIAccessError
from src.label_operations.content_fetcher import ContentFetcher
from tests.fixtures import content_page, content_result, SAMPLE_PAGES_RESPONSE


class TestFetchContent:
    """Test cases for ContentFetcher.fetch_content."""

    def test_single_page_of_results(self):
        api = Mock()
        api.list_content.return_value = SAMPLE_PAGES_RESPONSE

        items = ContentFetcher(api).fetch_pages("TEAM", expand_labels=True)

        assert [item.content_id for item in items] == ["101", "102", "103"]
        assert items[0].labels == ["howto", "team"]
        assert items[2].labels == []
        api.list_content.assert_called_once_with(
            "TEAM",
            content_type="page",
            label=None,
            expand="metadata.labels",
            status=None,
            start=0,
            limit=100,
        )

    def test_follows_next_links_until_exhausted(self):
        api = Mock()
        api.list_content.side_effect = [
            content_page([content_result("1", "A"), content_result("2", "B")], start=0, limit=2, has_next=True),
            content_page([content_result("3", "C"), content_result("4", "D")], start=2, limit=2, has_next=True),
            content_page([content_result("5", "E")], start=4, limit=2),
        ]

        items = ContentFetcher(api, page_size=2).fetch_content("TEAM")

        assert [item.content_id for item in items] == ["1", "2", "3", "4", "5"]
        starts = [call.kwargs["start"] for call in api.list_content.call_args_list]
        assert starts == [0, 2, 4]

    def test_short_page_with_next_link_continues(self):
        """A server-capped page size does not end pagination early."""
        api = Mock()
        api.list_content.side_effect = [
            content_page([content_result("1", "A")], start=0, limit=100, has_next=True),
            content_page([content_result("2", "B")], start=1, limit=100),
        ]

        items = ContentFetcher(api).fetch_content("TEAM")

        assert len(items) == 2
        assert api.list_content.call_args_list[1].kwargs["start"] == 1

    def test_empty_page_stops_even_with_next_link(self):
        api = Mock()
        api.list_content.return_value = content_page([], has_next=True)

        assert ContentFetcher(api).fetch_content("TEAM") == []
        api.list_content.assert_called_once()

    def test_labeled_content_lists_pages_then_blog_posts(self):
        api = Mock()
        api.list_content.side_effect = [
            content_page([content_result("7", "Page")]),
            content_page([content_result("8", "Post", content_type="blogpost")]),
        ]

        items = ContentFetcher(api).fetch_labeled_content("TEAM", "x")

        assert [item.content_id for item in items] == ["7", "8"]
        calls = api.list_content.call_args_list
        assert [c.kwargs["content_type"] for c in calls] == ["page", "blogpost"]
        assert all(c.kwargs["label"] == "x" for c in calls)
        assert all(c.kwargs["expand"] is None for c in calls)

    def test_label_only_on_blog_post_is_found(self):
        api = Mock()
        api.list_content.side_effect = [
            content_page([]),
            content_page([content_result("8", "Retro notes", content_type="blogpost")]),
        ]

        items = ContentFetcher(api).fetch_labeled_content("TEAM", "retro")

        assert [(item.content_id, item.content_type) for item in items] == [("8", "blogpost")]

    def test_blog_posts_request_blogpost_type(self):
        api = Mock()
        api.list_content.return_value = content_page([])

        ContentFetcher(api).fetch_blog_posts("TEAM", expand_labels=True)

        assert api.list_content.call_args.kwargs["content_type"] == "blogpost"

    def test_status_filter_passed_through(self):
        api = Mock()
        api.list_content.return_value = content_page([])

        ContentFetcher(api).fetch_pages("TEAM", status="current")

        assert api.list_content.call_args.kwargs["status"] == "current"

    def test_api_error_propagates(self):
        api = Mock()
        api.list_content.side_effect = [
            content_page([content_result("1", "A")], has_next=True),
            APIAccessError("Confluence API failure", "rest/api/content"),
        ]

        with pytest.raises(APIAccessError) as exc_info:
            ContentFetcher(api).fetch_content("TEAM")

        assert exc_info.value.resource == "rest/api/content"

    def test_unknown_content_type_rejected(self):
        with pytest.raises(ValueError):
            ContentFetcher(Mock()).fetch_content("TEAM", content_type="comment")

    def test_page_size_must_be_positive(self):
        with pytest.raises(ValueError):
            ContentFetcher(Mock(), page_size=0)
