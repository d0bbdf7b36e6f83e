"""Unit tests for the error hierarchies."""

import pytest
from src.confluence_client.errors import (
    LabelOrganizerError,
    ConfluenceError,
    APIError,
    InvalidCredentialsError,
    ContentNotFoundError,
    APIUnreachableError,
    APIAccessError,
)
from src.label_operations.errors import BulkMutationError, ValidationError
from src.label_operations.models import MutationResult


class TestConfluenceErrors:
    """Test cases for Confluence client exceptions."""

    @pytest.mark.parametrize("error_class", [
        InvalidCredentialsError,
        ContentNotFoundError,
        APIUnreachableError,
        APIAccessError,
    ])
    def test_api_errors_share_base(self, error_class):
        assert issubclass(error_class, APIError)
        assert issubclass(error_class, ConfluenceError)
        assert issubclass(error_class, LabelOrganizerError)

    def test_api_error_keeps_resource(self):
        error = APIError("boom", "rest/api/content")
        assert str(error) == "boom"
        assert error.resource == "rest/api/content"

    def test_invalid_credentials_message(self):
        error = InvalidCredentialsError(user="a@b.com", endpoint="https://x/wiki")
        assert str(error) == "API key is invalid (user: a@b.com, endpoint: https://x/wiki)"
        assert error.resource is None

    def test_content_not_found_message(self):
        error = ContentNotFoundError("rest/api/content/1/label/x")
        assert "rest/api/content/1/label/x" in str(error)
        assert error.resource == "rest/api/content/1/label/x"

    def test_api_access_error_default_message(self):
        assert str(APIAccessError()) == "Confluence API failure (after 3 retries)"


class TestLabelOperationErrors:
    """Test cases for ValidationError and BulkMutationError."""

    def test_validation_error_is_not_an_api_error(self):
        assert issubclass(ValidationError, LabelOrganizerError)
        assert not issubclass(ValidationError, APIError)

    def test_validation_error_names_field(self):
        error = ValidationError("cannot be empty", "labelName")
        assert str(error) == "Invalid 'labelName': cannot be empty"
        assert error.field == "labelName"
        assert error.original_message == "cannot be empty"

    def test_bulk_mutation_error_wraps_cause(self):
        cause = APIAccessError("Confluence API failure during attach", "rest/api/content/2/label")
        result = MutationResult(succeeded=[("1", "+x")], failed=[("2", str(cause))])

        error = BulkMutationError("add_label(x)", result, cause)

        assert isinstance(error, APIError)
        assert error.error is cause
        assert error.result is result
        assert error.resource == "rest/api/content/2/label"
        assert "1 applied step(s)" in str(error)
