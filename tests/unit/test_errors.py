"""Unit tests for the conversion of Kubernetes API errors."""

from kubernetes_asyncio.client import ApiException

from weblogic.utils.errors import (
    APIError,
    ConflictError,
    OperatorError,
    already_exists_error,
    conflict_error,
    convert_api_exception,
    not_found_error,
)
from conftest import api_exception


class TestConvertApiException:
    def test_version_conflict_becomes_conflict_error(self):
        ex = api_exception(409, "Conflict", "Conflict", "the object has been modified")
        error = convert_api_exception(ex)
        assert isinstance(error, ConflictError)
        assert error.status == 409
        assert str(error) == (
            "Kubernetes API error (409): Conflict - the object has been modified"
        )

    def test_already_exists_is_not_a_conflict(self):
        ex = api_exception(409, "Conflict", "AlreadyExists", "web1 already exists")
        error = convert_api_exception(ex)
        assert isinstance(error, APIError)
        assert not isinstance(error, ConflictError)

    def test_message_without_body(self):
        error = convert_api_exception(ApiException(status=500, reason="Internal Server Error"))
        assert str(error) == "Kubernetes API error (500): Internal Server Error"
        assert error.reason == "Internal Server Error"

    def test_unreadable_body_is_ignored(self):
        ex = ApiException(status=403, reason="Forbidden")
        ex.body = "<html>forbidden</html>"
        assert str(convert_api_exception(ex)) == "Kubernetes API error (403): Forbidden"

    def test_every_error_is_an_operator_error(self):
        assert isinstance(convert_api_exception(api_exception(404, "Not Found")), OperatorError)


class TestErrorPredicates:
    def test_not_found(self):
        assert not_found_error(api_exception(404, "Not Found", "NotFound"))
        assert not not_found_error(api_exception(409, "Conflict", "Conflict"))
        assert not not_found_error(ValueError("404"))

    def test_already_exists(self):
        assert already_exists_error(api_exception(409, "Conflict", "AlreadyExists"))
        assert not already_exists_error(api_exception(409, "Conflict", "Conflict"))

    def test_conflict(self):
        assert conflict_error(api_exception(409, "Conflict", "Conflict"))
        assert conflict_error(ApiException(status=409, reason="Conflict"))
        assert not conflict_error(api_exception(409, "Conflict", "AlreadyExists"))
