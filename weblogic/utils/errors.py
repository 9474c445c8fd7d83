import json
from typing import Optional
import kubernetes_asyncio

_ALREADY_EXISTS = "alreadyexists"
_NOT_FOUND = "notfound"


class OperatorError(Exception):
    """Base class of every error raised by the reconciliation engine."""


class ValidationError(OperatorError):
    """WeblogicServer spec is malformed. Nothing is touched."""


class NotFoundError(OperatorError):
    """A resource that must exist is absent."""


class NotLabeledError(OperatorError):
    """A dependent resource lacks the ownership label."""


class APIError(OperatorError):
    """A Kubernetes API call failed."""

    status: Optional[int]
    reason: Optional[str]

    def __init__(self, message: str, status: int = None, reason: str = None):
        super().__init__(message)
        self.status = status
        self.reason = reason


class ConflictError(APIError):
    """Optimistic-concurrency version mismatch on update."""


def _error_body(ex: kubernetes_asyncio.client.ApiException) -> dict:
    try:
        if ex.body:
            body = json.loads(ex.body)
            if isinstance(body, dict):
                return body
    except (json.JSONDecodeError, TypeError):
        pass
    return {}


def already_exists_error(ex: Exception) -> bool:
    if not isinstance(ex, kubernetes_asyncio.client.ApiException):
        return False
    return (
        ex.status == 409
        and _error_body(ex).get("reason", "").lower() == _ALREADY_EXISTS
    )


def not_found_error(ex: Exception) -> bool:
    if not isinstance(ex, kubernetes_asyncio.client.ApiException):
        return False
    return (
        ex.status == 404
        or _error_body(ex).get("reason", "").lower() == _NOT_FOUND
    )


def conflict_error(ex: Exception) -> bool:
    """Version conflict on update (HTTP 409 that is not an already-exists)."""
    if not isinstance(ex, kubernetes_asyncio.client.ApiException):
        return False
    return ex.status == 409 and not already_exists_error(ex)


def convert_api_exception(ex: kubernetes_asyncio.client.ApiException) -> APIError:
    """
    Convert kubernetes ApiException to the operator's error taxonomy.

    Args:
        ex: The ApiException to convert

    Returns:
        ConflictError for version conflicts, APIError otherwise. The message
        is human readable as it ends up in the WeblogicServer status.
    """
    error_msg = f"Kubernetes API error ({ex.status}): {ex.reason}"

    body = _error_body(ex)
    if "message" in body:
        error_msg = f"{error_msg} - {body['message']}"

    if conflict_error(ex):
        return ConflictError(error_msg, status=ex.status, reason=ex.reason)
    return APIError(error_msg, status=ex.status, reason=ex.reason)
