"""Mapping of domain errors to HTTP responses."""

from rest_framework import status
from rest_framework.response import Response

from common.errors import DomainError, ErrorKind

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INACTIVE_OR_CLOSED: status.HTTP_409_CONFLICT,
    ErrorKind.INSUFFICIENT_INVENTORY: status.HTTP_409_CONFLICT,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
}


def error_response(error: DomainError) -> Response:
    """Build the structured error body for a domain error."""
    return Response(
        {
            "error": {
                "code": error.code.value,
                "kind": error.kind.value,
                "message": error.message,
            }
        },
        status=STATUS_BY_KIND[error.kind],
    )


def invalid_request(details: dict) -> Response:
    """Build the error body for a request rejected by a serializer."""
    return Response(
        {
            "error": {
                "code": "INVALID_REQUEST",
                "kind": ErrorKind.VALIDATION_ERROR.value,
                "message": "Request body is invalid",
                "details": details,
            }
        },
        status=status.HTTP_400_BAD_REQUEST,
    )
