import logging

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class DataSourceUnavailable(Exception):
    """An external dataset could not be fetched (timeout, non-2xx, bad body)."""

    def __init__(self, source, cause=None):
        self.source = source
        self.cause = cause
        super().__init__(f"Could not fetch data from {source}")


class StorageError(Exception):
    """A transaction, connection or query failed; the transaction was rolled back."""


class CountryNotFound(Exception):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Country not found: {name}")


def api_exception_handler(exc, context):
    """
    DRF exception handler producing the {"error", "details"} bodies used by every endpoint.
    """
    if isinstance(exc, DataSourceUnavailable):
        logger.warning("Data source unavailable: %s (%s)", exc.source, exc.cause)
        return Response(
            {"error": "External data source unavailable", "details": str(exc)},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    if isinstance(exc, StorageError):
        logger.error("Storage error: %s", exc)
        return Response(
            {"error": "Internal server error", "details": str(exc)},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, CountryNotFound):
        return Response({"error": "Country not found"}, status=status.HTTP_404_NOT_FOUND)

    if isinstance(exc, ValidationError):
        return Response(
            {"error": "Validation failed", "details": exc.detail},
            status=status.HTTP_400_BAD_REQUEST,
        )

    response = exception_handler(exc, context)
    if response is not None:
        detail = response.data.get("detail") if isinstance(response.data, dict) else response.data
        response.data = {"error": str(detail)}
        return response

    view = context.get("view")
    logger.exception("Unhandled error in %s", view.__class__.__name__ if view else "view", exc_info=exc)
    return Response({"error": "Internal server error"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
