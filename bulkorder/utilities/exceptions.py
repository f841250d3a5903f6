"""Error types raised while generating and publishing the order sheet."""
from typing import Any, Mapping, Optional


class OrderSheetError(Exception):
    """Base class for order sheet failures.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context
        code: machine-readable error code
        http_status: suggested HTTP status code for API handlers
    """

    http_status = 500
    default_code = "order_sheet_error"

    def __init__(self, message: str = "Order sheet generation failed",
                 details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = dict(details) if details else {}
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message, "code": self.code}
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class NoEligibleSamplesError(OrderSheetError):
    """Raised when no intake record qualifies for the estimation sample."""

    http_status = 422
    default_code = "no_eligible_samples"

    def __init__(self, message: str = "No eligible intake records to estimate the order from",
                 details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message, details, code)


class RecordStoreError(OrderSheetError):
    """Raised when the record store cannot list, create or delete a record."""

    http_status = 502
    default_code = "record_store_error"


class PublishError(RecordStoreError):
    """Raised when replacing the bulk order fails part way.

    details carries 'created' and 'deleted' counts so the partially updated
    table can be inspected by hand.
    """

    default_code = "publish_incomplete"


class ConfigurationError(OrderSheetError):
    """Raised for invalid settings (bad numbers, unknown store, missing credentials)."""

    default_code = "configuration_error"


__all__ = [
    "OrderSheetError", "NoEligibleSamplesError", "RecordStoreError",
    "PublishError", "ConfigurationError",
]
