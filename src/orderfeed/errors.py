"""Error taxonomy for the asks listing engine.

Validation errors are raised before any query is executed and map to client
errors. Server errors cover store failures and rows that cannot be projected.
"""


class OrderFeedError(Exception):
    """Base orderfeed error."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": self.message}


class RequestValidationError(OrderFeedError):
    """Raised when a request cannot be turned into a query."""

    status_code = 400


class InvalidFilterCombination(RequestValidationError):
    """Raised when no anchoring filter is present, or status is given without maker."""


class InvalidFilterValue(RequestValidationError):
    """Raised when a filter value fails the charset guard for raw inlining."""


class InvalidSortForFilter(RequestValidationError):
    """Raised when price sort is requested without a single-token filter."""


class InvalidContinuation(RequestValidationError):
    """Raised when a continuation token is undecodable or has the wrong shape."""


class ServerError(OrderFeedError):
    """Raised for failures that are not the caller's fault."""

    status_code = 500


class UpstreamQueryFailure(ServerError):
    """Raised when the store call fails or times out."""


class ProjectionFailure(ServerError):
    """Raised when a returned row does not have the expected shape."""
