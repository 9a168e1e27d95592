"""Error taxonomy mapped to HTTP status codes."""


class FoodInsightError(Exception):
    """Base error carrying a client-facing message and status code."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(FoodInsightError):
    """Missing or malformed request fields."""

    status_code = 400


class AuthError(FoodInsightError):
    """The AI service rejected the configured credential."""

    status_code = 401


class NotFound(FoodInsightError):
    """No route matches the request."""

    status_code = 404


class QuotaExceeded(FoodInsightError):
    """The AI service reported a rate limit or exhausted quota."""

    status_code = 429


class ServiceUnavailable(FoodInsightError):
    """The AI client is not configured."""

    status_code = 500


class InternalError(FoodInsightError):
    """Any other failure while handling a request."""

    status_code = 500
