# services/errors.py
class ServiceError(Exception):
    """Base for errors a route turns straight into a JSON response."""
    status_code = 500

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class BadRequest(ServiceError):
    status_code = 400


class NotFound(ServiceError):
    status_code = 404


class ConfigurationError(ServiceError):
    pass


class UpstreamError(ServiceError):
    """The completion provider answered with a non-success status."""
    def __init__(self, status_code: int, body: str):
        super().__init__(f"Groq API error {status_code}", details=body)
        self.upstream_status = status_code


class ProcessingError(ServiceError):
    def __init__(self, details: str | None = None):
        super().__init__("Failed to process request", details=details or "Unknown error")
