"""Error taxonomy shared by every stage of a settlement run.

Any of these raised anywhere in the pipeline aborts the whole run.
"""


class AppError(Exception):
    """Base class for settlement failures."""

    error_type = "AppError"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, object]:
        return {"type": self.error_type, "message": self.message}


class NetworkError(AppError):
    """The transport failed before a response was received."""

    error_type = "NetworkError"


class HttpError(AppError):
    """The remote endpoint answered with a non-success status code."""

    error_type = "HttpError"

    def __init__(self, status: int, status_text: str):
        super().__init__(f"HTTP {status} {status_text}".strip())
        self.status = status
        self.status_text = status_text

    def to_dict(self) -> dict[str, object]:
        return {
            "type": self.error_type,
            "message": self.message,
            "status": self.status,
            "status_text": self.status_text,
        }


class ParseError(AppError):
    """A response body did not match the expected shape."""

    error_type = "ParseError"


class NotFoundError(AppError):
    """A lookup required to proceed returned nothing."""

    error_type = "NotFoundError"
