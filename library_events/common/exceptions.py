"""Custom exceptions for the library_events package."""


class PublishError(Exception):
    """Base class for failures raised while publishing a library event."""

    pass


class SerializationError(PublishError):
    """Raised when a library event cannot be encoded into its wire payload."""

    pass


class PublishTimeoutError(PublishError, TimeoutError):
    """Raised when a blocking publish does not complete within its timeout."""

    def __init__(self, key, timeout: float):
        super().__init__(f"Timed out after {timeout}s waiting for delivery of key {key}")
        self.key = key
        self.timeout = timeout


class SendError(PublishError):
    """Raised when the broker rejects or fails a send."""

    def __init__(self, key, cause: BaseException):
        super().__init__(f"Error sending the message for key {key}: {cause}")
        self.key = key
        self.cause = cause
