class ScreeningError(Exception):
    """Base class for failures raised by the store and the chat relay."""
    status_code = 500

    def __init__(self, message: str = "Something went wrong."):
        super().__init__(message)
        self.message = message


class ValidationError(ScreeningError):
    status_code = 400


class NotFoundError(ScreeningError):
    status_code = 404

    def __init__(self, message: str = "Invalid screening ID"):
        super().__init__(message)


class StorageFailure(ScreeningError):
    """Backing database unreachable or rejected the statement."""


class DuplicateIdError(StorageFailure):
    def __init__(self, message: str = "Screening ID already exists"):
        super().__init__(message)


class UpstreamError(ScreeningError):
    """Model API call failed or returned an unusable response."""
