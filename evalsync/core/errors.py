class EvalSyncError(Exception):
    """Base class for every error raised by the client."""


class ApiError(EvalSyncError):
    """The backend answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class NetworkError(EvalSyncError):
    """The request never got a response (DNS, refused connection, timeout)."""


class MalformedResponseError(EvalSyncError):
    """A 2xx response whose body is not the JSON we asked for."""


class OperationInProgressError(EvalSyncError):
    """A guarded operation was invoked while the same one is still in flight."""


class GradeOutOfRangeError(EvalSyncError, ValueError):
    def __init__(self, score: float, total_marks: float):
        super().__init__(f"score must be between 0 and {total_marks}")
        self.score = score
        self.total_marks = total_marks


class NoFilesSelectedError(EvalSyncError, ValueError):
    def __init__(self):
        super().__init__("Please select at least one PDF file")


class NoSubmissionsError(EvalSyncError):
    """The assignment has nothing the requested operation could act on."""
