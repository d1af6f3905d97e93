"""Error kinds surfaced by the TVMaze tools."""

from typing import Optional


class TVMazeError(Exception):
    """Base class for every failure a tool call can report."""

    def __init__(self, message: str, original_exception: Exception = None):
        super().__init__(message)
        self.original_exception = original_exception


class InvalidInputError(TVMazeError):
    """Tool arguments failed validation; no request was sent."""


class NotFoundError(TVMazeError):
    """TVMaze answered 404 for the requested show or season."""

    def __init__(self, resource: str, identifier: int):
        super().__init__(f"{resource} with ID {identifier} was not found")
        self.resource = resource
        self.identifier = identifier


class UpstreamError(TVMazeError):
    """TVMaze answered with a non-success status, or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 original_exception: Exception = None):
        super().__init__(message, original_exception)
        self.status_code = status_code


class UpstreamTimeoutError(TVMazeError):
    """A request to TVMaze did not complete within the configured timeout."""


class DecodeError(TVMazeError):
    """The response body was not JSON or did not match the expected shape."""
