from __future__ import annotations


class RequestBookError(Exception):
    """Base class for errors raised by requestbook."""


class InvalidMethodError(RequestBookError, ValueError):
    def __init__(self, method: object) -> None:
        super().__init__(f"unsupported method: {method}")
        self.method = method


class PreconditionError(RequestBookError):
    """A user action was attempted before its precondition was met."""


class CollectionFileError(RequestBookError):
    def __init__(self, path: object, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
