"""Error taxonomy shared by the API and the client-side editors."""

from typing import Dict, Optional


class SmartLessonError(Exception):
    """Base class for every error raised by SmartLesson code."""


class ValidationFailed(SmartLessonError):
    """Input rejected before (or by) the endpoint, with field-level messages."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        summary = "; ".join(f"{field}: {msg}" for field, msg in self.errors.items())
        super().__init__(summary or "Validation failed")


class MissingIdentifierError(SmartLessonError):
    """An operation needed a plan/quiz id that has not been resolved yet."""


class NotFoundError(SmartLessonError):
    """A referenced document id does not exist server-side."""

    def __init__(self, kind: str, identifier: str, message: Optional[str] = None):
        self.kind = kind
        self.identifier = identifier
        super().__init__(message or f"{kind} '{identifier}' not found")


class RemoteInvocationError(SmartLessonError):
    """Network or endpoint failure while calling the backend."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class InvalidResponseError(RemoteInvocationError):
    """The endpoint answered, but not with the shape the caller needs."""
