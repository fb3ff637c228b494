from __future__ import annotations


class AppError(Exception):
    """Base application error."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class NotFoundError(AppError):
    pass


class ConflictError(AppError):
    pass


class ValidationError(AppError):
    pass


class InvalidNameError(ValidationError):
    pass


class DuplicateNameError(ConflictError):
    pass


class UnknownParticipantError(NotFoundError):
    pass


class UnknownSenderError(UnknownParticipantError):
    """Raised when a message is posted on behalf of a name that is not registered."""


class MessageValidationError(ValidationError):
    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("; ".join(errors))
