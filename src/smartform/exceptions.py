"""
Exceptions raised by SmartForm.

Validation failures are not exceptions: they are returned as
``ValidationResult`` data. Everything here is recoverable by the caller
retrying the action.
"""


class SmartFormError(Exception):
    """Base class for all SmartForm errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ApiError(SmartFormError):
    """The form API answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"


class NetworkError(SmartFormError):
    """The request never got an HTTP answer (connection refused, DNS, ...)."""


class BuilderError(SmartFormError):
    """An edit would break the form schema."""


class FieldNotFoundError(BuilderError):
    """No field with the given id exists in the form."""

    def __init__(self, field_id: str):
        super().__init__(f"Field not found: {field_id}")
        self.field_id = field_id
