from typing import Optional


class BookingFormError(Exception):
    """Base class for errors raised by the booking form."""


class MissingRequiredField(BookingFormError):
    def __init__(self, field):
        self.field = field
        name = getattr(field, "value", field)
        super().__init__(f"Required field '{name}' is not set.")


class SubmissionRejected(BookingFormError):
    def __init__(self, violations):
        self.violations = list(violations)
        super().__init__("; ".join(v.message for v in self.violations))


class BookingError(BookingFormError):
    def __init__(self, message: str, status_code: Optional[int] = None, detail: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail
