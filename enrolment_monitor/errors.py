class EnrolmentMonitorError(Exception):
    """Base class for errors raised by the enrolment monitor."""


class InvalidDatasetError(EnrolmentMonitorError):
    """Raised when an upload yields no usable records (missing header or no data rows)."""

    def __init__(self, message: str = "Empty or invalid dataset. Please use correct headers."):
        super().__init__(message)
