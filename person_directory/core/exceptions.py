"""
Domain errors raised by the directory services.

Routes translate these into HTTP responses carrying the underlying message.
"""


class DirectoryError(Exception):
    """Base class for all person directory errors."""


class QueryError(DirectoryError):
    """A Directory Store read or write failed."""


class UploadError(DirectoryError):
    """A blob write failed or the uploaded content was rejected."""


class GatewayError(DirectoryError):
    """The image fetch, the inference call or the downstream read failed."""


class ValidationError(DirectoryError):
    """Submitted data is missing a required field."""
