"""
Shared exceptions for service modules.
"""


class ExtractionError(Exception):
    """Raised when text cannot be read from an uploaded file."""

    pass


class UnsupportedFileTypeError(Exception):
    """Raised when an upload has an extension other than .pdf or .docx."""

    pass


class DocumentNotFoundError(Exception):
    """Raised when a document does not exist for the caller or its file is gone."""

    pass


class UsernameTakenError(Exception):
    """Raised on signup with a username that is already registered."""

    pass


class InvalidCredentialsError(Exception):
    """Raised on signin with an unknown username or a wrong password."""

    pass


class TokenValidationError(Exception):
    """Raised when a session token is malformed, tampered with or expired."""

    pass


class EmptyDocumentError(ExtractionError):
    """Raised when a file was read successfully but holds no text."""

    pass
