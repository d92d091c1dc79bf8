"""
Services package for the document structuring application.

Contains:
- auth_service: user credentials and session tokens
- document_store: owner-scoped document persistence
- file_storage: raw upload storage on local disk
- extraction: text extraction and structuring of uploaded files
"""

from .auth_service import CredentialStore, TokenService
from .document_store import DocumentStore
from .extraction import ExtractionService
from .file_storage import FileStorage

__all__ = [
    "CredentialStore",
    "DocumentStore",
    "ExtractionService",
    "FileStorage",
    "TokenService",
]
