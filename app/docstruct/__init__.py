"""
Document structuring backend.

A FastAPI service that stores uploaded PDF/DOCX files, extracts their text
into an editable section/paragraph/table structure and serves it back to
the document editor frontend.
"""

__version__ = "1.0.0"
