"""
Routers package for FastAPI endpoints.

Organized by domain:
- users: Signup and signin
- documents: Upload, listing, details, download and save
"""

from . import documents, users

__all__ = ["documents", "users"]
