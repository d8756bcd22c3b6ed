"""
Business logic services for gpg-import.
"""

from gpg_import.services.import_service import ImportService, select_signing_key

__all__ = [
    "ImportService",
    "select_signing_key",
]
