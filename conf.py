"""
Kycman configuration.

Usage in settings.py:
    KYCMAN = {
        "DOCUMENT_BACKEND": "myproject.documents.StorageDocumentBackend",
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class KycmanSettings:
    """Kycman configuration settings."""

    # Dotted path to a kycman.protocols.documents.DocumentBackend class
    DOCUMENT_BACKEND: str = ""


def get_kycman_settings() -> KycmanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "KYCMAN", {})
    return KycmanSettings(**user_settings)


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_kycman_settings(), name)


kycman_settings = _LazySettings()
