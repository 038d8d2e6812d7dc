"""
Django settings for Kycman tests.
"""

SECRET_KEY = "test-secret-key-for-kycman-tests"

DEBUG = True

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "django.contrib.sessions",
    "django.contrib.messages",
    "kycman",
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

USE_TZ = True
TIME_ZONE = "America/New_York"

KYCMAN = {
    "DOCUMENT_BACKEND": "kycman.tests.documents.InMemoryDocumentBackend",
}
