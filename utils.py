"""Kycman helpers."""

import uuid


def generate_id() -> str:
    """Random opaque identifier (32 lowercase hex chars)."""
    return uuid.uuid4().hex
