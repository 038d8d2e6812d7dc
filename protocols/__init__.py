"""Kycman protocols."""

from kycman.protocols.documents import DocumentBackend, DocumentInfo
from kycman.protocols.records import AddressInfo, CustomerRecord, DisclaimerInfo

__all__ = [
    # Records
    "AddressInfo",
    "CustomerRecord",
    "DisclaimerInfo",
    # Documents
    "DocumentBackend",
    "DocumentInfo",
]
