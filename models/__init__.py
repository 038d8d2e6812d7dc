"""Kycman models."""

from kycman.models.customer import Customer
from kycman.models.address import CustomerAddress, AddressType
from kycman.models.disclaimer import Disclaimer, DisclaimerAcceptance

__all__ = [
    "Customer",
    # Addresses
    "CustomerAddress",
    "AddressType",
    # Disclaimers
    "Disclaimer",
    "DisclaimerAcceptance",
]
