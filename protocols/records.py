"""Record shapes returned to the transport layer."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AddressInfo:
    """Address as seen by callers."""

    address_id: str
    type: str
    address1: str
    address2: str
    city: str
    state: str
    postal_code: str
    country: str
    validated: bool


@dataclass(frozen=True)
class CustomerRecord:
    """Customer with its full current address set (insertion order)."""

    code: str
    organization: str
    addresses: tuple[AddressInfo, ...] = ()

    @property
    def primary_address(self) -> AddressInfo | None:
        return next((a for a in self.addresses if a.type == "primary"), None)


@dataclass(frozen=True)
class DisclaimerInfo:
    """Catalog entry joined with one customer's acceptance status."""

    disclaimer_id: str
    text: str
    document_id: str
    accepted: bool = False
    accepted_at: datetime | None = None
