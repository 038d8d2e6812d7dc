"""
Kycman Gates - Validation rules.

A1: AddressType - Type must be primary or secondary
A2: RequiredFields - address1, city, state, postal_code, country are non-blank
A3: StateCode - State is a two-letter code
A4: PrimaryUniqueness - Max 1 primary address in a customer's address set
D1: DisclaimerPayload - Disclaimer text and document id are non-blank

Gates are pure: they look only at the values they are given and never at the
database. Address gates always run over the complete candidate set (existing
addresses plus the one being added, or with the edited one replaced).
"""

from dataclasses import dataclass
from typing import Iterable


class GateError(Exception):
    """Gate validation error."""

    def __init__(self, gate_name: str, message: str, details: dict | None = None):
        self.gate_name = gate_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{gate_name}] {message}")


@dataclass
class GateResult:
    """Result of a gate check."""

    passed: bool
    gate_name: str
    message: str = ""


@dataclass(frozen=True)
class AddressCandidate:
    """One entry of a proposed address set."""

    type: str
    address1: str
    city: str
    state: str
    postal_code: str
    country: str
    address2: str = ""
    address_id: str | None = None

    @classmethod
    def from_address(cls, address) -> "AddressCandidate":
        """Build a candidate from a stored address (any object with the fields)."""
        return cls(
            type=address.type,
            address1=address.address1,
            address2=address.address2,
            city=address.city,
            state=address.state,
            postal_code=address.postal_code,
            country=address.country,
            address_id=address.address_id,
        )


# =============================================================================
# Gates
# =============================================================================


class Gates:
    """Kycman validation gates."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    ADDRESS_TYPES = {PRIMARY, SECONDARY}

    REQUIRED_ADDRESS_FIELDS = ("address1", "city", "state", "postal_code", "country")

    # =========================================================================
    # A1: Address Type
    # =========================================================================

    @classmethod
    def address_type(cls, value: str) -> GateResult:
        """
        A1: Address type must be known.

        Raises:
            GateError: If type is not primary/secondary
        """
        if value not in cls.ADDRESS_TYPES:
            raise GateError(
                "A1_AddressType",
                f"Unknown address type: {value!r}",
                {"allowed": sorted(cls.ADDRESS_TYPES), "value": value},
            )
        return GateResult(True, "A1_AddressType")

    @classmethod
    def check_address_type(cls, value: str) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.address_type(value)
            return True
        except GateError:
            return False

    # =========================================================================
    # A2: Required Fields
    # =========================================================================

    @classmethod
    def address_required_fields(cls, candidate: AddressCandidate) -> GateResult:
        """
        A2: Required address fields must be non-blank.

        Raises:
            GateError: With details["field"] naming the first blank field
        """
        for field_name in cls.REQUIRED_ADDRESS_FIELDS:
            value = getattr(candidate, field_name)
            if not value or not str(value).strip():
                raise GateError(
                    "A2_RequiredFields",
                    f"Missing required field: {field_name}",
                    {"field": field_name, "address_id": candidate.address_id},
                )
        return GateResult(True, "A2_RequiredFields")

    @classmethod
    def check_address_required_fields(cls, candidate: AddressCandidate) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.address_required_fields(candidate)
            return True
        except GateError:
            return False

    # =========================================================================
    # A3: State Code
    # =========================================================================

    @classmethod
    def address_state(cls, candidate: AddressCandidate) -> GateResult:
        """
        A3: State must be a two-letter code.

        Raises:
            GateError: If state is not two ASCII letters
        """
        state = candidate.state.strip()
        if len(state) != 2 or not (state.isascii() and state.isalpha()):
            raise GateError(
                "A3_StateCode",
                f"State must be a two-letter code: {candidate.state!r}",
                {"field": "state", "address_id": candidate.address_id},
            )
        return GateResult(True, "A3_StateCode")

    # =========================================================================
    # A4: Primary Uniqueness
    # =========================================================================

    @classmethod
    def primary_address_uniqueness(
        cls, candidates: Iterable[AddressCandidate]
    ) -> GateResult:
        """
        A4: At most one primary address per customer.

        Args:
            candidates: The complete proposed address set

        Raises:
            GateError: If two or more entries are primary
        """
        primaries = [c for c in candidates if c.type == cls.PRIMARY]
        if len(primaries) > 1:
            raise GateError(
                "A4_PrimaryUniqueness",
                "Customer already has an address with type 'primary'.",
                {
                    "count": len(primaries),
                    "address_ids": [c.address_id for c in primaries if c.address_id],
                },
            )
        return GateResult(True, "A4_PrimaryUniqueness")

    @classmethod
    def check_primary_address_uniqueness(
        cls, candidates: Iterable[AddressCandidate]
    ) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.primary_address_uniqueness(candidates)
            return True
        except GateError:
            return False

    # =========================================================================
    # Address set (A1-A4)
    # =========================================================================

    @classmethod
    def address_set(cls, candidates: Iterable[AddressCandidate]) -> GateResult:
        """
        Validate a complete proposed address set.

        Every entry is checked on its own (A1-A3) before the set-level rule (A4),
        so a malformed entry is reported as such rather than as a conflict.

        Raises:
            GateError: From the first failing gate
        """
        candidates = list(candidates)
        for candidate in candidates:
            cls.address_type(candidate.type)
            cls.address_required_fields(candidate)
            cls.address_state(candidate)
        cls.primary_address_uniqueness(candidates)
        return GateResult(True, "AddressSet")

    @classmethod
    def check_address_set(cls, candidates: Iterable[AddressCandidate]) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.address_set(candidates)
            return True
        except GateError:
            return False

    # =========================================================================
    # D1: Disclaimer Payload
    # =========================================================================

    @classmethod
    def disclaimer_payload(cls, text: str, document_id: str) -> GateResult:
        """
        D1: Disclaimer text and document id must be non-blank.

        Raises:
            GateError: With details["field"] naming the blank field
        """
        if not text or not text.strip():
            raise GateError(
                "D1_DisclaimerPayload",
                "Disclaimer text is required.",
                {"field": "text"},
            )
        if not document_id or not document_id.strip():
            raise GateError(
                "D1_DisclaimerPayload",
                "Disclaimer document id is required.",
                {"field": "document_id"},
            )
        return GateResult(True, "D1_DisclaimerPayload")
