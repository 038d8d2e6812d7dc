"""
Kycman public API.

ADDRESSES (return the customer's full address set after the write):
    RecordService.customer_record(code, org)
    RecordService.create_address(code, org, **fields)
    RecordService.update_address(code, org, address_id, **fields)
    RecordService.delete_address(code, org, address_id)
    RecordService.set_primary_address(code, org, address_id)

DISCLAIMERS:
    RecordService.list_disclaimers(code)
    RecordService.accept_disclaimer(code, disclaimer_id)
    RecordService.create_disclaimer(text, document_id)   - admin
    RecordService.delete_disclaimer(disclaimer_id)       - admin
"""

import dataclasses
import logging

from django.db import transaction

from kycman.exceptions import KycmanError
from kycman.gates import AddressCandidate, GateError, Gates
from kycman.models import Customer
from kycman.protocols.records import AddressInfo, CustomerRecord, DisclaimerInfo
from kycman.services import address as address_service
from kycman.services import customer as customer_service
from kycman.services import disclaimer as disclaimer_service

logger = logging.getLogger(__name__)

ADDRESS_FIELDS = (
    "type",
    "address1",
    "address2",
    "city",
    "state",
    "postal_code",
    "country",
)

_GATE_ERROR_CODES = {
    "A1_AddressType": "INVALID_ADDRESS_TYPE",
    "A2_RequiredFields": "MISSING_REQUIRED_FIELD",
    "A3_StateCode": "INVALID_STATE",
    "A4_PrimaryUniqueness": "DUPLICATE_PRIMARY_ADDRESS",
}


class RecordService:
    """
    Kycman public API.

    Uses @classmethod for extensibility.

    Every address write follows the same path inside one transaction:
    lock the customer row, load its addresses, build the resulting set,
    run Gates.address_set over it, and only then write.
    """

    # ======================================================================
    # ADDRESS API
    # ======================================================================

    @classmethod
    def customer_record(cls, code: str, organization: str) -> CustomerRecord:
        """
        Get customer with all addresses.

        Raises:
            KycmanError: CUSTOMER_NOT_FOUND
        """
        cust = customer_service.get(code, organization)
        if not cust:
            raise KycmanError("CUSTOMER_NOT_FOUND", customer_code=code)
        return cls._to_record(cust)

    @classmethod
    def create_address(cls, code: str, organization: str, **fields) -> CustomerRecord:
        """
        Add an address to a customer.

        Args:
            code: Customer code
            organization: Caller's organization
            **fields: type, address1, address2, city, state, postal_code, country

        Returns:
            CustomerRecord with the resulting address set

        Raises:
            KycmanError: CUSTOMER_NOT_FOUND, DUPLICATE_PRIMARY_ADDRESS or a
                client-input code (INVALID_ADDRESS_TYPE, MISSING_REQUIRED_FIELD, ...)
        """
        candidate = cls._build_candidate(fields)

        with transaction.atomic():
            cust = cls._lock_customer(code, organization)
            current = [
                AddressCandidate.from_address(a)
                for a in address_service.addresses(code)
            ]
            cls._validate(code, [*current, candidate])
            address_service.add_address(code, candidate)
            return cls._to_record(cust)

    @classmethod
    def update_address(
        cls, code: str, organization: str, address_id: str, **fields
    ) -> CustomerRecord:
        """
        Partially update an address.

        The edited address is validated together with the customer's other
        addresses, with its old values left out of the set.

        Raises:
            KycmanError: CUSTOMER_NOT_FOUND, ADDRESS_NOT_FOUND,
                DUPLICATE_PRIMARY_ADDRESS or a client-input code
        """
        with transaction.atomic():
            cust = cls._lock_customer(code, organization)
            current = address_service.addresses(code)
            target = next((a for a in current if a.address_id == address_id), None)
            if target is None:
                raise KycmanError(
                    "ADDRESS_NOT_FOUND", customer_code=code, address_id=address_id
                )

            edited = cls._build_candidate(
                fields, base=AddressCandidate.from_address(target)
            )
            cls._validate(
                code,
                [
                    edited if a.address_id == address_id
                    else AddressCandidate.from_address(a)
                    for a in current
                ],
            )
            address_service.update_address(
                code,
                address_id,
                **{key: getattr(edited, key) for key in fields},
            )
            return cls._to_record(cust)

    @classmethod
    def delete_address(
        cls, code: str, organization: str, address_id: str
    ) -> CustomerRecord:
        """
        Delete an address. Deleting an unknown address succeeds.

        Raises:
            KycmanError: CUSTOMER_NOT_FOUND
        """
        with transaction.atomic():
            cust = cls._lock_customer(code, organization)
            address_service.delete_address(code, address_id)
            return cls._to_record(cust)

    @classmethod
    def set_primary_address(
        cls, code: str, organization: str, address_id: str
    ) -> CustomerRecord:
        """
        Promote an address to primary, demoting the current one.

        Raises:
            KycmanError: CUSTOMER_NOT_FOUND, ADDRESS_NOT_FOUND
        """
        with transaction.atomic():
            cust = cls._lock_customer(code, organization)
            current = address_service.addresses(code)
            if not any(a.address_id == address_id for a in current):
                raise KycmanError(
                    "ADDRESS_NOT_FOUND", customer_code=code, address_id=address_id
                )

            cls._validate(
                code,
                [
                    dataclasses.replace(
                        AddressCandidate.from_address(a),
                        type=Gates.PRIMARY
                        if a.address_id == address_id
                        else Gates.SECONDARY,
                    )
                    for a in current
                ],
            )
            address_service.set_primary_address(code, address_id)
            return cls._to_record(cust)

    # ======================================================================
    # DISCLAIMER API
    # ======================================================================

    @classmethod
    def list_disclaimers(cls, code: str) -> list[DisclaimerInfo]:
        """Disclaimer catalog with the customer's acceptance status."""
        return disclaimer_service.customer_disclaimers(code)

    @classmethod
    def accept_disclaimer(cls, code: str, disclaimer_id: str) -> None:
        """
        Accept a disclaimer. Accepting twice succeeds without changes.

        Raises:
            KycmanError: DISCLAIMER_NOT_FOUND
        """
        disclaimer_service.accept_disclaimer(code, disclaimer_id)

    @classmethod
    def create_disclaimer(cls, text: str, document_id: str) -> DisclaimerInfo:
        """
        Add a disclaimer to the catalog (admin).

        Raises:
            KycmanError: VALIDATION_ERROR, DOCUMENT_NOT_FOUND
        """
        disclaimer = disclaimer_service.insert_disclaimer(text, document_id)
        return DisclaimerInfo(
            disclaimer_id=disclaimer.disclaimer_id,
            text=disclaimer.text,
            document_id=disclaimer.document_id,
        )

    @classmethod
    def delete_disclaimer(cls, disclaimer_id: str) -> bool:
        """Soft-delete a disclaimer (admin). Acceptance history is kept."""
        return disclaimer_service.delete_disclaimer(disclaimer_id)

    # ======================================================================
    # Internals
    # ======================================================================

    @classmethod
    def _lock_customer(cls, code: str, organization: str) -> Customer:
        """Internal: lock customer row. MUST be called inside transaction.atomic()."""
        cust = customer_service.get_for_update(code, organization)
        if not cust:
            raise KycmanError("CUSTOMER_NOT_FOUND", customer_code=code)
        return cust

    @classmethod
    def _build_candidate(
        cls, fields: dict, base: AddressCandidate | None = None
    ) -> AddressCandidate:
        """Internal: normalize request fields into a candidate."""
        unknown = set(fields) - set(ADDRESS_FIELDS)
        if unknown:
            raise KycmanError(
                "VALIDATION_ERROR",
                message=f"Unknown address fields: {', '.join(sorted(unknown))}",
                fields=sorted(unknown),
            )

        values = {}
        for key, value in fields.items():
            value = "" if value is None else str(value).strip()
            if key == "type":
                value = value.lower()
            elif key == "state":
                value = value.upper()
            values[key] = value

        if base is not None:
            return dataclasses.replace(base, **values)
        return AddressCandidate(
            type=values.get("type", ""),
            address1=values.get("address1", ""),
            address2=values.get("address2", ""),
            city=values.get("city", ""),
            state=values.get("state", ""),
            postal_code=values.get("postal_code", ""),
            country=values.get("country", ""),
        )

    @classmethod
    def _validate(cls, code: str, candidates: list[AddressCandidate]) -> None:
        """Internal: run Gates over the resulting set, translating failures."""
        try:
            Gates.address_set(candidates)
        except GateError as exc:
            error_code = _GATE_ERROR_CODES.get(exc.gate_name, "VALIDATION_ERROR")
            logger.warning(
                "rejected address write for customer=%s: %s", code, exc.message
            )
            raise KycmanError(
                error_code, message=exc.message, customer_code=code, **exc.details
            ) from exc

    @classmethod
    def _to_record(cls, cust: Customer) -> CustomerRecord:
        """Internal: customer + current addresses as a CustomerRecord."""
        return CustomerRecord(
            code=cust.code,
            organization=cust.organization,
            addresses=tuple(
                AddressInfo(
                    address_id=a.address_id,
                    type=a.type,
                    address1=a.address1,
                    address2=a.address2,
                    city=a.city,
                    state=a.state,
                    postal_code=a.postal_code,
                    country=a.country,
                    validated=a.validated,
                )
                for a in address_service.addresses(cust.code)
            ),
        )
