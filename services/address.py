"""Address service (storage only).

Callers validate the resulting address set with Gates before writing; this
module does not re-validate. Every write runs in transaction.atomic(), and the
partial unique constraint on primary addresses is reported as
DUPLICATE_PRIMARY_ADDRESS if a write slips past validation.
"""

import logging

from django.db import IntegrityError, transaction
from django.utils import timezone

from kycman.exceptions import KycmanError
from kycman.gates import AddressCandidate
from kycman.models import AddressType, CustomerAddress
from kycman.services.customer import get
from kycman.signals import address_added, address_deleted, address_updated

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {
    "type",
    "address1",
    "address2",
    "city",
    "state",
    "postal_code",
    "country",
}


def addresses(customer_code: str) -> list[CustomerAddress]:
    """List customer addresses in insertion order."""
    return list(
        CustomerAddress.objects.filter(
            customer__code=customer_code, customer__is_active=True
        )
    )


def get_address(customer_code: str, address_id: str) -> CustomerAddress | None:
    """Get one address of a customer."""
    return CustomerAddress.objects.filter(
        customer__code=customer_code,
        customer__is_active=True,
        address_id=address_id,
    ).first()


def primary_address(customer_code: str) -> CustomerAddress | None:
    """Return primary address."""
    return CustomerAddress.objects.filter(
        customer__code=customer_code,
        customer__is_active=True,
        type=AddressType.PRIMARY,
    ).first()


def add_address(customer_code: str, candidate: AddressCandidate) -> CustomerAddress:
    """
    Add address to customer.

    Args:
        customer_code: Customer code
        candidate: Already validated address values

    Raises:
        KycmanError: CUSTOMER_NOT_FOUND, DUPLICATE_PRIMARY_ADDRESS
    """
    cust = get(customer_code)
    if not cust:
        raise KycmanError("CUSTOMER_NOT_FOUND", customer_code=customer_code)

    try:
        with transaction.atomic():
            addr = CustomerAddress.objects.create(
                customer=cust,
                type=candidate.type,
                address1=candidate.address1,
                address2=candidate.address2,
                city=candidate.city,
                state=candidate.state,
                postal_code=candidate.postal_code,
                country=candidate.country,
            )
    except IntegrityError:
        if candidate.type == AddressType.PRIMARY and _has_primary(customer_code):
            raise KycmanError(
                "DUPLICATE_PRIMARY_ADDRESS", customer_code=customer_code
            )
        raise

    logger.info("added address=%s for customer=%s", addr.address_id, customer_code)
    address_added.send(sender=CustomerAddress, address=addr)
    return addr


def update_address(customer_code: str, address_id: str, **fields) -> CustomerAddress:
    """
    Partially update an address.

    Args:
        customer_code: Customer code
        address_id: Address to update (must belong to the customer)
        **fields: Any of UPDATABLE_FIELDS

    Raises:
        KycmanError: VALIDATION_ERROR, ADDRESS_NOT_FOUND, DUPLICATE_PRIMARY_ADDRESS
    """
    unknown = set(fields) - UPDATABLE_FIELDS
    if unknown:
        raise KycmanError(
            "VALIDATION_ERROR",
            message=f"Fields cannot be updated: {', '.join(sorted(unknown))}",
            fields=sorted(unknown),
        )

    try:
        with transaction.atomic():
            try:
                addr = CustomerAddress.objects.select_for_update().get(
                    address_id=address_id,
                    customer__code=customer_code,
                    customer__is_active=True,
                )
            except CustomerAddress.DoesNotExist:
                raise KycmanError(
                    "ADDRESS_NOT_FOUND",
                    customer_code=customer_code,
                    address_id=address_id,
                )

            changes = {}
            for key, value in fields.items():
                if getattr(addr, key) != value:
                    changes[key] = {"old": getattr(addr, key), "new": value}
                    setattr(addr, key, value)

            if changes:
                addr.save(update_fields=[*changes, "updated_at"])
    except IntegrityError:
        if fields.get("type") == AddressType.PRIMARY and _has_primary(
            customer_code, exclude_address_id=address_id
        ):
            raise KycmanError(
                "DUPLICATE_PRIMARY_ADDRESS",
                customer_code=customer_code,
                address_id=address_id,
            )
        raise

    if changes:
        logger.info(
            "updated address=%s for customer=%s fields=%s",
            address_id,
            customer_code,
            sorted(changes),
        )
        address_updated.send(sender=CustomerAddress, address=addr, changes=changes)
    return addr


def delete_address(customer_code: str, address_id: str) -> bool:
    """
    Delete address.

    Idempotent: a missing address is not an error.

    Returns:
        True if a row was removed, False if there was nothing to delete
    """
    with transaction.atomic():
        deleted, _ = CustomerAddress.objects.filter(
            customer__code=customer_code,
            address_id=address_id,
        ).delete()

    if not deleted:
        logger.debug(
            "address=%s for customer=%s already absent", address_id, customer_code
        )
        return False

    logger.info("deleted address=%s for customer=%s", address_id, customer_code)
    address_deleted.send(
        sender=CustomerAddress, customer_code=customer_code, address_id=address_id
    )
    return True


def set_primary_address(customer_code: str, address_id: str) -> CustomerAddress:
    """
    Make an address the primary one.

    The current primary is demoted to secondary in the same transaction, so no
    reader ever sees zero-then-two or two primaries.

    Raises:
        KycmanError: CUSTOMER_NOT_FOUND, ADDRESS_NOT_FOUND
    """
    cust = get(customer_code)
    if not cust:
        raise KycmanError("CUSTOMER_NOT_FOUND", customer_code=customer_code)

    with transaction.atomic():
        try:
            addr = CustomerAddress.objects.select_for_update().get(
                address_id=address_id, customer=cust
            )
        except CustomerAddress.DoesNotExist:
            raise KycmanError(
                "ADDRESS_NOT_FOUND",
                customer_code=customer_code,
                address_id=address_id,
            )

        if addr.is_primary:
            return addr

        CustomerAddress.objects.filter(
            customer=cust, type=AddressType.PRIMARY
        ).exclude(pk=addr.pk).update(
            type=AddressType.SECONDARY, updated_at=timezone.now()
        )
        addr.type = AddressType.PRIMARY
        addr.save(update_fields=["type", "updated_at"])

    logger.info("set primary address=%s for customer=%s", address_id, customer_code)
    address_updated.send(
        sender=CustomerAddress,
        address=addr,
        changes={"type": {"old": AddressType.SECONDARY, "new": AddressType.PRIMARY}},
    )
    return addr


def _has_primary(customer_code: str, exclude_address_id: str | None = None) -> bool:
    qs = CustomerAddress.objects.filter(
        customer__code=customer_code, type=AddressType.PRIMARY
    )
    if exclude_address_id:
        qs = qs.exclude(address_id=exclude_address_id)
    return qs.exists()
