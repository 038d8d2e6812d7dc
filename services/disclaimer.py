"""Disclaimer service: catalog and per-customer acceptances.

Acceptance is insert-if-absent on (customer_code, disclaimer). A repeated
acceptance returns the existing row untouched, keeping the original accepted_at
as the audit fact.
"""

import logging

from django.core.exceptions import ImproperlyConfigured
from django.db import IntegrityError, transaction
from django.db.models import OuterRef, Subquery
from django.utils import timezone
from django.utils.module_loading import import_string

from kycman.conf import kycman_settings
from kycman.exceptions import KycmanError
from kycman.gates import GateError, Gates
from kycman.models import Disclaimer, DisclaimerAcceptance
from kycman.protocols.documents import DocumentBackend, DocumentInfo
from kycman.protocols.records import DisclaimerInfo
from kycman.signals import disclaimer_accepted, disclaimer_created

logger = logging.getLogger(__name__)


def _get_document_backend() -> DocumentBackend:
    """Get configured DocumentBackend."""
    backend_path = kycman_settings.DOCUMENT_BACKEND
    if not backend_path:
        raise ImproperlyConfigured(
            "KYCMAN['DOCUMENT_BACKEND'] must be set to create disclaimers."
        )
    backend_class = import_string(backend_path)
    return backend_class()


def require_document(document_id: str) -> DocumentInfo:
    """
    Return the backing document, or raise if it is missing or deleted.

    Raises:
        KycmanError: DOCUMENT_NOT_FOUND
    """
    document = _get_document_backend().get_document(document_id)
    if document is None or document.is_deleted:
        raise KycmanError("DOCUMENT_NOT_FOUND", document_id=document_id)
    return document


def customer_disclaimers(customer_code: str) -> list[DisclaimerInfo]:
    """
    Full disclaimer catalog with this customer's acceptance status.

    A customer without acceptances still sees every entry, all unaccepted.
    """
    accepted = DisclaimerAcceptance.objects.filter(
        customer_code=customer_code,
        disclaimer=OuterRef("pk"),
    ).values("accepted_at")[:1]

    qs = Disclaimer.objects.active().annotate(accepted_at=Subquery(accepted))
    return [
        DisclaimerInfo(
            disclaimer_id=d.disclaimer_id,
            text=d.text,
            document_id=d.document_id,
            accepted=d.accepted_at is not None,
            accepted_at=d.accepted_at,
        )
        for d in qs
    ]


def accept_disclaimer(customer_code: str, disclaimer_id: str) -> DisclaimerAcceptance:
    """
    Record that a customer accepted a disclaimer.

    Idempotent: accepting again returns the existing acceptance with its
    original timestamp.

    Raises:
        KycmanError: VALIDATION_ERROR (blank customer), DISCLAIMER_NOT_FOUND
            (unknown or deleted disclaimer)
    """
    if not customer_code:
        raise KycmanError("VALIDATION_ERROR", message="Customer code is required")

    try:
        disclaimer = Disclaimer.objects.active().get(disclaimer_id=disclaimer_id)
    except Disclaimer.DoesNotExist:
        raise KycmanError("DISCLAIMER_NOT_FOUND", disclaimer_id=disclaimer_id)

    existing = DisclaimerAcceptance.objects.filter(
        customer_code=customer_code, disclaimer=disclaimer
    ).first()
    if existing:
        return existing

    try:
        with transaction.atomic():
            acceptance = DisclaimerAcceptance.objects.create(
                customer_code=customer_code,
                disclaimer=disclaimer,
            )
    except IntegrityError:
        # A concurrent request inserted the row first
        existing = DisclaimerAcceptance.objects.filter(
            customer_code=customer_code, disclaimer=disclaimer
        ).first()
        if existing is None:
            raise
        return existing

    logger.info(
        "customer=%s accepted disclaimer=%s", customer_code, disclaimer.disclaimer_id
    )
    disclaimer_accepted.send(sender=DisclaimerAcceptance, acceptance=acceptance)
    return acceptance


def has_accepted(customer_code: str, disclaimer_id: str) -> bool:
    """Check if customer accepted a disclaimer (deleted ones included)."""
    return DisclaimerAcceptance.objects.filter(
        customer_code=customer_code,
        disclaimer__disclaimer_id=disclaimer_id,
    ).exists()


def acceptance_history(customer_code: str) -> list[DisclaimerAcceptance]:
    """
    Every acceptance recorded for a customer, oldest first.

    Acceptances of soft-deleted disclaimers are included.
    """
    return list(
        DisclaimerAcceptance.objects.filter(customer_code=customer_code).select_related(
            "disclaimer"
        )
    )


def insert_disclaimer(text: str, document_id: str) -> Disclaimer:
    """
    Add a disclaimer to the catalog (admin operation).

    Args:
        text: Legal text shown to customers
        document_id: Backing document, checked through the DocumentBackend

    Raises:
        KycmanError: VALIDATION_ERROR (blank text or document id),
            DOCUMENT_NOT_FOUND (missing or deleted document)
    """
    try:
        Gates.disclaimer_payload(text, document_id)
    except GateError as exc:
        raise KycmanError(
            "VALIDATION_ERROR", message=exc.message, **exc.details
        ) from exc

    require_document(document_id)

    with transaction.atomic():
        disclaimer = Disclaimer.objects.create(text=text, document_id=document_id)

    logger.info(
        "created disclaimer=%s for document=%s", disclaimer.disclaimer_id, document_id
    )
    disclaimer_created.send(sender=Disclaimer, disclaimer=disclaimer)
    return disclaimer


def delete_disclaimer(disclaimer_id: str) -> bool:
    """
    Soft-delete a disclaimer. Acceptances are kept.

    Returns:
        True if the disclaimer was deleted now, False if unknown or already deleted
    """
    updated = Disclaimer.objects.active().filter(disclaimer_id=disclaimer_id).update(
        deleted_at=timezone.now()
    )
    if updated:
        logger.info("deleted disclaimer=%s", disclaimer_id)
    return bool(updated)
