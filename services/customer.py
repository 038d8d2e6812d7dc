"""Customer lookup.

Customers are owned by the identity system; Kycman only checks that one exists
(and belongs to the caller's organization) before touching its addresses.
"""

from kycman.models import Customer


def _queryset(code: str, organization: str | None):
    qs = Customer.objects.filter(code=code, is_active=True)
    if organization is not None:
        qs = qs.filter(organization=organization)
    return qs


def get(code: str, organization: str | None = None) -> Customer | None:
    """Get active customer by code, optionally scoped to an organization."""
    return _queryset(code, organization).first()


def get_for_update(code: str, organization: str | None = None) -> Customer | None:
    """
    Get active customer with a row-level lock.

    MUST be called inside transaction.atomic(). Writers holding this lock for
    the same customer run one after the other; other customers are unaffected.
    """
    return _queryset(code, organization).select_for_update().first()
