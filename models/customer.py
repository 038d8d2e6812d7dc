"""Customer model (reference record).

The customer itself is owned by the identity system. Kycman keeps only what it
needs to scope and serialize address writes:

    code          opaque customer identifier used by every caller
    organization  opaque scoping tag, checked on lookup, never copied to
                  address or disclaimer rows

Address writes lock this row (select_for_update) so that two requests for the
same customer run one after the other while different customers never contend.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from kycman.utils import generate_id


class Customer(models.Model):
    """Customer known to Kycman."""

    code = models.CharField(
        _("code"),
        max_length=64,
        unique=True,
        default=generate_id,
        help_text=_("Opaque customer identifier"),
    )
    organization = models.CharField(
        _("organization"),
        max_length=100,
        db_index=True,
        help_text=_("Organization the customer belongs to"),
    )

    first_name = models.CharField(_("first name"), max_length=100, blank=True)
    last_name = models.CharField(_("last name"), max_length=100, blank=True)

    is_active = models.BooleanField(_("active"), default=True, db_index=True)

    # Audit
    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        verbose_name = _("customer")
        verbose_name_plural = _("customers")
        ordering = ["code"]

    def __str__(self):
        return f"{self.name} ({self.code})" if self.name else self.code

    @property
    def name(self) -> str:
        """Full name (first + last)."""
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def primary_address(self):
        """Customer's primary address."""
        return self.addresses.filter(type="primary").first()
