"""CustomerAddress model."""

from django.db import models
from django.utils.translation import gettext_lazy as _

from kycman.utils import generate_id


class AddressType(models.TextChoices):
    PRIMARY = "primary", _("Primary")
    SECONDARY = "secondary", _("Secondary")


class CustomerAddress(models.Model):
    """
    Customer postal address.

    Rules:
    - address_id is generated on insert and never changes
    - At most one type=primary per customer (checked by Gates before every
      write, backed by a partial unique constraint)
    - validated is set by the verification workflow, not by address writes
    - Deletion is permanent
    """

    address_id = models.CharField(
        _("address id"),
        max_length=64,
        unique=True,
        default=generate_id,
        editable=False,
    )
    customer = models.ForeignKey(
        "kycman.Customer",
        on_delete=models.CASCADE,
        related_name="addresses",
        verbose_name=_("customer"),
    )

    type = models.CharField(
        _("type"),
        max_length=20,
        choices=AddressType.choices,
        default=AddressType.SECONDARY,
    )

    address1 = models.CharField(_("address line 1"), max_length=255)
    address2 = models.CharField(_("address line 2"), max_length=255, blank=True)
    city = models.CharField(_("city"), max_length=100)
    state = models.CharField(
        _("state"),
        max_length=2,
        help_text=_("Two-letter state code"),
    )
    postal_code = models.CharField(_("postal code"), max_length=20)
    country = models.CharField(_("country"), max_length=100)

    validated = models.BooleanField(
        _("validated"),
        default=False,
        help_text=_("Address has been validated for the customer"),
    )

    # Audit
    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        db_table = "kycman_customer_address"
        verbose_name = _("address")
        verbose_name_plural = _("addresses")
        # Insertion order
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(
                fields=["customer"],
                condition=models.Q(type="primary"),
                name="kycman_unique_primary_address",
            ),
        ]

    def __str__(self):
        return f"{self.get_type_display()}: {self.one_line[:50]}"

    @property
    def is_primary(self) -> bool:
        return self.type == AddressType.PRIMARY

    @property
    def one_line(self) -> str:
        """Single-line address for lists."""
        street = ", ".join(p for p in (self.address1, self.address2) if p)
        return f"{street}, {self.city}, {self.state} {self.postal_code}, {self.country}"

    def save(self, *args, **kwargs):
        self.state = self.state.strip().upper()
        super().save(*args, **kwargs)
