"""Disclaimer catalog and per-customer acceptances."""

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from kycman.utils import generate_id


class DisclaimerQuerySet(models.QuerySet):
    def active(self):
        """Catalog entries (not soft-deleted)."""
        return self.filter(deleted_at__isnull=True)


class Disclaimer(models.Model):
    """
    Legal text a customer must acknowledge, backed by a document.

    Created once through the admin path and never edited. Deletion is soft
    (deleted_at) so acceptance history keeps pointing at the original text.
    """

    disclaimer_id = models.CharField(
        _("disclaimer id"),
        max_length=64,
        unique=True,
        default=generate_id,
        editable=False,
    )
    text = models.TextField(_("text"))
    document_id = models.CharField(
        _("document id"),
        max_length=64,
        help_text=_("Document the disclaimer legally depends on"),
    )

    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    deleted_at = models.DateTimeField(_("deleted at"), null=True, blank=True)

    objects = DisclaimerQuerySet.as_manager()

    class Meta:
        verbose_name = _("disclaimer")
        verbose_name_plural = _("disclaimers")
        ordering = ["id"]

    def __str__(self):
        return f"{self.disclaimer_id[:8]}: {self.text[:50]}"

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


class DisclaimerAcceptance(models.Model):
    """
    Audit fact: a customer acknowledged a disclaimer at a given time.

    Rules:
    - One row per (customer_code, disclaimer)
    - accepted_at is written once and never touched again
    - The disclaimer is PROTECTed so history cannot be removed with it
    """

    customer_code = models.CharField(
        _("customer code"),
        max_length=64,
        db_index=True,
    )
    disclaimer = models.ForeignKey(
        "kycman.Disclaimer",
        on_delete=models.PROTECT,
        related_name="acceptances",
        verbose_name=_("disclaimer"),
    )
    accepted_at = models.DateTimeField(_("accepted at"), default=timezone.now)

    class Meta:
        db_table = "kycman_disclaimer_acceptance"
        verbose_name = _("disclaimer acceptance")
        verbose_name_plural = _("disclaimer acceptances")
        ordering = ["accepted_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["customer_code", "disclaimer"],
                name="kycman_unique_acceptance",
            ),
        ]

    def __str__(self):
        return f"{self.customer_code} accepted {self.disclaimer.disclaimer_id[:8]}"
