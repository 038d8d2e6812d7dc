# Initial schema: customers, addresses, disclaimers and acceptances

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models

import kycman.utils


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "code",
                    models.CharField(
                        default=kycman.utils.generate_id,
                        help_text="Opaque customer identifier",
                        max_length=64,
                        unique=True,
                        verbose_name="code",
                    ),
                ),
                (
                    "organization",
                    models.CharField(
                        db_index=True,
                        help_text="Organization the customer belongs to",
                        max_length=100,
                        verbose_name="organization",
                    ),
                ),
                (
                    "first_name",
                    models.CharField(blank=True, max_length=100, verbose_name="first name"),
                ),
                (
                    "last_name",
                    models.CharField(blank=True, max_length=100, verbose_name="last name"),
                ),
                (
                    "is_active",
                    models.BooleanField(db_index=True, default=True, verbose_name="active"),
                ),
                (
                    "created_at",
                    models.DateTimeField(auto_now_add=True, verbose_name="created at"),
                ),
                (
                    "updated_at",
                    models.DateTimeField(auto_now=True, verbose_name="updated at"),
                ),
            ],
            options={
                "verbose_name": "customer",
                "verbose_name_plural": "customers",
                "ordering": ["code"],
            },
        ),
        migrations.CreateModel(
            name="CustomerAddress",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "address_id",
                    models.CharField(
                        default=kycman.utils.generate_id,
                        editable=False,
                        max_length=64,
                        unique=True,
                        verbose_name="address id",
                    ),
                ),
                (
                    "type",
                    models.CharField(
                        choices=[("primary", "Primary"), ("secondary", "Secondary")],
                        default="secondary",
                        max_length=20,
                        verbose_name="type",
                    ),
                ),
                ("address1", models.CharField(max_length=255, verbose_name="address line 1")),
                (
                    "address2",
                    models.CharField(blank=True, max_length=255, verbose_name="address line 2"),
                ),
                ("city", models.CharField(max_length=100, verbose_name="city")),
                (
                    "state",
                    models.CharField(
                        help_text="Two-letter state code",
                        max_length=2,
                        verbose_name="state",
                    ),
                ),
                ("postal_code", models.CharField(max_length=20, verbose_name="postal code")),
                ("country", models.CharField(max_length=100, verbose_name="country")),
                (
                    "validated",
                    models.BooleanField(
                        default=False,
                        help_text="Address has been validated for the customer",
                        verbose_name="validated",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(auto_now_add=True, verbose_name="created at"),
                ),
                (
                    "updated_at",
                    models.DateTimeField(auto_now=True, verbose_name="updated at"),
                ),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="addresses",
                        to="kycman.customer",
                        verbose_name="customer",
                    ),
                ),
            ],
            options={
                "verbose_name": "address",
                "verbose_name_plural": "addresses",
                "db_table": "kycman_customer_address",
                "ordering": ["id"],
            },
        ),
        migrations.AddConstraint(
            model_name="customeraddress",
            constraint=models.UniqueConstraint(
                condition=models.Q(("type", "primary")),
                fields=("customer",),
                name="kycman_unique_primary_address",
            ),
        ),
        migrations.CreateModel(
            name="Disclaimer",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "disclaimer_id",
                    models.CharField(
                        default=kycman.utils.generate_id,
                        editable=False,
                        max_length=64,
                        unique=True,
                        verbose_name="disclaimer id",
                    ),
                ),
                ("text", models.TextField(verbose_name="text")),
                (
                    "document_id",
                    models.CharField(
                        help_text="Document the disclaimer legally depends on",
                        max_length=64,
                        verbose_name="document id",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(auto_now_add=True, verbose_name="created at"),
                ),
                (
                    "deleted_at",
                    models.DateTimeField(blank=True, null=True, verbose_name="deleted at"),
                ),
            ],
            options={
                "verbose_name": "disclaimer",
                "verbose_name_plural": "disclaimers",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="DisclaimerAcceptance",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "customer_code",
                    models.CharField(db_index=True, max_length=64, verbose_name="customer code"),
                ),
                (
                    "accepted_at",
                    models.DateTimeField(
                        default=django.utils.timezone.now, verbose_name="accepted at"
                    ),
                ),
                (
                    "disclaimer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="acceptances",
                        to="kycman.disclaimer",
                        verbose_name="disclaimer",
                    ),
                ),
            ],
            options={
                "verbose_name": "disclaimer acceptance",
                "verbose_name_plural": "disclaimer acceptances",
                "db_table": "kycman_disclaimer_acceptance",
                "ordering": ["accepted_at", "id"],
            },
        ),
        migrations.AddConstraint(
            model_name="disclaimeracceptance",
            constraint=models.UniqueConstraint(
                fields=("customer_code", "disclaimer"),
                name="kycman_unique_acceptance",
            ),
        ),
    ]
