from django.apps import AppConfig


class KycmanConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "kycman"
    verbose_name = "Kycman - Customer Identity Records"
