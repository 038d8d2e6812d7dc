"""Management command to create or soft-delete catalog disclaimers."""

from django.core.management.base import BaseCommand, CommandError

from kycman.exceptions import KycmanError
from kycman.service import RecordService


class Command(BaseCommand):
    help = "Create a disclaimer for a document, or soft-delete one with --delete"

    def add_arguments(self, parser):
        parser.add_argument("--text", default="", help="Disclaimer text")
        parser.add_argument(
            "--document-id",
            default="",
            help="Document the disclaimer depends on",
        )
        parser.add_argument(
            "--delete",
            metavar="DISCLAIMER_ID",
            default=None,
            help="Soft-delete this disclaimer instead of creating one",
        )

    def handle(self, *args, **options):
        if options["delete"]:
            if RecordService.delete_disclaimer(options["delete"]):
                self.stdout.write(
                    self.style.SUCCESS(f"Deleted disclaimer {options['delete']}.")
                )
            else:
                self.stdout.write(f"Disclaimer {options['delete']} already absent.")
            return

        try:
            disclaimer = RecordService.create_disclaimer(
                options["text"], options["document_id"]
            )
        except KycmanError as exc:
            raise CommandError(f"{exc.code}: {exc.message}")

        self.stdout.write(
            self.style.SUCCESS(f"Created disclaimer {disclaimer.disclaimer_id}.")
        )
