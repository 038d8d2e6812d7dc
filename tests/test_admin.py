"""Tests for Kycman admin and management command."""

from io import StringIO
from unittest.mock import patch

import pytest
from django.contrib import admin, messages
from django.core.management import CommandError, call_command

from kycman.admin import DisclaimerAdmin, DisclaimerAdminForm
from kycman.models import (
    Customer,
    CustomerAddress,
    Disclaimer,
    DisclaimerAcceptance,
)


pytestmark = pytest.mark.django_db


class TestAdminRegistration:
    @pytest.mark.parametrize(
        "model", [Customer, Disclaimer, DisclaimerAcceptance]
    )
    def test_registered(self, model):
        assert admin.site.is_registered(model)

    def test_addresses_not_edited_directly(self):
        assert not admin.site.is_registered(CustomerAddress)


class TestDisclaimerAdmin:
    def test_form_rejects_unknown_document(self, db):
        form = DisclaimerAdminForm(
            data={"text": "terms and conditions", "document_id": "DOC-404"}
        )

        assert not form.is_valid()
        assert "document_id" in form.errors

    def test_form_accepts_known_document(self, document):
        form = DisclaimerAdminForm(
            data={"text": "terms and conditions", "document_id": "DOC-001"}
        )
        assert form.is_valid()

    def test_save_model_goes_through_service(self, document):
        model_admin = DisclaimerAdmin(Disclaimer, admin.site)
        obj = Disclaimer(text="terms and conditions", document_id="DOC-001")

        model_admin.save_model(request=None, obj=obj, form=None, change=False)

        stored = Disclaimer.objects.get()
        assert obj.pk == stored.pk
        assert obj.disclaimer_id == stored.disclaimer_id

    def test_document_deleted_after_form_check(self, documents, document):
        model_admin = DisclaimerAdmin(Disclaimer, admin.site)
        obj = Disclaimer(text="terms and conditions", document_id="DOC-001")
        documents.add("DOC-001", deleted=True)

        with patch.object(model_admin, "message_user") as message_user:
            model_admin.save_model(request=None, obj=obj, form=None, change=False)

        assert obj.pk is None
        assert not Disclaimer.objects.exists()
        assert message_user.call_args.args[2] == messages.ERROR

    def test_rejected_add_returns_to_form(self, rf):
        model_admin = DisclaimerAdmin(Disclaimer, admin.site)
        request = rf.post("/admin/kycman/disclaimer/add/")

        response = model_admin.response_add(request, Disclaimer())

        assert response.status_code == 302
        assert response.url == "/admin/kycman/disclaimer/add/"

    def test_existing_disclaimer_is_read_only(self, disclaimer):
        model_admin = DisclaimerAdmin(Disclaimer, admin.site)

        assert "text" in model_admin.get_readonly_fields(None, disclaimer)
        assert model_admin.get_readonly_fields(None, None) == []
        assert not model_admin.has_delete_permission(None, disclaimer)

    def test_soft_delete_action(self, disclaimer):
        model_admin = DisclaimerAdmin(Disclaimer, admin.site)

        with patch.object(model_admin, "message_user") as message_user:
            model_admin.soft_delete(None, Disclaimer.objects.all())

        disclaimer.refresh_from_db()
        assert disclaimer.is_deleted
        assert "1 disclaimer(s) deleted." in message_user.call_args.args


class TestDisclaimerCommand:
    def test_create(self, document):
        out = StringIO()
        call_command(
            "kycman_disclaimer",
            text="terms and conditions",
            document_id="DOC-001",
            stdout=out,
        )

        disclaimer = Disclaimer.objects.get()
        assert disclaimer.text == "terms and conditions"
        assert disclaimer.disclaimer_id in out.getvalue()

    def test_create_with_empty_document(self, db):
        with pytest.raises(CommandError, match="VALIDATION_ERROR"):
            call_command("kycman_disclaimer", text="terms and conditions")
        assert not Disclaimer.objects.exists()

    def test_create_with_unknown_document(self, db):
        with pytest.raises(CommandError, match="DOCUMENT_NOT_FOUND"):
            call_command(
                "kycman_disclaimer", text="terms and conditions", document_id="DOC-404"
            )

    def test_delete(self, disclaimer):
        out = StringIO()
        call_command("kycman_disclaimer", delete=disclaimer.disclaimer_id, stdout=out)

        disclaimer.refresh_from_db()
        assert disclaimer.is_deleted
        assert "Deleted" in out.getvalue()

    def test_delete_unknown(self, db):
        out = StringIO()
        call_command("kycman_disclaimer", delete="unknown-id", stdout=out)
        assert "already absent" in out.getvalue()
