"""Kycman admin.

Addresses are shown read-only: writes go through RecordService so the
address-set gates run. Disclaimers are created through the disclaimer service
so the backing document is checked, and are never edited or hard-deleted.
"""

from django import forms
from django.contrib import admin, messages
from django.http import HttpResponseRedirect
from django.utils.html import format_html

from kycman.exceptions import KycmanError
from kycman.models import (
    Customer,
    CustomerAddress,
    Disclaimer,
    DisclaimerAcceptance,
)
from kycman.services import disclaimer as disclaimer_service


# ===========================================
# Customer Admin
# ===========================================


class CustomerAddressInline(admin.TabularInline):
    model = CustomerAddress
    extra = 0
    fields = ["address_id", "type", "address1", "city", "state", "validated"]
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ["code", "name", "organization", "is_active"]
    list_filter = ["organization", "is_active"]
    search_fields = ["code", "first_name", "last_name"]
    readonly_fields = ["created_at", "updated_at"]
    inlines = [CustomerAddressInline]


# ===========================================
# Disclaimer Admin
# ===========================================


class DisclaimerAdminForm(forms.ModelForm):
    class Meta:
        model = Disclaimer
        fields = ["text", "document_id"]

    def clean(self):
        cleaned = super().clean()
        document_id = cleaned.get("document_id")
        if document_id and not self.instance.pk:
            try:
                disclaimer_service.require_document(document_id)
            except KycmanError as exc:
                self.add_error("document_id", exc.message)
        return cleaned


@admin.register(Disclaimer)
class DisclaimerAdmin(admin.ModelAdmin):
    form = DisclaimerAdminForm
    list_display = [
        "disclaimer_id",
        "text_short",
        "document_id",
        "status_badge",
        "created_at",
    ]
    list_filter = ["deleted_at"]
    search_fields = ["disclaimer_id", "text", "document_id"]
    actions = ["soft_delete"]

    def get_readonly_fields(self, request, obj=None):
        if obj is not None:
            return ["disclaimer_id", "text", "document_id", "created_at", "deleted_at"]
        return []

    def has_delete_permission(self, request, obj=None):
        return False

    def save_model(self, request, obj, form, change):
        if change:
            return
        try:
            created = disclaimer_service.insert_disclaimer(obj.text, obj.document_id)
        except KycmanError as exc:
            self.message_user(request, exc.message, messages.ERROR)
            return
        obj.pk = created.pk
        obj.disclaimer_id = created.disclaimer_id
        obj.created_at = created.created_at

    def log_addition(self, request, obj, message):
        if obj.pk is None:
            return None
        return super().log_addition(request, obj, message)

    def response_add(self, request, obj, post_url_continue=None):
        # Rejected by the service after the form check; back to the add form.
        if obj.pk is None:
            return HttpResponseRedirect(request.path)
        return super().response_add(request, obj, post_url_continue)

    @admin.action(description="Soft-delete selected disclaimers")
    def soft_delete(self, request, queryset):
        count = sum(
            disclaimer_service.delete_disclaimer(d.disclaimer_id) for d in queryset
        )
        self.message_user(request, f"{count} disclaimer(s) deleted.", messages.SUCCESS)

    def text_short(self, obj):
        return obj.text[:60]

    text_short.short_description = "Text"

    def status_badge(self, obj):
        color = "#dc3545" if obj.is_deleted else "#28a745"
        label = "deleted" if obj.is_deleted else "active"
        return format_html(
            '<span style="background:{}; color:#fff; padding:2px 8px; '
            'border-radius:3px; font-size:11px;">{}</span>',
            color,
            label,
        )

    status_badge.short_description = "Status"


@admin.register(DisclaimerAcceptance)
class DisclaimerAcceptanceAdmin(admin.ModelAdmin):
    list_display = ["customer_code", "disclaimer", "accepted_at"]
    search_fields = ["customer_code", "disclaimer__disclaimer_id"]
    raw_id_fields = ["disclaimer"]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
