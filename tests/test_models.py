"""Tests for Kycman models."""

import pytest
from django.utils import timezone

from kycman.models import (
    AddressType,
    Customer,
    CustomerAddress,
    Disclaimer,
    DisclaimerAcceptance,
)


pytestmark = pytest.mark.django_db


class TestCustomer:
    def test_name_property(self, customer):
        assert customer.name == "John Doe"
        assert str(customer) == "John Doe (CUST-001)"

    def test_str_without_name(self, db):
        cust = Customer.objects.create(organization="acme")
        assert str(cust) == cust.code
        assert len(cust.code) == 32

    def test_primary_address(self, customer, primary_address, secondary_address):
        assert customer.primary_address == primary_address

    def test_no_primary_address(self, customer, secondary_address):
        assert customer.primary_address is None


class TestCustomerAddress:
    def test_state_uppercased_on_save(self, customer):
        addr = CustomerAddress.objects.create(
            customer=customer,
            type=AddressType.SECONDARY,
            address1="1 Main St",
            city="New York",
            state=" ny",
            postal_code="10001",
            country="US",
        )
        addr.refresh_from_db()
        assert addr.state == "NY"

    def test_address_id_generated(self, primary_address, secondary_address):
        assert primary_address.address_id != secondary_address.address_id

    def test_is_primary(self, primary_address, secondary_address):
        assert primary_address.is_primary
        assert not secondary_address.is_primary

    def test_one_line(self, secondary_address):
        assert (
            secondary_address.one_line
            == "500 Market St, Suite 200, San Francisco, CA 94105, US"
        )

    def test_str(self, primary_address):
        assert str(primary_address).startswith("Primary: 1 Main St")

    def test_deleting_customer_removes_addresses(self, customer, primary_address):
        customer.delete()
        assert not CustomerAddress.objects.exists()


class TestDisclaimer:
    def test_active_excludes_deleted(self, disclaimer):
        deleted = Disclaimer.objects.create(
            text="old terms", document_id="DOC-001", deleted_at=timezone.now()
        )

        assert list(Disclaimer.objects.active()) == [disclaimer]
        assert deleted.is_deleted
        assert not disclaimer.is_deleted

    def test_acceptance_str(self, disclaimer):
        acceptance = DisclaimerAcceptance.objects.create(
            customer_code="CUST-001", disclaimer=disclaimer
        )
        assert str(acceptance) == f"CUST-001 accepted {disclaimer.disclaimer_id[:8]}"
        assert acceptance.accepted_at is not None
