"""Pytest fixtures for Kycman tests."""

import pytest

from kycman.models import Customer, CustomerAddress, Disclaimer
from kycman.tests.documents import InMemoryDocumentBackend


ADDRESS = {
    "address1": "1 Main St",
    "city": "New York",
    "state": "NY",
    "postal_code": "10001",
    "country": "US",
}


@pytest.fixture
def address_fields():
    """Valid address fields without a type."""
    return dict(ADDRESS)


@pytest.fixture(autouse=True)
def documents():
    """Empty in-memory document store for every test."""
    InMemoryDocumentBackend.clear()
    yield InMemoryDocumentBackend
    InMemoryDocumentBackend.clear()


@pytest.fixture
def document(documents):
    """A stored, non-deleted document."""
    return documents.add("DOC-001")


@pytest.fixture
def customer(db):
    """Create a test customer."""
    return Customer.objects.create(
        code="CUST-001",
        organization="acme",
        first_name="John",
        last_name="Doe",
    )


@pytest.fixture
def customer_b(db):
    """Create a second customer in the same organization."""
    return Customer.objects.create(
        code="CUST-002",
        organization="acme",
        first_name="Jane",
        last_name="Roe",
    )


@pytest.fixture
def primary_address(db, customer):
    """Create a primary address."""
    return CustomerAddress.objects.create(customer=customer, type="primary", **ADDRESS)


@pytest.fixture
def secondary_address(db, customer):
    """Create a secondary address."""
    return CustomerAddress.objects.create(
        customer=customer,
        type="secondary",
        address1="500 Market St",
        address2="Suite 200",
        city="San Francisco",
        state="CA",
        postal_code="94105",
        country="US",
    )


@pytest.fixture
def disclaimer(db, document):
    """Create a catalog disclaimer."""
    return Disclaimer.objects.create(
        text="terms and conditions",
        document_id=document.document_id,
    )
