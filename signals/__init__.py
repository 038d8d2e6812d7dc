"""
Kycman signals - public event API.

Emitted signals:
- address_added: Emitted by services.address.add_address()
- address_updated: Emitted by services.address.update_address() and set_primary_address()
- address_deleted: Emitted by services.address.delete_address() when a row was removed
- disclaimer_created: Emitted by services.disclaimer.insert_disclaimer()
- disclaimer_accepted: Emitted by services.disclaimer.accept_disclaimer() on first acceptance only
"""

from django.dispatch import Signal

# Address signals
address_added = Signal()  # sender=CustomerAddress, address=CustomerAddress
address_updated = Signal()  # sender=CustomerAddress, address=CustomerAddress, changes=dict
address_deleted = Signal()  # sender=CustomerAddress, customer_code=str, address_id=str

# Disclaimer signals
disclaimer_created = Signal()  # sender=Disclaimer, disclaimer=Disclaimer
disclaimer_accepted = Signal()  # sender=DisclaimerAcceptance, acceptance=DisclaimerAcceptance
