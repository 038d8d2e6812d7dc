"""Kycman services (storage layer).

- kycman.services.customer: customer lookup and row lock
- kycman.services.address: address CRUD
- kycman.services.disclaimer: disclaimer catalog and acceptances

Cross-record validation lives in kycman.gates and is composed with these
services by kycman.service.RecordService.
"""

from kycman.services import customer
from kycman.services import address
from kycman.services import disclaimer

__all__ = ["customer", "address", "disclaimer"]
