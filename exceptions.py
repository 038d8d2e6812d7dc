"""Kycman exceptions."""


class BaseError(Exception):
    """
    Structured error with a stable code, a human message and context data.

    Subclasses provide ``_default_messages`` keyed by code.
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(f"[{code}] {self.message}")

    def as_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "data": self.data}


class KycmanError(BaseError):
    """
    Structured exception for address and disclaimer operations.

    Usage:
        try:
            RecordService.create_address("CUST-001", "acme", **fields)
        except KycmanError as e:
            if e.code == "DUPLICATE_PRIMARY_ADDRESS":
                ask_client_to_demote_existing_primary()
            elif e.kind == "not_found":
                respond_404()
    """

    _default_messages = {
        # Client input
        "VALIDATION_ERROR": "Invalid request",
        "MISSING_REQUIRED_FIELD": "Required field is missing",
        "INVALID_ADDRESS_TYPE": "Unknown address type",
        "INVALID_STATE": "State must be a two-letter code",
        # Invariant conflicts
        "DUPLICATE_PRIMARY_ADDRESS": "Customer already has an address with type 'primary'",
        # Not found
        "CUSTOMER_NOT_FOUND": "Customer not found",
        "ADDRESS_NOT_FOUND": "Address not found",
        "DISCLAIMER_NOT_FOUND": "Disclaimer not found",
        "DOCUMENT_NOT_FOUND": "Document not found",
    }

    _kinds = {
        "DUPLICATE_PRIMARY_ADDRESS": "conflict",
        "CUSTOMER_NOT_FOUND": "not_found",
        "ADDRESS_NOT_FOUND": "not_found",
        "DISCLAIMER_NOT_FOUND": "not_found",
        "DOCUMENT_NOT_FOUND": "not_found",
    }

    @property
    def kind(self) -> str:
        """Error category: "invalid", "conflict" or "not_found"."""
        return self._kinds.get(self.code, "invalid")
