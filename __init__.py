"""
Django Kycman - Customer identity records (addresses and disclaimers).

Usage:
    from kycman import RecordService
    from kycman.gates import Gates, GateError, GateResult

    record = RecordService.create_address(
        "CUST-001", "acme", type="primary", address1="1 Main St",
        city="New York", state="NY", postal_code="10001", country="US",
    )
    disclaimers = RecordService.list_disclaimers("CUST-001")
    RecordService.accept_disclaimer("CUST-001", disclaimers[0].disclaimer_id)

    # Gates validation (pure, no database)
    Gates.address_set(candidates)
"""


def __getattr__(name):
    if name == "RecordService":
        from kycman.service import RecordService

        return RecordService
    if name == "KycmanError":
        from kycman.exceptions import KycmanError

        return KycmanError
    if name == "Gates":
        from kycman.gates import Gates

        return Gates
    if name == "GateError":
        from kycman.gates import GateError

        return GateError
    if name == "GateResult":
        from kycman.gates import GateResult

        return GateResult
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["RecordService", "KycmanError", "Gates", "GateError", "GateResult"]
__version__ = "0.1.0"
