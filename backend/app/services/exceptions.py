"""Domain errors raised by the ledger and report services.

Endpoints translate these into HTTP responses. Database failures are not
wrapped here; ``SQLAlchemyError`` propagates to the boundary as-is.
"""


class LedgerServiceError(Exception):
    """Base exception for ledger/report service failures."""


class NotFoundError(LedgerServiceError):
    """The requested entity id has no matching record."""


class CustomerNotFoundError(NotFoundError):
    def __init__(self, customer_id: int) -> None:
        super().__init__("Customer not found")
        self.customer_id = customer_id


class SupplierNotFoundError(NotFoundError):
    def __init__(self, supplier_id: int) -> None:
        super().__init__("Supplier not found")
        self.supplier_id = supplier_id


class ReportValidationError(LedgerServiceError):
    """A report request is missing or has a malformed selector."""
