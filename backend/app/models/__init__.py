from backend.app.models.customer import Customer, InvoiceType, SalesInvoice, SalesItem
from backend.app.models.payment import Payment, PaymentType
from backend.app.models.product import Product
from backend.app.models.supplier import ImportInvoice, Supplier
from backend.app.models.user import User

__all__ = [
    "Customer",
    "ImportInvoice",
    "InvoiceType",
    "Payment",
    "PaymentType",
    "Product",
    "SalesInvoice",
    "SalesItem",
    "Supplier",
    "User",
]
