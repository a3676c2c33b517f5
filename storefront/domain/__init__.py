"""Domain types for the storefront."""
from .checkout_fsm import CheckoutState
from .customer import CustomerData, Payment, ValidationResult
from .order import OrderRequest, OrderResult
from .product import Product

__all__ = [
    "CheckoutState",
    "CustomerData",
    "OrderRequest",
    "OrderResult",
    "Payment",
    "Product",
    "ValidationResult",
]
