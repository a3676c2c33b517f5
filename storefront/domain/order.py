"""Order wire types: the request snapshot and the server's confirmation."""
from __future__ import annotations

from pydantic import BaseModel, Field

from .customer import CustomerData, Payment


class OrderRequest(BaseModel):
    """Snapshot sent to the order endpoint. Built fresh at submission time."""

    payment: Payment
    email: str
    phone: str
    address: str
    items: list[str] = Field(default_factory=list, description="Product ids in the cart")
    total: float = Field(0, ge=0, description="Sum of priced items")

    @classmethod
    def from_checkout(cls, customer: CustomerData, items: list[str], total: float) -> "OrderRequest":
        return cls(
            payment=customer.payment,
            email=customer.email,
            phone=customer.phone,
            address=customer.address,
            items=list(items),
            total=total,
        )

    def to_payload(self) -> dict:
        """JSON body for the order endpoint."""
        return self.model_dump(mode="json")


class OrderResult(BaseModel):
    """Order confirmation returned by the API."""

    id: str
    total: float
