"""Customer value types and validation messages."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class Payment(str, Enum):
    """Payment method chosen on the order form."""

    UNSET = ""
    ONLINE = "online"
    CASH = "cash"

    @classmethod
    def parse(cls, value: Any) -> "Payment":
        """Coerce raw input; ``card`` is accepted as online payment."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.UNSET
        raw = str(value).strip().lower()
        if raw == "card":
            return cls.ONLINE
        return cls(raw)


PAYMENT = "payment"
EMAIL = "email"
PHONE = "phone"
ADDRESS = "address"

CUSTOMER_FIELDS: tuple[str, ...] = (PAYMENT, EMAIL, PHONE, ADDRESS)

ERROR_MESSAGES: dict[str, str] = {
    PAYMENT: "Не выбран вид оплаты",
    EMAIL: "Необходимо указать email",
    PHONE: "Необходимо указать номер телефона",
    ADDRESS: "Необходимо указать адрес доставки",
}

# field name -> human-readable error; absent key means the field is valid
ValidationResult = dict[str, str]


@dataclass(frozen=True, slots=True)
class CustomerData:
    """Snapshot of the customer's checkout data."""

    payment: Payment = Payment.UNSET
    email: str = ""
    phone: str = ""
    address: str = ""

    def as_dict(self) -> dict[str, str]:
        data = asdict(self)
        data[PAYMENT] = self.payment.value
        return data
