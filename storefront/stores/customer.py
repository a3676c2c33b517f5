"""Customer store: checkout data merged field by field."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from storefront.core.broker import Broker
from storefront.core.events import CustomerChanged, emit
from storefront.domain.customer import (
    CUSTOMER_FIELDS,
    ERROR_MESSAGES,
    PAYMENT,
    CustomerData,
    Payment,
    ValidationResult,
)

logger = logging.getLogger(__name__)


class CustomerStore:
    """Holds payment method, email, phone and address for the session."""

    def __init__(self, broker: Broker) -> None:
        self._broker = broker
        self._data = CustomerData()

    def set_data(self, data: Mapping[str, Any] | None = None, **fields: Any) -> None:
        """Merge the given fields; omitted fields keep their values.

        Announces the change once per call. Unknown fields and unparseable
        payment values are logged and skipped.
        """
        updates: dict[str, Any] = {**(data or {}), **fields}
        clean: dict[str, Any] = {}
        for name, value in updates.items():
            if name not in CUSTOMER_FIELDS:
                logger.warning("Ignoring unknown customer field %r", name)
                continue
            if value is None:
                continue
            if name == PAYMENT:
                try:
                    clean[name] = Payment.parse(value)
                except ValueError:
                    logger.warning("Ignoring unsupported payment method %r", value)
                continue
            clean[name] = str(value)

        self._data = replace(self._data, **clean)
        emit(self._broker, CustomerChanged(customer=self._data))

    def get_data(self) -> CustomerData:
        return self._data

    def clear(self) -> None:
        """Reset every field to empty/unset."""
        self._data = CustomerData()
        emit(self._broker, CustomerChanged(customer=self._data))

    def validate(self) -> ValidationResult:
        """Per-field emptiness check. Pure: publishes nothing."""
        data = self._data
        errors: ValidationResult = {}
        if data.payment == Payment.UNSET:
            errors["payment"] = ERROR_MESSAGES["payment"]
        if not data.email.strip():
            errors["email"] = ERROR_MESSAGES["email"]
        if not data.phone.strip():
            errors["phone"] = ERROR_MESSAGES["phone"]
        if not data.address.strip():
            errors["address"] = ERROR_MESSAGES["address"]
        return errors
