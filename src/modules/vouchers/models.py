"""Voucher consumed by the Order aggregate.

The Order never inspects the voucher's own validity rules: it calls
``validate_applicable`` and only reads the discount parameters after the
result comes back valid.

Applicability rules (every failing rule is reported, not just the first):
- Code must be non-empty.
- Expiry date must lie in the future.
- Voucher must be active and not yet used.
- At least one use must remain (``quantity > 0``).
- The discount parameter matching ``discount_type`` must be set and positive.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

import structlog

from modules.vouchers.constants import VoucherDiscountType
from shared.domain.entity import Entity
from shared.domain.validation import ValidationFailure, ValidationResult
from shared.domain.values import Number, as_optional_decimal, as_utc

logger = structlog.get_logger(__name__)


class Voucher(Entity):
    """Discount instrument issued outside this core.

    Discount parameters are held as ``Decimal`` and ``expires_at`` as an
    aware UTC datetime (naive values are taken to be UTC).
    """

    def __init__(
        self,
        code: str,
        discount_type: VoucherDiscountType,
        expires_at: datetime,
        quantity: int = 1,
        discount_value: Optional[Number] = None,
        discount_percentage: Optional[Number] = None,
        active: bool = True,
        used: bool = False,
        id: Optional[UUID] = None,
    ) -> None:
        super().__init__(id)
        self.code = code
        self.discount_type = VoucherDiscountType(discount_type)
        self.expires_at = expires_at
        self.quantity = quantity
        self.discount_value = discount_value
        self.discount_percentage = discount_percentage
        self.active = active
        self.used = used

    @property
    def expires_at(self) -> datetime:
        return self._expires_at

    @expires_at.setter
    def expires_at(self, value: datetime) -> None:
        self._expires_at = as_utc(value)

    @property
    def discount_value(self) -> Optional[Decimal]:
        return self._discount_value

    @discount_value.setter
    def discount_value(self, value: Optional[Number]) -> None:
        self._discount_value = as_optional_decimal(value)

    @property
    def discount_percentage(self) -> Optional[Decimal]:
        return self._discount_percentage

    @discount_percentage.setter
    def discount_percentage(self, value: Optional[Number]) -> None:
        self._discount_percentage = as_optional_decimal(value)

    def validate_applicable(self, now: Optional[datetime] = None) -> ValidationResult:
        """Check whether this voucher may be applied at ``now`` (UTC by default)."""
        now = as_utc(now) if now is not None else datetime.now(timezone.utc)
        errors: List[ValidationFailure] = []

        if not self.code or not self.code.strip():
            errors.append(
                ValidationFailure(field="code", message="Voucher has no valid code.")
            )
        if self.expires_at <= now:
            errors.append(
                ValidationFailure(
                    field="expires_at", message="This voucher has expired."
                )
            )
        if not self.active:
            errors.append(
                ValidationFailure(
                    field="active", message="This voucher is no longer valid."
                )
            )
        if self.used:
            errors.append(
                ValidationFailure(
                    field="used", message="This voucher has already been used."
                )
            )
        if self.quantity <= 0:
            errors.append(
                ValidationFailure(
                    field="quantity", message="This voucher is no longer available."
                )
            )

        if self.discount_type is VoucherDiscountType.VALUE:
            if self.discount_value is None or self.discount_value <= 0:
                errors.append(
                    ValidationFailure(
                        field="discount_value",
                        message="The discount value must be greater than 0.",
                    )
                )
        elif self.discount_percentage is None or self.discount_percentage <= 0:
            errors.append(
                ValidationFailure(
                    field="discount_percentage",
                    message="The discount percentage must be greater than 0.",
                )
            )

        if errors:
            logger.info(
                "voucher.not_applicable",
                voucher_id=str(self.id),
                failures=[e.field for e in errors],
            )
        return ValidationResult(errors=errors)

    def __repr__(self) -> str:
        return f"Voucher(id={self.id}, type={self.discount_type.value})"
