"""Voucher domain constants."""

from enum import Enum


class VoucherDiscountType(str, Enum):
    """How a voucher discounts the order value."""

    VALUE = "VALUE"
    PERCENTAGE = "PERCENTAGE"
