from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from ..common.money import Totals


@dataclass(frozen=True)
class Payment:
    """Domain entity: a fee payment. `amount` is the grand total (base + GST)."""

    payment_id: int
    fcc_id: Optional[str]
    amount: Decimal
    payment_method: Optional[str]
    payment_status: Optional[str]
    student_name: Optional[str]
    monthly_cycle_days: tuple[int, ...]
    payment_date: datetime


@dataclass(frozen=True)
class NewPayment:
    """Payment submission as received; `amount` is the untrusted base amount."""

    amount: Any
    fcc_id: Optional[str] = None
    payment_method: Optional[str] = None
    payment_status: Optional[str] = None
    student_name: Optional[str] = None
    monthly_cycle_days: tuple[int, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Receipt:
    receipt_id: int
    payment_id: int
    base_amount: Decimal
    gst: Decimal
    grand_total: Decimal
    receipt_path: str


@dataclass(frozen=True)
class PaymentReceipt:
    payment: Payment
    receipt: Receipt
    totals: Totals


@dataclass(frozen=True)
class PaymentFilter:
    fcc_id: Optional[str] = None
    payment_status: Optional[str] = None
    payment_method: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    monthly_cycle_days: tuple[int, ...] = field(default_factory=tuple)
