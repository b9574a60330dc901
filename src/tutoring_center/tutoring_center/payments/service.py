from __future__ import annotations

import dataclasses
import logging
from typing import Optional

from ..common.money import compute_totals, quantize
from ..common.tasks import ExternalTaskRunner
from ..common.validators import parse_amount
from ..core.constants import MAX_STORED_AMOUNT, TAX_RATE
from ..core.exceptions import ValidationError
from .model import NewPayment, Payment, PaymentFilter, PaymentReceipt
from .renderer import ReceiptDocument, ReceiptRenderer
from .repository import PaymentRepository

logger = logging.getLogger(__name__)


class PaymentService:
    """Use case: record a fee payment (GST computed here) with its receipt."""

    def __init__(
        self,
        payments: PaymentRepository,
        renderer: ReceiptRenderer,
        *,
        runner: Optional[ExternalTaskRunner] = None,
        profile_url_template: str = "{fcc_id}",
    ):
        self._payments = payments
        self._renderer = renderer
        self._runner = runner or ExternalTaskRunner(max_workers=1, name="receipts")
        self._profile_url_template = profile_url_template

    def record_payment(self, new_payment: NewPayment) -> PaymentReceipt:
        totals = compute_totals(parse_amount(new_payment.amount))
        if totals.grand_total > MAX_STORED_AMOUNT:
            raise ValidationError(f"amount must not exceed {quantize(MAX_STORED_AMOUNT / (1 + TAX_RATE))}")
        rendered: list[int] = []

        def render(payment: Payment) -> str:
            document = ReceiptDocument(
                payment=payment,
                totals=totals,
                profile_url=self._profile_url_template.format(fcc_id=payment.fcc_id or ""),
            )
            rendered.append(payment.payment_id)
            result = self._runner.run(
                f"receipt render #{payment.payment_id}",
                lambda: self._renderer.render(document),
                on_abandon=lambda: self._renderer.discard(payment.payment_id),
            )
            return result.unwrap()

        try:
            recorded = self._payments.create_with_receipt(
                dataclasses.replace(new_payment, amount=totals.base),
                totals,
                render=render,
            )
        except Exception:
            # Payment rolled back: drop its receipt files.
            for payment_id in rendered:
                self._renderer.discard(payment_id)
            raise
        logger.info(
            "Recorded payment #%s for %s: base=%s gst=%s total=%s",
            recorded.payment.payment_id,
            recorded.payment.fcc_id,
            totals.base,
            totals.tax,
            totals.grand_total,
        )
        return recorded

    def search(self, criteria: PaymentFilter) -> list[Payment]:
        return list(self._payments.search(criteria))
