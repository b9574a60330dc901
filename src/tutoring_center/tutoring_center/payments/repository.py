from __future__ import annotations

from typing import Callable, Protocol, Sequence

from ..common.money import Totals
from .model import NewPayment, Payment, PaymentFilter, PaymentReceipt


class PaymentRepository(Protocol):
    def create_with_receipt(
        self,
        payment: NewPayment,
        totals: Totals,
        *,
        render: Callable[[Payment], str],
    ) -> PaymentReceipt:
        """Insert the payment, render its receipt, insert the receipt row.

        All in one transaction: if `render` raises, the payment is rolled back.
        """

        raise NotImplementedError

    def search(self, criteria: PaymentFilter) -> Sequence[Payment]:
        raise NotImplementedError
