from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from src.tutoring_center.tutoring_center.common.money import compute_totals
from src.tutoring_center.tutoring_center.payments.model import NewPayment
from src.tutoring_center.tutoring_center.payments.mysql_payment_repository import MySQLPaymentRepository

PAYMENT_ROW = {
    "id": 1,
    "fcc_id": "4949200024",
    "amount": Decimal("1180.00"),
    "payment_method": "UPI",
    "payment_status": "Paid",
    "student_name": "Asha",
    "monthly_cycle_days": "[1, 15]",
    "payment_date": datetime(2025, 3, 5, 9, 7),
}


def test_payment_and_receipt_share_one_transaction(scripted_db):
    factory = scripted_db([PAYMENT_ROW])
    repo = MySQLPaymentRepository(factory)

    recorded = repo.create_with_receipt(
        NewPayment(amount=Decimal("1000"), fcc_id="4949200024", monthly_cycle_days=(1, 15)),
        compute_totals(Decimal("1000")),
        render=lambda p: f"receipts/receipt_{p.payment_id}.pdf",
    )

    insert_payment, _, insert_receipt = factory.cursor.executed
    assert insert_payment[1][1] == Decimal("1180.00")
    assert insert_receipt[1][3:6] == (Decimal("1000.00"), Decimal("180.00"), Decimal("1180.00"))
    assert recorded.payment.monthly_cycle_days == (1, 15)
    assert recorded.receipt.receipt_path == "receipts/receipt_1.pdf"
    assert factory.conn.committed


def test_render_failure_rolls_back_payment(scripted_db):
    factory = scripted_db([PAYMENT_ROW])
    repo = MySQLPaymentRepository(factory)

    def broken(_payment):
        raise OSError("disk full")

    with pytest.raises(OSError):
        repo.create_with_receipt(NewPayment(amount=Decimal("1000")), compute_totals(Decimal("1000")), render=broken)

    assert factory.conn.rolled_back
    assert not factory.conn.committed
    assert not any(sql.startswith("INSERT INTO receipts") for sql, _ in factory.cursor.executed)
