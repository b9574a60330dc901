from __future__ import annotations

import json
from datetime import timedelta
from decimal import Decimal
from typing import Callable, Sequence

from ..common.money import Totals
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import NewPayment, Payment, PaymentFilter, PaymentReceipt, Receipt
from .repository import PaymentRepository

_PAYMENT_COLUMNS = "id, fcc_id, amount, payment_method, payment_status, student_name, monthly_cycle_days, payment_date"


def _parse_cycle_days(value) -> tuple[int, ...]:
    if value is None:
        return ()
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = json.loads(value) if value.strip() else []
    return tuple(int(v) for v in value)


def _to_payment(r: dict) -> Payment:
    return Payment(
        payment_id=int(r["id"]),
        fcc_id=r.get("fcc_id"),
        amount=Decimal(r["amount"]),
        payment_method=r.get("payment_method"),
        payment_status=r.get("payment_status"),
        student_name=r.get("student_name"),
        monthly_cycle_days=_parse_cycle_days(r.get("monthly_cycle_days")),
        payment_date=r["payment_date"],
    )


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_with_receipt(
        self,
        payment: NewPayment,
        totals: Totals,
        *,
        render: Callable[[Payment], str],
    ) -> PaymentReceipt:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payments (fcc_id, amount, payment_method, payment_status, student_name, monthly_cycle_days)
                VALUES (%s, %s, %s, %s, %s, %s)
                """,
                (
                    payment.fcc_id,
                    totals.grand_total,
                    payment.payment_method,
                    payment.payment_status,
                    payment.student_name,
                    json.dumps(list(payment.monthly_cycle_days)),
                ),
            )
            cur.execute(f"SELECT {_PAYMENT_COLUMNS} FROM payments WHERE id=%s", (cur.lastrowid,))
            stored = _to_payment(fetchone(cur))

            receipt_path = render(stored)

            cur.execute(
                """
                INSERT INTO receipts
                    (payment_id, student_name, fcc_id, base_amount, gst, grand_total,
                     payment_method, payment_status, monthly_cycle_days, payment_date, receipt_path)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                """,
                (
                    stored.payment_id,
                    stored.student_name,
                    stored.fcc_id,
                    totals.base,
                    totals.tax,
                    totals.grand_total,
                    stored.payment_method,
                    stored.payment_status,
                    ", ".join(str(d) for d in stored.monthly_cycle_days),
                    stored.payment_date,
                    receipt_path,
                ),
            )
            receipt = Receipt(
                receipt_id=int(cur.lastrowid),
                payment_id=stored.payment_id,
                base_amount=totals.base,
                gst=totals.tax,
                grand_total=totals.grand_total,
                receipt_path=receipt_path,
            )
            return PaymentReceipt(payment=stored, receipt=receipt, totals=totals)

    def search(self, criteria: PaymentFilter) -> Sequence[Payment]:
        clauses: list[str] = []
        params: list[object] = []

        if criteria.fcc_id:
            clauses.append("fcc_id=%s")
            params.append(criteria.fcc_id)
        if criteria.payment_status:
            clauses.append("payment_status=%s")
            params.append(criteria.payment_status)
        if criteria.payment_method:
            clauses.append("payment_method=%s")
            params.append(criteria.payment_method)
        if criteria.start_date:
            clauses.append("payment_date >= %s")
            params.append(criteria.start_date)
        if criteria.end_date:
            clauses.append("payment_date < %s")
            params.append(criteria.end_date + timedelta(days=1))
        if criteria.monthly_cycle_days:
            clauses.append("JSON_OVERLAPS(monthly_cycle_days, CAST(%s AS JSON))")
            params.append(json.dumps(list(criteria.monthly_cycle_days)))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_PAYMENT_COLUMNS} FROM payments {where} ORDER BY payment_date DESC, id DESC",
                tuple(params),
            )
            return [_to_payment(r) for r in fetchall(cur)]
