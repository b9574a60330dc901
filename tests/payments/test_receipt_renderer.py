from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from src.tutoring_center.tutoring_center.common.money import compute_totals
from src.tutoring_center.tutoring_center.payments.model import Payment
from src.tutoring_center.tutoring_center.payments.renderer import (
    PillowReceiptRenderer,
    ReceiptDocument,
    qr_filename,
    receipt_filename,
)


def test_renderer_writes_pdf_and_qr_at_deterministic_paths(tmp_path):
    payment = Payment(
        payment_id=42,
        fcc_id="4949200024",
        amount=Decimal("1180.00"),
        payment_method="UPI",
        payment_status="Paid",
        student_name="Asha",
        monthly_cycle_days=(1, 15),
        payment_date=datetime(2025, 3, 5, 9, 7),
    )
    renderer = PillowReceiptRenderer(tmp_path, center_name="FCC The Gurukul", logo_path=tmp_path / "missing.png")

    path = renderer.render(
        ReceiptDocument(payment=payment, totals=compute_totals(Decimal("1000")), profile_url="https://fcc.test/p/4949200024")
    )

    assert path == "receipts/receipt_42.pdf"
    pdf = tmp_path / receipt_filename(42)
    assert pdf.read_bytes().startswith(b"%PDF")
    assert (tmp_path / qr_filename(42)).exists()
