from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

import qrcode
from PIL import Image, ImageDraw, ImageFont

from ..common.money import Totals
from .model import Payment

logger = logging.getLogger(__name__)

RECEIPTS_URL_PREFIX = "receipts"


def receipt_filename(payment_id: int) -> str:
    return f"receipt_{int(payment_id)}.pdf"


def qr_filename(payment_id: int) -> str:
    return f"qr_{int(payment_id)}.png"


def receipt_relpath(payment_id: int) -> str:
    """Public path of a receipt, as stored in receipts.receipt_path."""
    return f"{RECEIPTS_URL_PREFIX}/{receipt_filename(payment_id)}"


@dataclass(frozen=True)
class ReceiptDocument:
    payment: Payment
    totals: Totals
    profile_url: str


class ReceiptRenderer(Protocol):
    def render(self, document: ReceiptDocument) -> str:
        """Write the receipt artifact and return its public relative path."""

        raise NotImplementedError

    def discard(self, payment_id: int) -> None:
        """Remove whatever `render` wrote for this payment (missing files are fine)."""

        raise NotImplementedError


def _font(size: int):
    try:
        return ImageFont.truetype("DejaVuSans.ttf", size)
    except OSError:
        return ImageFont.load_default()


class PillowReceiptRenderer(ReceiptRenderer):
    """A4 receipt drawn with Pillow, QR code from `qrcode`, saved as a one-page PDF."""

    PAGE_SIZE = (1240, 1754)  # A4 at 150 DPI
    MARGIN = 90
    BRAND = "#1E90FF"
    ACCENT = "#4CAF50"

    def __init__(
        self,
        receipts_dir: str | Path,
        *,
        center_name: str = "FCC The Gurukul",
        center_address: str = "",
        logo_path: Optional[str | Path] = None,
    ):
        self._dir = Path(receipts_dir)
        self._center_name = center_name
        self._center_address = center_address
        self._logo_path = Path(logo_path) if logo_path else None

    def _qr_image(self, url: str, target: Path) -> Image.Image:
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=8,
            border=2,
        )
        qr.add_data(url)
        qr.make(fit=True)
        img = qr.make_image(fill_color="black", back_color="white")
        img.save(str(target))

        buf = io.BytesIO()
        img.save(buf, format="PNG")
        buf.seek(0)
        return Image.open(buf).convert("RGB")

    def render(self, document: ReceiptDocument) -> str:
        payment, totals = document.payment, document.totals
        self._dir.mkdir(parents=True, exist_ok=True)

        page = Image.new("RGB", self.PAGE_SIZE, "white")
        draw = ImageDraw.Draw(page)
        width, height = self.PAGE_SIZE
        draw.rectangle([20, 20, width - 20, height - 20], outline=self.BRAND, width=4)

        if self._logo_path and self._logo_path.exists():
            with Image.open(self._logo_path) as logo:
                logo = logo.convert("RGBA")
                logo.thumbnail((140, 140))
                page.paste(logo, (width - self.MARGIN - logo.width, self.MARGIN), logo)
        elif self._logo_path:
            logger.warning("Logo file not found: %s", self._logo_path)

        y = self.MARGIN
        draw.text((self.MARGIN, y), self._center_name, fill=self.BRAND, font=_font(40))
        y += 55
        if self._center_address:
            draw.text((self.MARGIN, y), self._center_address, fill="black", font=_font(22))
        y += 90

        title_font = _font(48)
        title = "Fee Payment Receipt"
        title_w = draw.textlength(title, font=title_font)
        draw.text(((width - title_w) / 2, y), title, fill=self.ACCENT, font=title_font)
        y += 100

        def section(heading: str, lines: list[str]) -> None:
            nonlocal y
            draw.text((self.MARGIN, y), heading, fill=self.BRAND, font=_font(32))
            y += 50
            for line in lines:
                draw.text((self.MARGIN + 20, y), line, fill="black", font=_font(26))
                y += 40
            y += 20
            draw.line([self.MARGIN, y, width - self.MARGIN, y], fill="#CCCCCC", width=2)
            y += 30

        section(
            "Student Details",
            [
                f"Student Name: {payment.student_name or '-'}",
                f"FCC ID: {payment.fcc_id or '-'}",
            ],
        )
        section(
            "Payment Details",
            [
                f"Receipt No: {payment.payment_id}",
                f"Base Amount: {totals.base:.2f}",
                f"GST (18%): {totals.tax:.2f}",
                f"Grand Total: {totals.grand_total:.2f}",
                f"Payment Method: {payment.payment_method or '-'}",
                f"Payment Status: {payment.payment_status or '-'}",
                f"Monthly Cycle Days: {', '.join(str(d) for d in payment.monthly_cycle_days) or '-'}",
                f"Payment Date: {payment.payment_date:%d/%m/%Y %I:%M %p}",
            ],
        )

        qr = self._qr_image(document.profile_url, self._dir / qr_filename(payment.payment_id))
        page.paste(qr, ((width - qr.width) // 2, y))
        y += qr.height + 40

        for line in (
            "This receipt is system-generated and does not require a signature.",
            f"{self._center_name}. All rights reserved.",
        ):
            line_w = draw.textlength(line, font=_font(20))
            draw.text(((width - line_w) / 2, y), line, fill="gray", font=_font(20))
            y += 32

        page.save(str(self._dir / receipt_filename(payment.payment_id)), "PDF", resolution=150.0)
        return receipt_relpath(payment.payment_id)

    def discard(self, payment_id: int) -> None:
        for name in (receipt_filename(payment_id), qr_filename(payment_id)):
            path = self._dir / name
            if path.exists():
                path.unlink()
                logger.info("Removed receipt artifact %s", path)
