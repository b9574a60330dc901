from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify, request, send_from_directory

from ..common.datetime_utils import parse_iso_date
from ..common.http import error_response, json_body, to_json
from ..common.validators import parse_int_list
from ..container import Container
from ..core.exceptions import ValidationError
from .model import NewPayment, PaymentFilter

logger = logging.getLogger(__name__)


def _text(value) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip() or None


def _date_arg(name: str):
    value = _text(request.args.get(name))
    if value is None:
        return None
    try:
        return parse_iso_date(value[:10])
    except ValueError:
        raise ValidationError(f"{name} must be YYYY-MM-DD")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payments", methods=["POST"], endpoint="create_payment")
    def create_payment():
        data = json_body(request)
        try:
            recorded = container.payment_service.record_payment(
                NewPayment(
                    amount=data.get("amount"),
                    fcc_id=_text(data.get("fcc_id")),
                    payment_method=_text(data.get("payment_method")),
                    payment_status=_text(data.get("payment_status")),
                    student_name=_text(data.get("student_name")),
                    monthly_cycle_days=tuple(parse_int_list(data.get("monthly_cycle_days"), "monthly_cycle_days")),
                )
            )
        except ValidationError as e:
            return error_response(str(e), 400)
        except Exception as e:
            logger.exception("Error inserting payment")
            return error_response(str(e), 500)

        return jsonify(
            {
                "message": "Payment added successfully",
                "receipt": recorded.receipt.receipt_path,
                "payment_id": recorded.payment.payment_id,
                "base_amount": to_json(recorded.totals.base),
                "gst": to_json(recorded.totals.tax),
                "grand_total": to_json(recorded.totals.grand_total),
            }
        ), 201

    @app.route("/api/payments", methods=["GET"], endpoint="list_payments")
    def list_payments():
        try:
            criteria = PaymentFilter(
                fcc_id=_text(request.args.get("fcc_id")),
                payment_status=_text(request.args.get("payment_status")),
                payment_method=_text(request.args.get("payment_method")),
                start_date=_date_arg("startDate"),
                end_date=_date_arg("endDate"),
                monthly_cycle_days=tuple(
                    parse_int_list(request.args.get("monthly_cycle_days"), "monthly_cycle_days")
                ),
            )
            return jsonify(to_json(container.payment_service.search(criteria)))
        except ValidationError as e:
            return error_response(str(e), 400)
        except Exception as e:
            logger.exception("Error fetching payments")
            return error_response(str(e), 500)

    @app.route("/receipts/<path:filename>", methods=["GET"], endpoint="receipt_file")
    def receipt_file(filename: str):
        return send_from_directory(container.receipts_dir, filename)
