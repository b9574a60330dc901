from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from flask import Flask, jsonify, request

from ..common.http import error_response, json_body, to_json
from ..common.validators import parse_amount, parse_flag
from ..container import Container
from ..core.constants import MAX_STORED_AMOUNT
from ..core.exceptions import NotFoundError, ValidationError
from .model import NewStudent, StudentPatch

logger = logging.getLogger(__name__)


def _optional_text(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    return str(value).strip() or None


def _optional_amount(data: dict, key: str) -> Optional[Decimal]:
    value = data.get(key)
    if value is None or value == "":
        return None
    return parse_amount(value, key, maximum=MAX_STORED_AMOUNT)


def _optional_datetime(data: dict, key: str) -> Optional[datetime]:
    value = _optional_text(data, key)
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).replace(tzinfo=None)
    except ValueError:
        raise ValidationError(f"{key} must be an ISO date/time")


def register(app: Flask, container: Container) -> None:
    @app.route("/add-student", methods=["POST"], endpoint="add_student")
    def add_student():
        data = json_body(request)
        try:
            student = container.student_service.admit(
                NewStudent(
                    fcc_id=_optional_text(data, "fcc_id") or "",
                    name=_optional_text(data, "name") or "",
                    father=_optional_text(data, "father"),
                    mother=_optional_text(data, "mother"),
                    schooling_class=_optional_text(data, "schooling_class"),
                    mobile_number=_optional_text(data, "mobile_number"),
                    address=_optional_text(data, "address"),
                    paid=parse_flag(data.get("paid")),
                    tutionfee_paid=_optional_amount(data, "tutionfee_paid"),
                    fcc_class=_optional_text(data, "fcc_class"),
                    skills=_optional_text(data, "skills"),
                    admission_date=_optional_datetime(data, "admission_date"),
                )
            )
            return jsonify(to_json(student)), 201
        except ValidationError as e:
            return error_response(str(e), 400)
        except Exception as e:
            logger.exception("Error adding student")
            return error_response(str(e), 500)

    @app.route("/get-students", methods=["GET"], endpoint="get_students")
    def get_students():
        try:
            return jsonify(to_json(container.student_service.list_students()))
        except Exception:
            logger.exception("Error fetching students")
            return error_response("Failed to fetch students", 500)

    @app.route("/update-student/<fcc_id>", methods=["PUT"], endpoint="update_student")
    def update_student(fcc_id: str):
        data = json_body(request)
        try:
            patch = StudentPatch(
                skills=_optional_text(data, "skills"),
                tutionfee_paid=_optional_amount(data, "tutionfee_paid"),
                payment_status=_optional_text(data, "payment_status"),
            )
            student = container.student_service.update_student(fcc_id, patch)
            return jsonify(
                {"message": "Student and payment data updated successfully!", "student": to_json(student)}
            ), 200
        except ValidationError as e:
            return error_response(str(e), 400)
        except NotFoundError as e:
            return error_response(str(e), 404)
        except Exception as e:
            logger.exception("Error updating student %s", fcc_id)
            return error_response(str(e), 500)

    @app.route("/get-student-profile/<fcc_id>", methods=["GET"], endpoint="get_student_profile")
    def get_student_profile(fcc_id: str):
        try:
            return jsonify(to_json(container.student_service.get_profile(fcc_id)))
        except NotFoundError as e:
            return error_response(str(e), 404)
        except ValidationError as e:
            return error_response(str(e), 400)
        except Exception:
            logger.exception("Error fetching student %s", fcc_id)
            return error_response("Failed to fetch student data", 500)

    @app.route("/get-student-skills/<fcc_id>", methods=["GET"], endpoint="get_student_skills")
    def get_student_skills(fcc_id: str):
        try:
            return jsonify(to_json(container.student_service.get_skills(fcc_id)))
        except NotFoundError as e:
            return error_response(str(e), 404)
        except ValidationError as e:
            return error_response(str(e), 400)
        except Exception:
            logger.exception("Error fetching skills for %s", fcc_id)
            return error_response("Failed to fetch student skills", 500)

    @app.route("/get-tuition-fee-details/<fcc_id>", methods=["GET"], endpoint="get_tuition_fee_details")
    def get_tuition_fee_details(fcc_id: str):
        try:
            payload = to_json(container.student_service.get_tuition_fee_details(fcc_id))
            payload["class"] = payload.pop("fee_class")
            return jsonify(payload)
        except NotFoundError as e:
            return error_response(str(e), 404)
        except ValidationError as e:
            return error_response(str(e), 400)
        except Exception:
            logger.exception("Error fetching fee details for %s", fcc_id)
            return error_response("Internal Server Error", 500)
