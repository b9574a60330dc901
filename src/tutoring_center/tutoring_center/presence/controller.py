from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.http import error_response, json_body, to_json
from ..common.validators import parse_flag
from ..container import Container
from ..core.enums import SignalOutcome
from ..core.exceptions import NotFoundError, StaleUpdateError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/update-student", methods=["POST"], endpoint="presence_signal")
    def presence_signal():
        data = json_body(request)
        try:
            result = container.presence_service.record_signal(
                data.get("fcc_id") or "",
                ctc=parse_flag(data.get("ctc")),
                ctg=parse_flag(data.get("ctg")),
                task_completed=parse_flag(data.get("task_completed")),
                force_update=parse_flag(data.get("forceUpdate")),
            )
        except ValidationError as e:
            return error_response(str(e), 400)
        except StaleUpdateError as e:
            return error_response(str(e), 400, key="message")
        except Exception:
            logger.exception("Error updating or creating student and logging attendance")
            return error_response("Internal server error.", 500)

        verb = "inserted" if result.outcome is SignalOutcome.INSERTED else "updated"
        return jsonify(
            {
                "message": f"Student and attendance log {verb} successfully.",
                "result": result.outcome.value,
                "ctcUpdated": True,
            }
        ), 200

    @app.route("/get-ctc-ctg/<fcc_id>", methods=["GET"], endpoint="get_ctc_ctg")
    def get_ctc_ctg(fcc_id: str):
        try:
            view = container.presence_service.get_presence(fcc_id)
            return jsonify({"student": to_json(view.state), "logs": to_json(list(view.logs))})
        except NotFoundError as e:
            return error_response(str(e), 404)
        except ValidationError as e:
            return error_response(str(e), 400)
        except Exception:
            logger.exception("Error fetching CTC/CTG data and logs for %s", fcc_id)
            return error_response("Failed to fetch CTC/CTG data and logs", 500)
