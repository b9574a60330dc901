from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.http import error_response, json_body, to_json
from ..container import Container
from ..core.exceptions import NotFoundError, PreconditionError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/complete-task", methods=["POST"], endpoint="complete_task")
    def complete_task():
        data = json_body(request)
        try:
            result = container.leaderboard_service.complete_task(
                data.get("fccId"),
                data.get("taskId"),
                data.get("scoreEarned"),
            )
            return jsonify(
                {
                    "message": "Task completed and score updated successfully",
                    "taskLog": to_json(result.task_log),
                    "updatedLeaderboard": to_json(result.leaderboard),
                }
            )
        except ValidationError as e:
            return error_response(str(e), 400)
        except PreconditionError as e:
            return error_response(str(e), 404)
        except Exception:
            logger.exception("Error completing task")
            return error_response("Server error while completing task", 500)

    @app.route("/leaderboard", methods=["GET"], endpoint="leaderboard")
    def leaderboard():
        try:
            rows = container.leaderboard_service.ranked(request.args.get("leaderboardClassFilter"))
            return jsonify({"leaderboard": to_json(rows)})
        except Exception:
            logger.exception("Error fetching leaderboard")
            return error_response("Server error fetching leaderboard data", 500)

    @app.route("/leaderboard/<fcc_id>", methods=["GET"], endpoint="student_leaderboard")
    def student_leaderboard(fcc_id: str):
        try:
            board = container.leaderboard_service.student_board(
                fcc_id, request.args.get("leaderboardClassFilter")
            )
            return jsonify(
                {
                    "leaderboard": to_json(list(board.leaderboard)),
                    "tasks": to_json(list(board.tasks)),
                    "student": to_json(board.student),
                }
            )
        except NotFoundError as e:
            return error_response(str(e), 404)
        except ValidationError as e:
            return error_response(str(e), 400)
        except Exception:
            logger.exception("Error fetching leaderboard data for %s", fcc_id)
            return error_response("Server error fetching leaderboard data", 500)

    @app.route("/get-classes", methods=["GET"], endpoint="get_classes")
    def get_classes():
        try:
            return jsonify({"classes": container.leaderboard_service.list_classes()})
        except Exception:
            logger.exception("Error fetching classes")
            return error_response("Server error fetching classes", 500)
