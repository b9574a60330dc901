from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.http import error_response, json_body, to_json
from ..container import Container
from ..core.exceptions import NotFoundError, ValidationError
from .service import parse_answers

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/get-quiz-by-topic/<skill_topic>", methods=["GET"], endpoint="quiz_by_topic")
    def quiz_by_topic(skill_topic: str):
        try:
            questions = container.quiz_service.questions_for_topic(skill_topic)
        except ValidationError as e:
            return error_response(str(e), 400)
        except Exception:
            logger.exception("Error fetching quiz questions for %s", skill_topic)
            return error_response("Failed to fetch quiz questions", 500)

        payload = []
        for q in questions:
            item = to_json(q)
            item.pop("correct_answer", None)
            payload.append(item)
        return jsonify(payload)

    @app.route("/start-quiz-session", methods=["POST"], endpoint="start_quiz_session")
    def start_quiz_session():
        data = json_body(request)
        try:
            session = container.quiz_service.start_session(
                data.get("fccId"), data.get("skillTopic"), data.get("totalQuestions")
            )
            return jsonify({"sessionId": session.session_id, "startTime": to_json(session.start_time)})
        except ValidationError as e:
            return error_response(str(e), 400)
        except Exception:
            logger.exception("Error starting quiz session")
            return error_response("Failed to start quiz session", 500)

    @app.route("/submit-quiz-attempt", methods=["POST"], endpoint="submit_quiz_attempt")
    def submit_quiz_attempt():
        data = json_body(request)
        try:
            session = container.quiz_service.submit_attempt(
                data.get("sessionId"),
                data.get("fccId"),
                parse_answers(data.get("quizAnswers")),
            )
            return jsonify(
                {
                    "score": session.score,
                    "endTime": to_json(session.end_time),
                    "duration": session.duration_seconds,
                    "message": "Quiz submitted!",
                }
            )
        except ValidationError as e:
            return error_response(str(e), 400)
        except NotFoundError as e:
            return error_response(str(e), 404)
        except Exception:
            logger.exception("Error submitting quiz attempt")
            return error_response("Failed to submit quiz", 500)
