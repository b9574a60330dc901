from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.http import error_response, json_body
from ..container import Container
from ..core.exceptions import ExternalServiceError, ExternalTimeoutError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/chat", methods=["POST"], endpoint="chat")
    def chat():
        data = json_body(request)
        try:
            text = container.chat_service.reply(data.get("message"), data.get("model"))
            return jsonify({"response": text})
        except ValidationError as e:
            return error_response(str(e), 400)
        except ExternalTimeoutError:
            return error_response("AI model did not respond in time", 504)
        except ExternalServiceError:
            return error_response("Failed to get response from AI model", 500)
        except Exception:
            logger.exception("Unexpected chat failure")
            return error_response("Failed to get response from AI model", 500)
