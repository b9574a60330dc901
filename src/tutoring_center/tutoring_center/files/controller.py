from __future__ import annotations

import logging

from flask import Flask, jsonify, request
from werkzeug.utils import secure_filename

from ..common.datetime_utils import parse_iso_date
from ..common.http import error_response, to_json
from ..container import Container
from ..core.exceptions import NotFoundError, ValidationError
from .model import FileQuery

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _date_arg(name: str):
        value = (request.args.get(name) or "").strip()
        if not value:
            return None
        try:
            return parse_iso_date(value[:10])
        except ValueError:
            raise ValidationError(f"{name} must be YYYY-MM-DD")

    @app.route("/upload", methods=["POST"], endpoint="upload_file")
    def upload_file():
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            return error_response("No file uploaded", 400, key="message")
        try:
            stored = container.file_service.upload(
                filename=upload.filename,
                filetype=upload.mimetype,
                data=upload.read(),
                description=request.form.get("description"),
            )
            return jsonify({"message": "File uploaded successfully", "file": to_json(stored)}), 200
        except ValidationError as e:
            return error_response(str(e), 400, key="message")
        except Exception:
            logger.exception("Error uploading file")
            return error_response("Error uploading file", 500, key="message")

    @app.route("/files", methods=["GET"], endpoint="list_files")
    def list_files():
        try:
            query = FileQuery(
                start_date=_date_arg("startDate"),
                end_date=_date_arg("endDate"),
                search=(request.args.get("search") or "").strip() or None,
            )
            return jsonify(to_json(container.file_service.search(query)))
        except ValidationError as e:
            return error_response(str(e), 400, key="message")
        except Exception:
            logger.exception("Error fetching files")
            return error_response("Error fetching files", 500, key="message")

    @app.route("/files/download/<int:file_id>", methods=["GET"], endpoint="download_file")
    def download_file(file_id: int):
        try:
            content = container.file_service.download(file_id)
        except NotFoundError as e:
            return error_response(str(e), 404, key="message")
        except Exception:
            logger.exception("Error downloading file %s", file_id)
            return error_response("Error downloading file", 500, key="message")

        filename = secure_filename(content.meta.filename) or f"file_{file_id}"
        return app.response_class(
            content.data,
            mimetype=content.meta.filetype or "application/octet-stream",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )
