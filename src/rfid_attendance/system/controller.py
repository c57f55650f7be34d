from __future__ import annotations

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException, InternalServerError, NotFound

from ..common.http import error_response, json_errors
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "OK", "message": "RFID Attendance API is running"})

    @app.route("/api/init-db", methods=["POST"], endpoint="init_db")
    @json_errors("Failed to initialize database")
    def init_db():
        tables = container.schema.initialize()
        app.logger.info("init-db: %d tables ready", len(tables))
        return jsonify({"success": True, "message": "Database initialized successfully"})

    @app.errorhandler(NotFound)
    def not_found(_e):
        return error_response("Endpoint not found", 404)

    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        return error_response(e.description or e.name, e.code or 500)

    @app.errorhandler(InternalServerError)
    def internal_error(e: InternalServerError):
        original = getattr(e, "original_exception", None)
        if original is not None:
            app.logger.error("Unhandled error", exc_info=original)
        return error_response("Internal server error", 500)
