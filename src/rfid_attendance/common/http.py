from __future__ import annotations

from functools import wraps
from typing import Any, Dict

from flask import current_app, jsonify, request

from ..core.exceptions import DomainError, StorageError, ValidationError


def error_response(message: str, status_code: int):
    return jsonify({"success": False, "error": message}), status_code


def json_errors(failure_message: str):
    """Translate service errors raised by a view into the JSON error shape.

    Domain errors keep their own message and status. Storage failures are
    logged with full detail and reported with ``failure_message`` only.
    Anything else propagates to the app-wide 500 handler.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except DomainError as e:
                return error_response(str(e), e.status_code)
            except StorageError:
                current_app.logger.exception("%s (%s %s)", failure_message, request.method, request.path)
                return error_response(failure_message, StorageError.status_code)

        return wrapper

    return decorator


def json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
