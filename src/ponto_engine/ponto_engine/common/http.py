from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, request, session
from werkzeug.exceptions import BadRequest

from ..core.exceptions import (
    AuthorizationError,
    DomainError,
    IncompleteCoverage,
    KeyConflict,
    RecordLocked,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthorizationError, 403),
    (RecordLocked, 409),
    (IncompleteCoverage, 409),
    (KeyConflict, 409),
)


def error_response(exc: DomainError):
    status = next((code for kind, code in _STATUS_BY_ERROR if isinstance(exc, kind)), 400)
    body = {"error": exc.code, "message": str(exc)}
    if isinstance(exc, IncompleteCoverage):
        body["missing_worker_ids"] = list(exc.missing_worker_ids)
        body["missing"] = [{"worker_id": w, "week": wk} for w, wk in exc.missing]
    return jsonify(body), status


def api_view(view):
    """Translate domain errors into JSON responses for the API routes."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return error_response(e)
        except BadRequest as e:
            return jsonify({"error": "bad_request", "message": e.description}), 400
        except Exception:
            logger.exception("unexpected error on %s %s", request.method, request.path)
            return jsonify({"error": "internal_error", "message": "Erro interno do sistema"}), 500

    return wrapper


def caller_scope() -> tuple[str, str | None]:
    """Role and scope id of the caller; the login layer stores them in the session."""
    role = request.args.get("role") or session.get("role") or ""
    scope_id = request.args.get("scope_id") or session.get("user_id")
    return role, (str(scope_id) if scope_id else None)


def week_args() -> list[int]:
    """Parse ``weeks=1,2,3`` (repeated ``weeks`` params also accepted)."""
    out: list[int] = []
    for chunk in request.args.getlist("weeks"):
        for part in str(chunk).split(","):
            part = part.strip()
            if not part:
                continue
            try:
                out.append(int(part))
            except ValueError:
                raise ValidationError(f"Semana inválida: {part!r}")
    return out
