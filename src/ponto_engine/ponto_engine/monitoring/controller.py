from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_view, caller_scope, week_args
from ..common.validators import require_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.monitoring_service

    @app.route("/api/monitoring/rollup", methods=["GET"], endpoint="monitoring_rollup")
    @api_view
    def monitoring_rollup():
        role, scope_id = caller_scope()
        result = svc.get_rollup(
            role,
            scope_id,
            require_int(request.args.get("year"), "ano"),
            week_args(),
            mode=request.args.get("filter", "all"),
        )
        return jsonify(svc.to_ui(result))
