from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_view, caller_scope
from ..common.validators import require_id_list
from ..container import Container
from ..core.exceptions import ValidationError
from ..hierarchy.service import scope_workers
from .day_rules import day_input_from_mapping


def register(app: Flask, container: Container) -> None:
    svc = container.record_service

    def _json_body() -> dict:
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            raise ValidationError("Corpo JSON inválido")
        return body

    @app.route("/api/records/<worker_id>/<int:year>/<int:week>", methods=["GET"], endpoint="get_record")
    @api_view
    def get_record(worker_id: str, year: int, week: int):
        record = svc.get_record(worker_id, year, week)
        if record is None:
            return jsonify({"worker_id": worker_id, "year": year, "week": week, "record": None})
        return jsonify({"worker_id": worker_id, "year": year, "week": week, "record": svc.to_ui(record)})

    @app.route("/api/records/<worker_id>/<int:year>/<int:week>", methods=["PUT"], endpoint="write_record")
    @api_view
    def write_record(worker_id: str, year: int, week: int):
        body = _json_body()
        days = body.get("days")
        if not isinstance(days, list):
            raise ValidationError("Informe a lista 'days'")
        saturday_active = body.get("saturday_active", False)
        if not isinstance(saturday_active, bool):
            raise ValidationError("'saturday_active' deve ser true ou false")
        record = svc.write_record(
            worker_id,
            year,
            week,
            [day_input_from_mapping(d) for d in days if isinstance(d, dict)],
            notes=str(body.get("notes") or ""),
            saturday_active=saturday_active,
        )
        return jsonify(svc.to_ui(record))

    @app.route("/api/records/<worker_id>/<int:year>/<int:week>", methods=["DELETE"], endpoint="delete_record")
    @api_view
    def delete_record(worker_id: str, year: int, week: int):
        role, _ = caller_scope()
        deleted = svc.delete_record(worker_id, year, week, role=role)
        return jsonify({"worker_id": worker_id, "year": year, "week": week, "deleted": deleted})

    @app.route("/api/periods/<int:year>/submit", methods=["POST"], endpoint="submit_period")
    @api_view
    def submit_period(year: int):
        body = _json_body()
        raw_ids = body.get("worker_ids")
        if not isinstance(raw_ids, list):
            raise ValidationError("Informe a lista 'worker_ids'")
        weeks = body.get("weeks")
        if weeks is None and body.get("week") is not None:
            weeks = [body.get("week")]
        if not isinstance(weeks, list):
            raise ValidationError("Informe a lista 'weeks' (ou 'week')")
        worker_ids = require_id_list(raw_ids, "worker_ids")
        svc.submit_period(worker_ids, year, weeks)
        return jsonify({"year": year, "weeks": sorted({int(w) for w in weeks}), "submitted": len(worker_ids)})

    @app.route("/api/periods/<int:year>/<int:week>/status", methods=["GET"], endpoint="week_status")
    @api_view
    def week_status(year: int, week: int):
        role, scope_id = caller_scope()
        ids = request.args.get("worker_ids")
        if ids:
            worker_ids = [i for i in ids.split(",") if i.strip()]
        else:
            worker_ids = [w.worker_id for w in scope_workers(role, scope_id, container.workers_repo.list_workers())]
        st = svc.week_status(worker_ids, year, week)
        return jsonify(
            {
                "year": st.year,
                "week": st.week,
                "total_workers": st.total_workers,
                "records_count": st.records_count,
                "submitted_count": st.submitted_count,
                "complete": st.is_complete,
                "submitted": st.is_submitted,
            }
        )
