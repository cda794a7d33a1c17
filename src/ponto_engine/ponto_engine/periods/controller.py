from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_view
from ..container import Container
from .epi_calendar import period_range


def register(app: Flask, container: Container) -> None:
    svc = container.period_service

    @app.route("/api/periods/of", methods=["GET"], endpoint="period_of_date")
    @api_view
    def period_of_date():
        period = svc.get_period(request.args.get("date"))
        return jsonify(svc.to_ui(period_range(period.year, period.week)))

    @app.route("/api/periods/<int:year>", methods=["GET"], endpoint="list_periods")
    @api_view
    def list_periods(year: int):
        return jsonify({"year": year, "periods": [svc.to_ui(r) for r in svc.list_periods(year)]})

    @app.route("/api/periods/<int:year>/<int:week>", methods=["GET"], endpoint="period_range")
    @api_view
    def get_period_range(year: int, week: int):
        return jsonify(svc.to_ui(svc.get_period_range(year, week)))
