from __future__ import annotations

from flask import Flask, current_app, jsonify, request, session

from ..common.datetime_utils import now_local
from ..common.formatting import format_currency
from ..common.validators import require_year
from ..common.web import admin_required, current_role, member_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.dues_service

    def _year() -> int:
        year = request.args.get("year")
        return require_year(year) if year else now_local().year

    def _symbol() -> str:
        return current_app.config["CURRENCY_SYMBOL"]

    @app.route("/api/financial/dues", methods=["GET"], endpoint="api_dues_report")
    @admin_required
    def api_dues_report():
        year = _year()
        report = svc.build_year_report(year=year)
        return jsonify(
            {
                "year": year,
                "monthly_due_amount": format_currency(svc.monthly_due_amount, _symbol()),
                "results": [r.to_dict(_symbol()) for r in report.records],
                "excluded_events": report.excluded_events,
            }
        )

    @app.route("/api/financial/dues", methods=["POST"], endpoint="api_dues_record_payment")
    @admin_required
    def api_dues_record_payment():
        data = request.get_json(silent=True) or {}
        payment_id = svc.record_payment(
            current_role=current_role(),
            member_id=data.get("member_id"),
            amount=data.get("amount"),
            paid_on=data.get("date") or now_local().date(),
        )
        return jsonify({"message": "Payment recorded", "id": payment_id}), 201

    @app.route("/api/member/dues", endpoint="api_member_dues")
    @member_required
    def api_member_dues():
        record = svc.get_member_dues(member_id=int(session["identity_id"]), year=_year())
        return jsonify({"dues": record.to_dict(_symbol())})
