from __future__ import annotations

from flask import Flask, current_app, jsonify, request

from ..common.datetime_utils import now_local
from ..common.formatting import format_currency
from ..common.web import admin_required, current_role, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.expense_service

    def _period(source) -> tuple:
        now = now_local()
        month = source.get("month")
        year = source.get("year")
        return (now.month - 1 if month in (None, "") else month, now.year if year in (None, "") else year)

    def _listing():
        month, year = _period(request.args)
        symbol = current_app.config["CURRENCY_SYMBOL"]
        expenses = svc.list_for_month(month=month, year=year)
        return jsonify(
            {
                "expenses": [e.to_dict(symbol) for e in expenses],
                "total": format_currency(svc.total(expenses), symbol),
            }
        )

    @app.route("/api/expenses", methods=["GET"], endpoint="api_expenses")
    @admin_required
    def api_expenses():
        return _listing()

    @app.route("/api/member/expenses", endpoint="api_member_expenses")
    @login_required
    def api_member_expenses():
        return _listing()

    @app.route("/api/expenses", methods=["POST"], endpoint="api_expenses_add")
    @admin_required
    def api_expenses_add():
        data = request.get_json(silent=True) or {}
        month, year = _period(data)
        expense_id = svc.add_expense(
            current_role=current_role(),
            expended_on=data.get("expended_on"),
            amount=data.get("amount"),
            expense_date=data.get("date"),
            spent_by=data.get("spent_by"),
            month=month,
            year=year,
        )
        return jsonify({"message": "Expense added successfully!", "id": expense_id}), 201

    @app.route("/api/expenses/<int:expense_id>", methods=["DELETE"], endpoint="api_expenses_delete")
    @admin_required
    def api_expenses_delete(expense_id: int):
        svc.delete_expense(current_role=current_role(), expense_id=expense_id)
        return jsonify({"message": "Expense deleted"})
