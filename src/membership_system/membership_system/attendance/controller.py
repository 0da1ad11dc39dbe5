from __future__ import annotations

from decimal import Decimal

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.validators import parse_amount, require_month_index, require_year
from ..common.web import admin_required
from ..container import Container
from ..core.enums import AttendanceMark
from ..core.exceptions import ValidationError
from .model import MonthlyAttendance


def _parse_mark(value) -> AttendanceMark:
    try:
        return AttendanceMark(str(value or AttendanceMark.UNMARKED.value).upper())
    except ValueError:
        raise ValidationError("Attendance mark is invalid")


def _period(source: dict) -> tuple[int, int]:
    now = now_local()
    month = source.get("month")
    year = source.get("year")
    return (
        require_month_index(now.month - 1 if month in (None, "") else month),
        require_year(now.year if year in (None, "") else year),
    )


def _entry_from_json(item: dict, *, month: int, year: int) -> MonthlyAttendance:
    try:
        member_id = int(item["member_id"])
    except (KeyError, TypeError, ValueError):
        raise ValidationError("Member ID is invalid")

    due_amount = item.get("due_amount")
    return MonthlyAttendance(
        member_id=member_id,
        month=month,
        year=year,
        mark=_parse_mark(item.get("mark")),
        excuse_letter=(item.get("excuse_letter") or "").strip(),
        due_checked=bool(item.get("due_checked")),
        due_amount=Decimal("0") if due_amount in (None, "") else parse_amount(due_amount, "Due amount"),
    )


def register(app: Flask, container: Container) -> None:
    svc = container.attendance_service

    @app.route("/api/attendance/monthly", methods=["GET"], endpoint="api_attendance_month")
    @admin_required
    def api_attendance_month():
        month, year = _period(request.args)
        sheet = svc.get_month_sheet(month=month, year=year)
        return jsonify(
            {
                "month": month,
                "year": year,
                "editable": svc.is_editable(month=month, year=year),
                "meeting": svc.meeting_schedule(month=month, year=year).to_dict(),
                "attendance": [r.to_dict() for r in sheet],
                "totals": svc.totals(sheet).to_dict(),
            }
        )

    @app.route("/api/attendance/monthly", methods=["POST"], endpoint="api_attendance_save")
    @admin_required
    def api_attendance_save():
        data = request.get_json(silent=True) or {}
        month, year = _period(data)
        items = data.get("attendance")
        if not isinstance(items, list):
            raise ValidationError("Attendance list is required")

        entries = [_entry_from_json(item or {}, month=month, year=year) for item in items]
        saved = svc.save_month(month=month, year=year, entries=entries)
        return jsonify({"message": "Attendance saved successfully", "saved": saved})

    @app.route("/api/attendance/monthly/<int:member_id>/mark", methods=["POST"], endpoint="api_attendance_mark")
    @admin_required
    def api_attendance_mark(member_id: int):
        data = request.get_json(silent=True) or {}
        month, year = _period(data)
        record = svc.toggle_mark(member_id=member_id, month=month, year=year, mark=_parse_mark(data.get("mark")))
        return jsonify({"attendance": record.to_dict()})

    @app.route("/api/attendance/monthly/<int:member_id>/excuse", methods=["POST"], endpoint="api_attendance_excuse")
    @admin_required
    def api_attendance_excuse(member_id: int):
        data = request.get_json(silent=True) or {}
        month, year = _period(data)
        record = svc.save_excuse(member_id=member_id, month=month, year=year, text=data.get("excuse_letter", ""))
        return jsonify({"attendance": record.to_dict()})

    @app.route("/api/attendance/monthly/<int:member_id>/due", methods=["POST"], endpoint="api_attendance_due")
    @admin_required
    def api_attendance_due(member_id: int):
        data = request.get_json(silent=True) or {}
        month, year = _period(data)
        if "amount" in data:
            record = svc.set_due_amount(member_id=member_id, month=month, year=year, amount=data.get("amount"))
        else:
            record = svc.toggle_due(member_id=member_id, month=month, year=year)
        return jsonify({"attendance": record.to_dict()})
