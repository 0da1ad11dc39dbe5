from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import coerce_date
from ..common.web import admin_required, current_role, member_required
from ..container import Container
from ..core.enums import MemberStatus, ServerLevel
from ..core.exceptions import ValidationError


def _optional_date(value, field_name: str):
    if not value:
        return None
    try:
        return coerce_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} is invalid")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/members", methods=["GET"], endpoint="api_members")
    @admin_required
    def api_members():
        status_s = request.args.get("status")
        try:
            status = MemberStatus(status_s.upper()) if status_s else None
        except ValueError:
            raise ValidationError("Member status is invalid")

        members = container.member_service.list_members(status=status)
        return jsonify(
            {
                "members": [
                    {
                        "id": m.id,
                        "surname": m.surname,
                        "given_name": m.given_name,
                        "member_status": m.membership_status.value,
                    }
                    for m in members
                ]
            }
        )

    @app.route("/api/members", methods=["POST"], endpoint="api_members_create")
    @admin_required
    def api_members_create():
        data = request.get_json(silent=True) or {}
        try:
            level = ServerLevel((data.get("server_level") or ServerLevel.JUNIOR.value).upper())
        except ValueError:
            raise ValidationError("Server level is invalid")

        member_id = container.member_service.create_member(
            current_role=current_role(),
            surname=data.get("surname", ""),
            given_name=data.get("given_name", ""),
            email=data.get("email"),
            password=data.get("password"),
            server_level=level,
            date_joined=_optional_date(data.get("date_joined"), "Date joined"),
            birthdate=_optional_date(data.get("birthdate"), "Birthdate"),
        )
        return jsonify({"message": "Member created", "id": member_id}), 201

    @app.route("/api/members/<int:member_id>", methods=["GET"], endpoint="api_member_detail")
    @admin_required
    def api_member_detail(member_id: int):
        profile = container.member_service.get_profile(member_id)
        return jsonify({"member": profile.to_dict()})

    @app.route("/api/members/<int:member_id>", methods=["DELETE"], endpoint="api_member_delete")
    @admin_required
    def api_member_delete(member_id: int):
        member = container.member_service.delete_member(current_role=current_role(), member_id=member_id)
        return jsonify(
            {
                "message": "Member deleted successfully",
                "deleted_member": {"id": member.id, "surname": member.surname, "given_name": member.given_name},
            }
        )

    @app.route("/api/members/<int:member_id>/status", methods=["PATCH"], endpoint="api_member_status")
    @admin_required
    def api_member_status(member_id: int):
        data = request.get_json(silent=True) or {}
        try:
            status = MemberStatus(str(data.get("status") or "").upper())
        except ValueError:
            raise ValidationError("Member status is invalid")

        container.member_service.set_status(current_role=current_role(), member_id=member_id, status=status)
        return jsonify({"message": "Member status updated", "id": member_id, "member_status": status.value})

    @app.route("/api/member/profile", endpoint="api_member_profile")
    @member_required
    def api_member_profile():
        profile = container.member_service.get_profile(int(session["identity_id"]))
        return jsonify({"member": profile.to_dict()})
