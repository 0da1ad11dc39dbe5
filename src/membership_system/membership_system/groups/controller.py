from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import member_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/member/groups", endpoint="api_member_groups")
    @member_required
    def api_member_groups():
        groups = container.group_service.groups_for_member(int(session["identity_id"]))
        return jsonify(groups.to_dict())
