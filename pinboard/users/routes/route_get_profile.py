# pinboard/users/routes/route_get_profile.py
from __future__ import annotations

from flask import jsonify

from pinboard.errors import NotFound
from pinboard.extensions import db
from pinboard.models import User
from pinboard.users import bp
from pinboard.users.routes.serializers_user_to_dict import _profile_to_dict
from pinboard.visibility import current_viewer_id, resolve


@bp.get("/<int:user_id>")
def get_profile(user_id: int):
    u = db.session.get(User, user_id)
    if not u:
        raise NotFound("User not found")
    return jsonify(_profile_to_dict(u, resolve(current_viewer_id(), u)))
