# pinboard/pins/routes/route_like_pin.py
from __future__ import annotations

from flask import jsonify
from flask_login import login_required, current_user

from pinboard import engagement
from pinboard.pins import bp


@bp.post("/<int:pin_id>/like")
@login_required
def like_pin(pin_id: int):
    count = engagement.like_pin(current_user.id, pin_id)
    return jsonify({"message": "Pin liked successfully", "likeCount": count})


@bp.delete("/<int:pin_id>/like")
@login_required
def unlike_pin(pin_id: int):
    count = engagement.unlike_pin(current_user.id, pin_id)
    return jsonify({"message": "Pin unliked successfully", "likeCount": count})
