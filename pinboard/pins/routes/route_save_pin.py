# pinboard/pins/routes/route_save_pin.py
from __future__ import annotations

from flask import jsonify
from flask_login import login_required, current_user

from pinboard import engagement
from pinboard.pins import bp


@bp.post("/<int:pin_id>/save")
@login_required
def save_pin(pin_id: int):
    count = engagement.save_pin(current_user.id, pin_id)
    return jsonify({"message": "Pin saved successfully", "saveCount": count})


@bp.delete("/<int:pin_id>/save")
@login_required
def unsave_pin(pin_id: int):
    count = engagement.unsave_pin(current_user.id, pin_id)
    return jsonify({"message": "Pin unsaved successfully", "saveCount": count})
