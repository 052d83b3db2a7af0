# pinboard/pins/routes/route_get_pin.py
from __future__ import annotations

from flask import jsonify

from pinboard.errors import NotFound
from pinboard.extensions import db
from pinboard.models import Pin
from pinboard.pins import bp
from pinboard.pins.routes.serializers_pin_to_dict import _pin_to_dict
from pinboard.visibility import current_viewer_id


@bp.get("/<int:pin_id>")
def get_pin(pin_id: int):
    p = db.session.get(Pin, pin_id)
    if not p:
        raise NotFound("Pin not found")
    return jsonify(_pin_to_dict(p, current_viewer_id()))
