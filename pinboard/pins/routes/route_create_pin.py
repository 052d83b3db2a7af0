# pinboard/pins/routes/route_create_pin.py
from __future__ import annotations

from flask import jsonify, current_app
from flask_login import login_required, current_user

from pinboard.errors import ValidationError
from pinboard.extensions import db
from pinboard.models import Pin
from pinboard.pins import bp
from pinboard.pins.routes.serializers_pin_to_dict import _pin_to_dict
from pinboard.uploader.storage import is_data_url, store_data_url
from pinboard.utils.payload import json_body, text_field


# ---------------------------------------------------------
# POST /api/pins: create pin
# ---------------------------------------------------------
@bp.post("")
@bp.post("/")
@login_required
def create_pin():
    data = json_body()
    errors = {}

    title = text_field(data, "title", errors)
    description = text_field(data, "description", errors) or None
    image_url = text_field(data, "imageUrl", errors)
    link = text_field(data, "link", errors) or None
    tags = data.get("tags") or []

    if not title: errors.setdefault("title", "Title is required")
    if not image_url: errors.setdefault("imageUrl", "Image is required")
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        errors["tags"] = "Tags must be a list of strings"
    if errors:
        raise ValidationError(errors=errors)

    # Inline images go to the blob store first; the pin keeps only the URL.
    if is_data_url(image_url):
        image_url = store_data_url(image_url, folder="pins")

    p = Pin(
        title=title,
        description=description,
        image_url=image_url,
        link=link,
        creator_id=current_user.id,
    )
    p.set_tags(tags)
    db.session.add(p)
    db.session.commit()

    current_app.logger.info("pin %s created by user %s", p.id, current_user.id)
    return jsonify(_pin_to_dict(p, current_user.id)), 201
