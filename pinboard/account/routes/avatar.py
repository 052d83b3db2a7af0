# pinboard/account/routes/avatar.py
from flask import jsonify, request
from flask_login import login_required

from pinboard.account import bp
from pinboard.errors import ValidationError
from pinboard.uploader.storage import store_data_url, store_upload
from pinboard.utils.payload import json_body, text_field


@bp.post("/upload-avatar")
@login_required
def upload_avatar():
    """
    Store a new avatar image and return its URL. The profile itself is
    updated separately through PUT /api/user/profile.
    Accepts JSON {"image": "data:image/..."} or a multipart 'file'.
    """
    f = request.files.get("file") or request.files.get("avatar")
    if f:
        return jsonify({"imageUrl": store_upload(f, folder="avatars")})

    data = json_body()
    errors = {}
    image = text_field(data, "image", errors)
    if errors:
        raise ValidationError(errors=errors)
    if not image:
        raise ValidationError("Image is required")
    return jsonify({"imageUrl": store_data_url(image, folder="avatars")})
