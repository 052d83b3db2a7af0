# pinboard/account/routes/profile.py
from flask import jsonify
from flask_login import login_required, current_user
from sqlalchemy.exc import IntegrityError

from pinboard.account import bp
from pinboard.errors import Conflict, ValidationError
from pinboard.extensions import db
from pinboard.models import User
from pinboard.users.routes.serializers_user_to_dict import _settings_to_dict
from pinboard.utils.payload import json_body, text_field


@bp.get("/profile")
@login_required
def get_own_profile():
    return jsonify(_settings_to_dict(current_user))


@bp.put("/profile")
@login_required
def update_profile():
    data = json_body()
    errors = {}

    name     = text_field(data, "name", errors) or None
    username = text_field(data, "username", errors) or None
    bio      = text_field(data, "bio", errors) or None
    image    = text_field(data, "image", errors) or None

    if username and any(ch.isspace() for ch in username):
        errors["username"] = "Username cannot contain spaces"
    if errors:
        raise ValidationError(errors=errors)

    if username:
        taken = db.session.query(User.id).filter(
            User.username == username, User.id != current_user.id
        ).first()
        if taken:
            raise Conflict("Username already taken")

    if "name" in data:
        current_user.name = name
    current_user.username = username
    current_user.bio = bio
    current_user.image = image

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict("Username already taken")

    return jsonify({
        "id": current_user.id,
        "name": current_user.name,
        "username": current_user.username,
        "email": current_user.email,
        "bio": current_user.bio,
        "image": current_user.image,
    })
