# pinboard/auth/routes.py
from flask import jsonify, current_app
from flask_login import login_user, logout_user, login_required, current_user
from flask_wtf.csrf import generate_csrf
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from . import bp
from pinboard.errors import Conflict, Unauthorized, ValidationError
from pinboard.extensions import db
from pinboard.models import User
from pinboard.users.routes.serializers_user_to_dict import _settings_to_dict
from pinboard.utils.payload import json_body, text_field

MIN_PASSWORD_LEN = 6


@bp.post("/register")
def register():
    data = json_body()
    errors = {}

    name     = text_field(data, "name", errors)
    email    = text_field(data, "email", errors).lower()
    password = text_field(data, "password", errors, strip=False)

    if not name: errors.setdefault("name", "Name is required")
    if not email: errors.setdefault("email", "Email is required")
    elif "@" not in email: errors["email"] = "Invalid email address"
    if len(password) < MIN_PASSWORD_LEN:
        errors.setdefault("password", f"Password must be at least {MIN_PASSWORD_LEN} characters")
    if errors:
        raise ValidationError(errors=errors)

    if db.session.query(User.id).filter(func.lower(User.email) == email).first():
        raise Conflict("Email already in use")

    u = User(name=name, email=email, username=User.unique_username(email))
    u.set_password(password)
    db.session.add(u)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict("Email already in use")

    current_app.logger.info("registered user %s", u.id)
    return jsonify({"message": "User created successfully", "user": _settings_to_dict(u)}), 201


@bp.post("/login")
def login():
    data = json_body()
    errors = {}
    email = text_field(data, "email", errors).lower()
    password = text_field(data, "password", errors, strip=False)
    if errors:
        raise ValidationError(errors=errors)
    remember = bool(data.get("remember"))

    user = User.query.filter(func.lower(User.email) == email).first() if email else None
    if not user or not user.check_password(password):
        raise Unauthorized("Invalid email or password")

    login_user(user, remember=remember)
    return jsonify(_settings_to_dict(user))


@bp.post("/logout")
@login_required
def logout():
    logout_user()
    return jsonify({"ok": True})


@bp.get("/me")
@login_required
def me():
    return jsonify(_settings_to_dict(current_user))


@bp.get("/csrf")
def csrf_token():
    """Token for the X-CSRFToken header on state-changing requests."""
    return jsonify({"csrfToken": generate_csrf()})
