# pinboard/account/routes/settings.py
from flask import jsonify
from flask_login import login_required, current_user

from pinboard.account import bp
from pinboard.errors import ValidationError
from pinboard.extensions import db
from pinboard.models import PROFILE_VISIBILITIES
from pinboard.utils.payload import json_body

# JSON key -> User column; absent keys leave the column untouched
PRIVACY_FLAGS = {
    "searchVisibility": "search_visibility",
    "activityVisibility": "activity_visibility",
}

NOTIFICATION_FLAGS = {
    "emailNotifications": "email_notifications",
    "pushNotifications": "push_notifications",
    "likeNotifications": "like_notifications",
    "commentNotifications": "comment_notifications",
    "followNotifications": "follow_notifications",
}


def _apply_flags(data: dict, mapping: dict) -> None:
    errors = {k: "Must be a boolean" for k in mapping if k in data and not isinstance(data[k], bool)}
    if errors:
        raise ValidationError(errors=errors)
    for key, column in mapping.items():
        if key in data:
            setattr(current_user, column, data[key])


@bp.put("/privacy")
@login_required
def update_privacy():
    data = json_body()

    visibility = data.get("profileVisibility")
    if visibility and (not isinstance(visibility, str) or visibility not in PROFILE_VISIBILITIES):
        raise ValidationError("Invalid profile visibility value")

    _apply_flags(data, PRIVACY_FLAGS)
    if visibility:
        current_user.profile_visibility = visibility
    db.session.commit()

    return jsonify({
        "profileVisibility": current_user.profile_visibility,
        "searchVisibility": bool(current_user.search_visibility),
        "activityVisibility": bool(current_user.activity_visibility),
    })


@bp.put("/notifications")
@login_required
def update_notifications():
    data = json_body()
    _apply_flags(data, NOTIFICATION_FLAGS)
    db.session.commit()
    return jsonify({key: bool(getattr(current_user, col)) for key, col in NOTIFICATION_FLAGS.items()})
