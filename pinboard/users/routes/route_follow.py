# pinboard/users/routes/route_follow.py
from __future__ import annotations

from flask import jsonify
from flask_login import login_required, current_user

from pinboard import engagement
from pinboard.users import bp


@bp.post("/<int:user_id>/follow")
@login_required
def follow(user_id: int):
    count = engagement.follow_user(current_user.id, user_id)
    return jsonify({"success": True, "isFollowing": True, "followerCount": count})


@bp.delete("/<int:user_id>/follow")
@login_required
def unfollow(user_id: int):
    count = engagement.unfollow_user(current_user.id, user_id)
    return jsonify({"success": True, "isFollowing": False, "followerCount": count})
