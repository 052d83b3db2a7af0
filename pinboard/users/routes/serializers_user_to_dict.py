# pinboard/users/routes/serializers_user_to_dict.py
from __future__ import annotations

from typing import Any, Dict

from pinboard.engagement import follower_count, following_count
from pinboard.extensions import db
from pinboard.models import Pin, User
from pinboard.pins.routes.serializers_pin_to_dict import _iso
from pinboard.visibility import Visibility


def _pin_count(user_id: int) -> int:
    return int(db.session.query(Pin).filter_by(creator_id=user_id).count())


def _redacted_profile(u: User) -> Dict[str, Any]:
    """What a non-follower sees of a private profile."""
    return {
        "id": u.id,
        "name": u.name,
        "username": u.username,
        "image": u.image,
        "profileVisibility": u.profile_visibility,
        "isPrivate": True,
        "isFollowing": False,
        "_count": {
            "followers": follower_count(u.id),
            "following": following_count(u.id),
            "pins": 0,
        },
    }


def _full_profile(u: User, vis: Visibility) -> Dict[str, Any]:
    return {
        "id": u.id,
        "name": u.name,
        "username": u.username,
        "email": u.email,
        "image": u.image,
        "bio": u.bio,
        "profileVisibility": u.profile_visibility,
        "activityVisibility": bool(u.activity_visibility),
        "createdAt": _iso(u.created_at),
        "_count": {
            "pins": _pin_count(u.id),
            "followers": follower_count(u.id),
            "following": following_count(u.id),
        },
        "isFollowing": vis.is_following,
        "isOwnProfile": vis.is_own_profile,
        "isPrivate": False,
    }


def _profile_to_dict(u: User, vis: Visibility) -> Dict[str, Any]:
    if not vis.can_view_full:
        return _redacted_profile(u)
    return _full_profile(u, vis)


def _search_hit(u: User, vis: Visibility) -> Dict[str, Any]:
    # bio and pin count follow the same privacy rule as the profile page
    return {
        "id": u.id,
        "name": u.name,
        "username": u.username,
        "image": u.image,
        "bio": u.bio if vis.can_view_full else None,
        "profileVisibility": u.profile_visibility,
        "_count": {
            "pins": _pin_count(u.id) if vis.can_view_full else 0,
            "followers": follower_count(u.id),
        },
        "isFollowing": vis.is_following,
    }


def _settings_to_dict(u: User) -> Dict[str, Any]:
    """The owner's own view, including privacy and notification settings."""
    return {
        "id": u.id,
        "name": u.name,
        "username": u.username,
        "email": u.email,
        "bio": u.bio,
        "image": u.image,
        "createdAt": _iso(u.created_at),
        "profileVisibility": u.profile_visibility,
        "searchVisibility": bool(u.search_visibility),
        "activityVisibility": bool(u.activity_visibility),
        "emailNotifications": bool(u.email_notifications),
        "pushNotifications": bool(u.push_notifications),
        "likeNotifications": bool(u.like_notifications),
        "commentNotifications": bool(u.comment_notifications),
        "followNotifications": bool(u.follow_notifications),
    }
