# pinboard/engagement.py
"""
Like / Save / Follow edges.

Creating an edge twice is an error, not a no-op. The unique constraint on
each edge table is what detects the duplicate: the insert is flushed and an
IntegrityError is turned into ``Conflict``, so two concurrent requests for
the same pair cannot both succeed.
"""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from .errors import Conflict, NotFound
from .extensions import db
from .models import Follow, Like, Pin, Save, User

log = logging.getLogger(__name__)


# ---- counts ----
def like_count(pin_id: int) -> int:
    return int(db.session.query(Like).filter_by(pin_id=pin_id).count())


def save_count(pin_id: int) -> int:
    return int(db.session.query(Save).filter_by(pin_id=pin_id).count())


def follower_count(user_id: int) -> int:
    return int(db.session.query(Follow).filter_by(following_id=user_id).count())


def following_count(user_id: int) -> int:
    return int(db.session.query(Follow).filter_by(follower_id=user_id).count())


# ---- helpers ----
def _require_pin(pin_id: int) -> Pin:
    pin = db.session.get(Pin, pin_id)
    if pin is None:
        raise NotFound("Pin not found")
    return pin


def _insert_edge(edge, conflict_message: str) -> None:
    db.session.add(edge)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        log.info("duplicate edge rejected: %r", edge)
        raise Conflict(conflict_message)


def _delete_edge(query, missing_message: str, missing_status: int = 404) -> None:
    deleted = query.delete(synchronize_session=False)
    if not deleted:
        db.session.rollback()
        raise NotFound(missing_message, status_code=missing_status)
    db.session.commit()


# ---- likes ----
def like_pin(user_id: int, pin_id: int) -> int:
    _require_pin(pin_id)
    _insert_edge(Like(user_id=user_id, pin_id=pin_id), "Pin already liked")
    return like_count(pin_id)


def unlike_pin(user_id: int, pin_id: int) -> int:
    _delete_edge(Like.query.filter_by(user_id=user_id, pin_id=pin_id), "Like not found")
    return like_count(pin_id)


# ---- saves ----
def save_pin(user_id: int, pin_id: int) -> int:
    _require_pin(pin_id)
    _insert_edge(Save(user_id=user_id, pin_id=pin_id), "Pin already saved")
    return save_count(pin_id)


def unsave_pin(user_id: int, pin_id: int) -> int:
    _delete_edge(Save.query.filter_by(user_id=user_id, pin_id=pin_id), "Save not found")
    return save_count(pin_id)


# ---- follows ----
def follow_user(follower_id: int, target_id: int) -> int:
    if db.session.get(User, target_id) is None:
        raise NotFound("Target user not found")
    if follower_id == target_id:
        raise Conflict("Cannot follow yourself")
    _insert_edge(Follow(follower_id=follower_id, following_id=target_id), "Already following this user")
    return follower_count(target_id)


def unfollow_user(follower_id: int, target_id: int) -> int:
    # the follow endpoint reports a missing edge as 400
    _delete_edge(
        Follow.query.filter_by(follower_id=follower_id, following_id=target_id),
        "Not following this user",
        missing_status=400,
    )
    return follower_count(target_id)
