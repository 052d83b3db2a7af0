# pinboard/visibility.py
"""
Who may see a user's profile details and pins.

A public profile is visible to everyone, anonymous viewers included. A
private profile is visible only to its owner and to the owner's followers;
everybody else gets the redacted projection (no bio, no pin listing, pin
count forced to 0).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Set

from flask_login import current_user

from .extensions import db
from .models import Follow, User


@dataclass(frozen=True)
class Visibility:
    can_view_full: bool
    is_following: bool
    is_own_profile: bool


def current_viewer_id() -> Optional[int]:
    """Id of the logged-in viewer, or None for anonymous requests."""
    if getattr(current_user, "is_authenticated", False):
        return current_user.id
    return None


def is_following(viewer_id: Optional[int], target_id: int) -> bool:
    if viewer_id is None:
        return False
    return db.session.query(Follow.id).filter_by(
        follower_id=viewer_id, following_id=target_id
    ).first() is not None


def following_ids(viewer_id: Optional[int], target_ids: Iterable[int]) -> Set[int]:
    """Subset of ``target_ids`` the viewer follows (one query)."""
    ids = list(target_ids)
    if viewer_id is None or not ids:
        return set()
    rows = db.session.query(Follow.following_id).filter(
        Follow.follower_id == viewer_id,
        Follow.following_id.in_(ids),
    ).all()
    return {r[0] for r in rows}


def resolve(viewer_id: Optional[int], target: User, *, following: Optional[bool] = None) -> Visibility:
    """
    Decide what ``viewer_id`` may see of ``target``.

    ``following`` may be passed when the caller already knows the follow
    state (batch lookups); otherwise it is queried.
    """
    own = viewer_id is not None and viewer_id == target.id
    if own:
        return Visibility(can_view_full=True, is_following=False, is_own_profile=True)

    if following is None:
        following = is_following(viewer_id, target.id)

    can_view_full = (not target.is_private) or following
    return Visibility(can_view_full=can_view_full, is_following=following, is_own_profile=False)
