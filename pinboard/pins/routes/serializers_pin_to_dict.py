# pinboard/pins/routes/serializers_pin_to_dict.py
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Set
from datetime import datetime, timezone

from sqlalchemy import func

from pinboard.extensions import db
from pinboard.models import Like, Pin, Save, User


def _iso(dt: datetime | None) -> str | None:
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _creator_dict(u: "User | None") -> Dict[str, Any] | None:
    if u is None:
        return None
    return {
        "id": u.id,
        "name": u.name,
        "username": u.username,
        "image": u.image,
    }


def _counts_by_pin(model, pin_ids: List[int]) -> Dict[int, int]:
    if not pin_ids:
        return {}
    rows = (
        db.session.query(model.pin_id, func.count(model.id))
        .filter(model.pin_id.in_(pin_ids))
        .group_by(model.pin_id)
        .all()
    )
    return {pid: int(n) for pid, n in rows}


def _viewer_edges(model, viewer_id: Optional[int], pin_ids: List[int]) -> Set[int]:
    if viewer_id is None or not pin_ids:
        return set()
    rows = (
        db.session.query(model.pin_id)
        .filter(model.user_id == viewer_id, model.pin_id.in_(pin_ids))
        .all()
    )
    return {r[0] for r in rows}


def _pins_to_dicts(pins: Iterable[Pin], viewer_id: Optional[int]) -> List[Dict[str, Any]]:
    """
    Serialize pins for a viewer. Raw like/save rows never leave the server:
    clients get the two counts plus isLiked / isSaved for the viewer
    (always False for anonymous viewers).
    """
    pins = list(pins)
    ids = [p.id for p in pins]
    likes = _counts_by_pin(Like, ids)
    saves = _counts_by_pin(Save, ids)
    liked = _viewer_edges(Like, viewer_id, ids)
    saved = _viewer_edges(Save, viewer_id, ids)

    return [
        {
            "id": p.id,
            "title": p.title,
            "description": p.description,
            "imageUrl": p.image_url,
            "link": p.link,
            "tags": p.tags,
            "creatorId": p.creator_id,
            "createdAt": _iso(p.created_at),
            "creator": _creator_dict(p.creator),
            "_count": {
                "likes": likes.get(p.id, 0),
                "saves": saves.get(p.id, 0),
            },
            "isLiked": p.id in liked,
            "isSaved": p.id in saved,
        }
        for p in pins
    ]


def _pin_to_dict(p: Pin, viewer_id: Optional[int]) -> Dict[str, Any]:
    return _pins_to_dicts([p], viewer_id)[0]
