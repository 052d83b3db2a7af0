# pinboard/pins/filters.py
"""
Feed query builder.

Request parameters become a list of small predicate objects which are
ANDed together into one SQLAlchemy clause. The same clause drives both the
paginated page query and the total count.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from sqlalchemy import and_, false, func, or_, true

from pinboard.extensions import db
from pinboard.models import Pin, PinTag, Save, User
from pinboard.utils.paging import total_pages
from pinboard.utils.text import like_pattern
from pinboard.visibility import resolve


@dataclass(frozen=True)
class TextMatch:
    """Case-insensitive substring of title OR description."""
    text: str

    def clause(self):
        like = like_pattern(self.text)
        return or_(
            Pin.title.ilike(like, escape="\\"),
            Pin.description.ilike(like, escape="\\"),
        )


@dataclass(frozen=True)
class TagMatch:
    """Exact tag membership."""
    tag: str

    def clause(self):
        return Pin.tag_rows.any(PinTag.name == self.tag)


@dataclass(frozen=True)
class OwnerMatch:
    user_id: int

    def clause(self):
        return Pin.creator_id == self.user_id


@dataclass(frozen=True)
class SavedByMatch:
    """Pins the user has saved (favorites), not pins they created."""
    user_id: int

    def clause(self):
        return Pin.saves.any(Save.user_id == self.user_id)


@dataclass(frozen=True)
class SentinelEmpty:
    """Matches nothing: unknown owner or a profile the viewer may not see."""

    def clause(self):
        return false()


Condition = Union[TextMatch, TagMatch, OwnerMatch, SavedByMatch, SentinelEmpty]


@dataclass
class FeedParams:
    text_query: Optional[str] = None
    tag: Optional[str] = None
    owner_ref: Optional[str] = None  # user id, or email when it contains '@'
    favorites_only: bool = False
    viewer_id: Optional[int] = None


@dataclass
class PinFilter:
    conditions: List[Condition] = field(default_factory=list)

    @property
    def matches_nothing(self) -> bool:
        return any(isinstance(c, SentinelEmpty) for c in self.conditions)

    def clause(self):
        if not self.conditions:
            return true()
        return and_(*[c.clause() for c in self.conditions])


@dataclass
class PinPage:
    items: List[Pin]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.limit)

    def pagination(self) -> dict:
        return {
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "totalPages": self.total_pages,
        }


def resolve_owner(owner_ref: str) -> Optional[User]:
    """Look up an owner by email (contains '@') or by numeric id."""
    ref = (owner_ref or "").strip()
    if not ref:
        return None
    if "@" in ref:
        return User.query.filter(func.lower(User.email) == ref.lower()).first()
    try:
        return db.session.get(User, int(ref))
    except (TypeError, ValueError):
        return None


def _owner_condition(params: FeedParams) -> Condition:
    owner = resolve_owner(params.owner_ref)
    if owner is None:
        return SentinelEmpty()

    if not resolve(params.viewer_id, owner).can_view_full:
        return SentinelEmpty()

    if params.favorites_only:
        return SavedByMatch(owner.id)
    return OwnerMatch(owner.id)


def build_filter(params: FeedParams) -> PinFilter:
    conditions: List[Condition] = []

    if params.text_query:
        conditions.append(TextMatch(params.text_query))

    if params.tag:
        conditions.append(TagMatch(params.tag))

    if params.owner_ref:
        conditions.append(_owner_condition(params))

    return PinFilter(conditions)


def paginate_pins(pin_filter: PinFilter, page: int, limit: int) -> PinPage:
    """Newest first; equal timestamps fall back to id so pages never overlap."""
    if pin_filter.matches_nothing:
        return PinPage(items=[], total=0, page=page, limit=limit)

    clause = pin_filter.clause()
    items = (
        Pin.query
        .filter(clause)
        .order_by(Pin.created_at.desc(), Pin.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    total = db.session.query(func.count(Pin.id)).filter(clause).scalar() or 0
    return PinPage(items=items, total=int(total), page=page, limit=limit)
