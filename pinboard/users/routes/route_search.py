# pinboard/users/routes/route_search.py
from __future__ import annotations

from flask import jsonify, request, current_app
from sqlalchemy import and_, func, or_

from pinboard.extensions import db
from pinboard.models import User
from pinboard.utils.text import like_pattern
from pinboard.users import bp
from pinboard.users.routes.serializers_user_to_dict import _search_hit
from pinboard.utils.paging import page_window, total_pages
from pinboard.visibility import current_viewer_id, following_ids, resolve

MIN_QUERY_LEN = 2


@bp.get("/search")
def search_users():
    """
    GET /api/users/search?q=term&page=&limit=

    Matches name or username (case-insensitive). Users who turned search
    visibility off never appear.
    """
    page, limit = page_window(request.args, int(current_app.config.get("USERS_SEARCH_LIMIT", 20)))
    q = (request.args.get("q") or "").strip()
    if len(q) < MIN_QUERY_LEN:
        return jsonify({"users": [], "total": 0, "totalPages": 0, "currentPage": page})

    like = like_pattern(q)
    clause = and_(
        User.search_visibility.is_(True),
        or_(
            User.name.ilike(like, escape="\\"),
            User.username.ilike(like, escape="\\"),
        ),
    )

    users = (
        User.query
        .filter(clause)
        .order_by(User.name.asc(), User.id.asc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    total = int(db.session.query(func.count(User.id)).filter(clause).scalar() or 0)

    viewer_id = current_viewer_id()
    followed = following_ids(viewer_id, [u.id for u in users])
    items = [_search_hit(u, resolve(viewer_id, u, following=u.id in followed)) for u in users]

    return jsonify({
        "users": items,
        "total": total,
        "totalPages": total_pages(total, limit),
        "currentPage": page,
    })
