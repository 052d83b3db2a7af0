# pinboard/pins/routes/route_list_pins.py
from __future__ import annotations

from flask import request, jsonify, current_app

from pinboard.pins import bp
from pinboard.pins.filters import FeedParams, build_filter, paginate_pins
from pinboard.pins.routes.serializers_pin_to_dict import _pins_to_dicts
from pinboard.utils.paging import page_window, parse_flag
from pinboard.visibility import current_viewer_id


@bp.get("")
@bp.get("/")
def list_pins():
    """
    GET /api/pins?page=&limit=&q=&tag=&userId=&favorites=true

    ``userId`` takes a user id or an email. An unknown owner, or a private
    owner the viewer may not see, yields an empty page rather than a 404.
    """
    viewer_id = current_viewer_id()
    page, limit = page_window(request.args, int(current_app.config.get("PINS_PAGE_LIMIT", 50)))

    params = FeedParams(
        text_query=(request.args.get("q") or "").strip() or None,
        tag=(request.args.get("tag") or "").strip() or None,
        owner_ref=(request.args.get("userId") or "").strip() or None,
        favorites_only=parse_flag(request.args.get("favorites")),
        viewer_id=viewer_id,
    )

    result = paginate_pins(build_filter(params), page, limit)
    return jsonify({
        "pins": _pins_to_dicts(result.items, viewer_id),
        "pagination": result.pagination(),
    })
