# pinboard/utils/paging.py
from __future__ import annotations

import math
from typing import Mapping, Tuple

from flask import current_app

# SQL offsets are signed 64-bit integers
MAX_OFFSET = 2 ** 63 - 1


def _parse_int(value: str | None, default: int) -> int:
    try:
        return int(value) if value is not None else default
    except Exception:
        return default


def page_window(args: Mapping, default_limit: int) -> Tuple[int, int]:
    """
    (page, limit) from query args; 1 <= limit <= MAX_PAGE_LIMIT and page is
    kept where (page - 1) * limit still fits an SQL offset. Pages past the
    data are simply empty.
    """
    max_limit = int(current_app.config.get("MAX_PAGE_LIMIT", 100))
    limit = max(1, min(_parse_int(args.get("limit"), default_limit), max_limit))
    page = min(max(1, _parse_int(args.get("page"), 1)), MAX_OFFSET // max_limit)
    return page, limit


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


def parse_flag(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}
