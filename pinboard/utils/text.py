# pinboard/utils/text.py


def like_pattern(text: str) -> str:
    """Substring pattern for ``ilike(..., escape="\\")`` with wildcards escaped."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
