"""Shared route helpers."""

from forum.config import PostSettings


def page_limit(limit: int | None, settings: PostSettings) -> int:
    """Clamp a requested page size to the configured bounds."""
    if limit is None:
        return settings.page_size
    return max(1, min(limit, settings.max_page_size))
