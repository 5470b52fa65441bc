"""RFC 8288 Link headers for paginated responses."""

from typing import Any, Dict, Optional
from urllib.parse import urlencode

from fastapi import Request, Response

from ..models.pages import OffsetPage, CursorPage


def create_link_header(
    base_url: str,
    params: Dict[str, Any],
    next_params: Optional[Dict[str, Any]] = None,
    prev_params: Optional[Dict[str, Any]] = None
) -> Optional[str]:
    """Create Link header for pagination as per RFC 8288.

    Args:
        base_url: Base URL for the resource
        params: Current query parameters
        next_params: Parameters overriding ``params`` for the next page
        prev_params: Parameters overriding ``params`` for the previous page

    Returns:
        Link header value or None if no links
    """
    links = []

    if next_params:
        links.append(f'<{base_url}?{urlencode({**params, **next_params})}>; rel="next"')

    if prev_params:
        links.append(f'<{base_url}?{urlencode({**params, **prev_params})}>; rel="prev"')

    return ", ".join(links) if links else None


def offset_link_header(base_url: str, params: Dict[str, Any], page: OffsetPage) -> Optional[str]:
    """Link header for an offset page."""
    return create_link_header(
        base_url,
        params,
        next_params=page.next.model_dump() if page.next else None,
        prev_params=page.previous.model_dump() if page.previous else None
    )


def cursor_link_header(base_url: str, params: Dict[str, Any], page: CursorPage) -> Optional[str]:
    """Link header for a cursor page; only a next link exists."""
    if not page.has_more:
        return None
    return create_link_header(base_url, params, next_params={"cursor": page.next_cursor})


def _base_url(request: Request) -> str:
    return str(request.url).split('?')[0]


def set_offset_link_header(request: Request, response: Response, page: OffsetPage) -> None:
    """Attach the Link header for an offset page, if it has neighbours."""
    link_header = offset_link_header(_base_url(request), dict(request.query_params), page)
    if link_header:
        response.headers["Link"] = link_header


def set_cursor_link_header(request: Request, response: Response, page: CursorPage) -> None:
    """Attach the Link header for a cursor page while more items follow."""
    link_header = cursor_link_header(_base_url(request), dict(request.query_params), page)
    if link_header:
        response.headers["Link"] = link_header
