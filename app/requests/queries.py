"""Search, filter and sort helpers over request lists."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Sequence

from app.permissions import CapabilitySet

from .models import AuditEntry, Request
from .state import RequestStatus


class SortOrder(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"


def matches_search(request: Request, term: str) -> bool:
    """Case-insensitive match against title, description and id."""

    needle = (term or "").strip().casefold()
    if not needle:
        return True
    return any(needle in value.casefold() for value in (request.title, request.description, request.id))


def is_visible_to(request: Request, viewer_id: str, permissions: CapabilitySet) -> bool:
    return permissions.can_view_all_requests or request.involves(viewer_id)


def sort_requests(requests: Iterable[Request], order: SortOrder = SortOrder.NEWEST) -> list[Request]:
    return sorted(requests, key=lambda request: request.created_at, reverse=SortOrder(order) == SortOrder.NEWEST)


def filter_requests(
    requests: Iterable[Request],
    *,
    search: str = "",
    status: RequestStatus | None = None,
    viewer_id: str | None = None,
    permissions: CapabilitySet | None = None,
    order: SortOrder = SortOrder.NEWEST,
) -> list[Request]:
    """Apply the request list screen's search, status and visibility filters.

    Visibility is only checked when both ``viewer_id`` and ``permissions``
    are given.
    """

    selected = []
    for request in requests:
        if not matches_search(request, search):
            continue
        if status is not None and request.status != status:
            continue
        if viewer_id is not None and permissions is not None and not is_visible_to(request, viewer_id, permissions):
            continue
        selected.append(request)
    return sort_requests(selected, order)


def audit_feed(entries: Iterable[AuditEntry]) -> list[AuditEntry]:
    """Return audit entries newest first."""

    return sorted(entries, key=lambda entry: entry.timestamp, reverse=True)


def recent_activity(requests: Sequence[Request], limit: int = 5) -> list[AuditEntry]:
    """First audit entry of each request, newest first."""

    firsts = [request.audit_log[0] for request in requests if request.audit_log]
    return audit_feed(firsts)[:limit]


def categories(requests: Iterable[Request]) -> list[str]:
    """Distinct categories in first-seen order."""

    return list(dict.fromkeys(request.category for request in requests))
