from __future__ import annotations

from app.storage import InMemoryStore

from .errors import RequestNotFoundError
from .models import Request


class RequestRepository(InMemoryStore[Request]):
    """In-memory collection of service requests.

    ``list`` returns requests in insertion order; ``put`` replaces the stored
    request with the same id or appends a new one.
    """

    not_found_error = RequestNotFoundError
    kind = "Request"
