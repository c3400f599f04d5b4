"""Web helper functions."""

import uuid

from fastapi import Request


def get_request_id(request: Request) -> str:
    """Return the request id, taken from X-Request-ID or generated once per request."""
    request_id = getattr(request.state, "request_id", None)
    if request_id is None:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id
    return request_id
