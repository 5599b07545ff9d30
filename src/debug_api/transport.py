"""Hand-off of built requests to the requests HTTP client.

Nothing here performs network I/O; callers send the prepared request with
their own ``requests.Session``.
"""

import requests

from debug_api.schema.base import Request


def prepare(request: Request, scheme: str = "http") -> requests.PreparedRequest:
    """Convert a Request into a ``requests.PreparedRequest``."""
    return requests.Request(method=request.method.value, url=request.url(scheme)).prepare()
