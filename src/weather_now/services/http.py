"""
Shared HTTP client.

Provides a pre-configured ``requests.Session`` with a default timeout and a
single attempt per request: failures surface immediately and the user decides
whether to try again.  All datasource modules should use this instead of bare
``requests.get``.

Usage::

    from weather_now.services.http import session

    resp = session.get("https://api.example.com/v1/data")
    resp.raise_for_status()
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

#: One attempt, no backoff. Status codes are left to ``resp.raise_for_status()``.
DEFAULT_RETRY = Retry(
    total=0,
    connect=0,
    read=0,
    redirect=5,
    raise_on_redirect=True,
    raise_on_status=False,
)

DEFAULT_TIMEOUT = 30  # seconds

USER_AGENT = "weather-now/0.1"


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a ``requests.Session`` with the retry adapter mounted.

    Args:
        retry: Custom retry strategy (defaults to ``DEFAULT_RETRY``).
        timeout: Default timeout applied to every request.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT

    # Inject a default timeout so callers don't need to pass ``timeout=`` every time.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = timeout
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


#: Module-level session; import and use directly.
session: requests.Session = create_session()
