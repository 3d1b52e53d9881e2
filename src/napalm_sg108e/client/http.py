"""Plain-HTTP transport for the TL-SG108E web UI."""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Any

import requests

from napalm_sg108e.client.errors import (
    SG108ERequestError,
    SG108EResponseError,
    SG108ETimeoutError,
)

logger = logging.getLogger(__name__)

try:
    _VERSION: str = importlib.metadata.version("napalm-sg108e")
except importlib.metadata.PackageNotFoundError:
    _VERSION = "0.0.0"

_USER_AGENT: str = f"napalm-sg108e/{_VERSION}"


def _normalise_base_url(url: str) -> str:
    """Return *url* with an ``http://`` scheme and without a trailing slash.

    Raises:
        ValueError: If *url* asks for HTTPS; the web UI is plaintext only.
    """
    if url.startswith("https://"):
        raise ValueError(f"TL-SG108E web UI is served over plain HTTP only: {url!r}")
    if "://" not in url:
        url = f"http://{url}"
    return url.rstrip("/")


class SG108EHTTP:
    """Thin wrapper around :class:`requests.Session` bound to one switch.

    Keeps the login cookie between requests, sends a fixed ``User-Agent`` and
    turns ``requests`` failures into :mod:`.errors` exceptions.  Both verbs
    accept ``raise_for_status=False`` for the login and logout requests, whose
    status the firmware does not set meaningfully.

    Args:
        base_url: Switch base URL, e.g. ``http://192.168.0.1``.
        timeout_s: Default request timeout in seconds (default 30).
    """

    def __init__(self, base_url: str, timeout_s: float = 30.0) -> None:
        self.base_url: str = _normalise_base_url(base_url)
        self.timeout_s: float = timeout_s
        self._session = requests.Session()
        self._session.headers["User-Agent"] = _USER_AGENT

    def get(
        self,
        path: str,
        params: dict[str, str] | None = None,
        timeout_s: float | None = None,
        raise_for_status: bool = True,
    ) -> requests.Response:
        """GET *path*, sending *params* as the query string in insertion order.

        Raises:
            SG108ETimeoutError: If the request timed out.
            SG108ERequestError: On any other transport-level failure.
            SG108EResponseError: On a non-2xx status, unless disabled.
        """
        return self._send("GET", path, timeout_s, raise_for_status, params=params)

    def post_form(
        self,
        path: str,
        data: dict[str, str] | None = None,
        timeout_s: float | None = None,
        raise_for_status: bool = True,
    ) -> requests.Response:
        """POST *data* form-encoded to *path*.

        Raises:
            SG108ETimeoutError: If the request timed out.
            SG108ERequestError: On any other transport-level failure.
            SG108EResponseError: On a non-2xx status, unless disabled.
        """
        return self._send("POST", path, timeout_s, raise_for_status, data=data)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> SG108EHTTP:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _send(
        self,
        method: str,
        path: str,
        timeout_s: float | None,
        raise_for_status: bool,
        **kwargs: Any,
    ) -> requests.Response:
        url = self.base_url + path
        logger.debug("%s %s %s", method, url, kwargs.get("params") or "")
        try:
            resp = self._session.request(
                method, url, timeout=timeout_s or self.timeout_s, **kwargs
            )
        except requests.exceptions.Timeout as exc:
            raise SG108ETimeoutError(url, exc) from exc
        except requests.exceptions.RequestException as exc:
            raise SG108ERequestError(url, exc) from exc
        logger.debug("%s %s -> HTTP %d", method, url, resp.status_code)
        if raise_for_status and not resp.ok:
            raise SG108EResponseError(resp.status_code, resp.url)
        return resp
