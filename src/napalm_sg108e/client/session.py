"""Authenticated HTTP session for TL-SG108E switches."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from types import TracebackType

from napalm_sg108e.client.errors import SG108EError, SG108ESessionError, SG108ETimeoutError
from napalm_sg108e.client.http import SG108EHTTP
from napalm_sg108e.vendor.sg108e.endpoints import LOGIN, LOGOUT, SYSTEM_INFO

logger = logging.getLogger(__name__)

# Connect bound for the login request made by diagnose().
DIAGNOSE_TIMEOUT_S: float = 1.0


@dataclass(frozen=True)
class SG108ECredentials:
    """Immutable credential pair for the switch web UI.

    Args:
        username: Login username (factory default ``admin``).
        password: Login password (factory default ``admin``).
    """

    username: str
    password: str


class SessionState(str, Enum):
    """Lifecycle of a :class:`SG108ESession`."""

    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    CLOSED = "closed"


class ConnectionState(str, Enum):
    """Outcome of :func:`diagnose`."""

    NOT_ACCESSIBLE = "not accessible"
    NOT_AUTHORIZED = "not authorized"
    AUTHORIZED = "authorized"


class SG108ESession:
    """One login/logout bracket against the switch web UI.

    The switch has a single web UI session slot and no client-visible session
    timeout, so a session is opened for one top-level operation and always
    logged out afterwards.  Use it as a context manager::

        with SG108ESession(base_url, creds) as session:
            html = session.get(SYSTEM_INFO)

    State moves ``UNAUTHENTICATED -> AUTHENTICATED -> CLOSED``; a closed
    session cannot be reopened.

    Args:
        base_url: Switch base URL, e.g. ``http://192.168.0.1``.
        credentials: Username/password pair.
        timeout_s: Request timeout in seconds (default 30).
    """

    def __init__(
        self,
        base_url: str,
        credentials: SG108ECredentials,
        timeout_s: float = 30.0,
    ) -> None:
        self._http: SG108EHTTP = SG108EHTTP(base_url=base_url, timeout_s=timeout_s)
        self._credentials: SG108ECredentials = credentials
        self._state: SessionState = SessionState.UNAUTHENTICATED

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def login(self) -> None:
        """Post the credentials to ``LOGIN``.

        The firmware answers bad credentials like good ones, so success only
        means the request went through; a later read proves authorization.

        Raises:
            SG108ESessionError: If the session was already closed.
            SG108ERequestError: On a transport-level failure.
        """
        if self._state is SessionState.CLOSED:
            raise SG108ESessionError("Session already closed; open a new one")
        resp = self._http.post_form(
            LOGIN,
            data=_login_form(self._credentials),
            raise_for_status=False,
        )
        logger.info("Logged in to %s (HTTP %d)", self._http.base_url, resp.status_code)
        self._state = SessionState.AUTHENTICATED

    def logout(self) -> None:
        """Log out and release the switch's session slot.

        The session is marked closed and the HTTP connection pool released
        whether or not the request succeeds.  There is no retry.

        Raises:
            SG108ERequestError: On a transport-level failure.
        """
        try:
            if self._state is SessionState.AUTHENTICATED:
                self._http.get(LOGOUT, raise_for_status=False)
                logger.info("Logged out from %s", self._http.base_url)
        finally:
            self._state = SessionState.CLOSED
            self._http.close()

    # ------------------------------------------------------------------
    # Public request methods
    # ------------------------------------------------------------------

    def get(
        self,
        path: str,
        params: dict[str, str] | None = None,
    ) -> str:
        """Perform an authenticated GET and return the response text.

        Used both for reading ``*Rpm.htm`` pages and for the ``*.cgi``
        configuration handlers, which take their arguments as query params.

        Raises:
            SG108ESessionError: If the session is not logged in.
            SG108ERequestError: On a transport-level failure.
            SG108EResponseError: On a non-2xx HTTP status code.
        """
        if self._state is not SessionState.AUTHENTICATED:
            raise SG108ESessionError(
                f"GET {path} requires an authenticated session (state={self._state.value})"
            )
        return self._http.get(path, params=params).text

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def logged_in(self) -> bool:
        """True if the session is currently authenticated."""
        return self._state is SessionState.AUTHENTICATED

    @property
    def base_url(self) -> str:
        return self._http.base_url

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> SG108ESession:
        try:
            self.login()
        except BaseException:
            self._state = SessionState.CLOSED
            self._http.close()
            raise
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.logout()
            return
        # The body's exception takes precedence over a logout failure.
        try:
            self.logout()
        except SG108EError:
            logger.warning("Logout after failed operation also failed", exc_info=True)


def diagnose(
    base_url: str,
    credentials: SG108ECredentials,
    timeout_s: float = DIAGNOSE_TIMEOUT_S,
    request_timeout_s: float = 30.0,
) -> ConnectionState:
    """Check connectivity and credentials without raising on a dead switch.

    The login POST uses the short *timeout_s*; timing out there yields
    ``NOT_ACCESSIBLE``.  A completed login yields at least
    ``NOT_AUTHORIZED``, and an HTTP 200 from the system info page yields
    ``AUTHORIZED``.  Logout is attempted afterwards and its failure ignored.

    Args:
        base_url: Switch base URL.
        credentials: Username/password pair.
        timeout_s: Timeout for the login request in seconds.
        request_timeout_s: Timeout for the system info and logout requests.

    Returns:
        The :class:`ConnectionState` reached.

    Raises:
        SG108ERequestError: On any transport failure other than the login
            timeout.
    """
    with SG108EHTTP(base_url, timeout_s=request_timeout_s) as http:
        try:
            http.post_form(
                LOGIN,
                data=_login_form(credentials),
                timeout_s=timeout_s,
                raise_for_status=False,
            )
        except SG108ETimeoutError:
            logger.info("Login to %s timed out after %.1fs", http.base_url, timeout_s)
            return ConnectionState.NOT_ACCESSIBLE

        state = ConnectionState.NOT_AUTHORIZED
        try:
            resp = http.get(SYSTEM_INFO, raise_for_status=False)
            if resp.status_code == 200:
                state = ConnectionState.AUTHORIZED
        finally:
            try:
                http.get(LOGOUT, raise_for_status=False)
            except SG108EError:
                logger.debug("Logout after diagnosis failed (ignored)", exc_info=True)

    logger.info("Diagnosis of %s: %s", base_url, state.value)
    return state


def _login_form(credentials: SG108ECredentials) -> dict[str, str]:
    return {
        "username": credentials.username,
        "password": credentials.password,
        "logon": "Login",
    }
