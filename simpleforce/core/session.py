"""
simpleforce.core.session - Salesforce SOAP login session
========================================================

Session establishment against the Salesforce partner SOAP API with:
- Username + password + security token login
- A single attempt per call (no retries, no redirects)
- Typed errors for transport, status and parse failures
- Atomic, lock-protected session state
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Union
from urllib.parse import urlsplit
import logging
import threading
import time

import requests
from requests import Response, Session
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from simpleforce.core.errors import (
    ParseError,
    ProtocolStatusError,
    SalesforceError,
    TransportError,
)
from simpleforce.soap.envelope import (
    LOGIN_HEADERS,
    build_login_envelope,
    login_url,
    parse_fault,
    parse_login_response,
)


DEFAULT_API_VERSION = "43.0"
DEFAULT_CLIENT_ID = "simpleforce"
DEFAULT_URL = "https://login.salesforce.com"


@dataclass(frozen=True)
class ClientConfig:
    """
    Connection configuration for the Salesforce login endpoint.

    Parameters
    ----------
    base_url : str
        Login host, e.g. "https://login.salesforce.com" or
        "https://test.salesforce.com" for sandboxes
    client_id : str
        Client name sent in the ``CallOptions`` header. Any placeholder
        is accepted by the SOAP API; empty falls back to the default.
    api_version : str
        Partner API version (default: "43.0")
    timeout : float
        Request timeout in seconds (default: 60.0)
    verify : bool or str
        SSL verification (True, False, or path to CA bundle)
    user_agent : str
        User-Agent header value

    Examples
    --------
    >>> cfg = ClientConfig(base_url="https://test.salesforce.com", api_version="52.0")
    """
    base_url: str = DEFAULT_URL
    client_id: str = DEFAULT_CLIENT_ID
    api_version: str = DEFAULT_API_VERSION
    timeout: float = 60.0
    verify: Union[bool, str] = True
    user_agent: str = "simpleforce/0.1"

    def __post_init__(self) -> None:
        if not self.client_id:
            object.__setattr__(self, "client_id", DEFAULT_CLIENT_ID)


@dataclass(frozen=True)
class Credentials:
    """Username, password and security token for a single login call."""
    username: str
    password: str = field(repr=False)
    security_token: str = field(default="", repr=False)


@dataclass(frozen=True)
class SessionState:
    """
    Result of one successful login.

    ``session_id`` is the token later API calls authenticate with; the
    user fields are informational and may be empty.
    """
    session_id: str
    user_id: str = ""
    user_name: str = ""
    user_full_name: str = ""
    user_email: str = ""
    server_url: str = ""
    organization_id: str = ""


class SalesforceSession:
    """
    Salesforce login client holding one authenticated session.

    ``login`` is serialized per instance: concurrent callers wait for each
    other and the last successful login wins. A failed login never touches
    the state left by an earlier successful one.

    Parameters
    ----------
    cfg : ClientConfig, optional
        Connection configuration (defaults to production login)
    logger : logging.Logger, optional
        Logger for diagnostics (default: "simpleforce.core")

    Examples
    --------
    >>> with SalesforceSession(ClientConfig()) as sf:
    ...     state = sf.login("jane@example.com", "secret", "TOKEN")
    ...     state.session_id
    """

    def __init__(
        self,
        cfg: Optional[ClientConfig] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.cfg = cfg or ClientConfig()
        self.timeout = float(self.cfg.timeout)
        self.verify = self.cfg.verify
        self.logger = logger or logging.getLogger("simpleforce.core")

        self.session = self._build_session()

        self._state: Optional[SessionState] = None
        self._login_lock = threading.Lock()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def __enter__(self) -> "SalesforceSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ---------------- transport ----------------

    def _build_session(self) -> Session:
        sess = requests.Session()
        sess.headers.update({"User-Agent": self.cfg.user_agent})

        # one attempt per login; failures go straight back to the caller
        retry = Retry(total=0, redirect=False, raise_on_status=False)
        adapter = HTTPAdapter(max_retries=retry)
        sess.mount("https://", adapter)
        sess.mount("http://", adapter)
        return sess

    @property
    def soap_url(self) -> str:
        """The partner login endpoint derived from the configuration."""
        return login_url(self.cfg.base_url, self.cfg.api_version)

    def _read_body(self, r: Response, url: str) -> bytes:
        try:
            return r.content
        except requests.RequestException as exc:
            self.logger.warning("error occurred reading login response: %s", exc)
            raise TransportError(f"Reading login response from {url} failed: {exc}", url) from exc

    def _raise_for_status(self, r: Response, url: str) -> None:
        if 200 <= r.status_code < 300:
            return
        try:
            body = r.content or b""
        except requests.RequestException as exc:
            # status is the error being reported; the body only adds detail
            self.logger.debug("could not read error body: %s", exc)
            body = b""
        fault_code, fault_string = parse_fault(body)
        text = body.decode("utf-8", errors="replace")
        self.logger.warning("login request failed, status=%s fault=%s", r.status_code, fault_code)
        raise ProtocolStatusError(
            r.status_code,
            text,
            url,
            dict(r.headers),
            fault_code=fault_code,
            fault_string=fault_string,
        )

    def _post(self, url: str, data: bytes, timeout: float) -> bytes:
        t0 = time.perf_counter()
        try:
            r = self.session.post(
                url,
                data=data,
                headers=LOGIN_HEADERS,
                timeout=timeout,
                verify=self.verify,
                allow_redirects=False,
                stream=True,
            )
        except requests.RequestException as exc:
            self.logger.warning("error occurred submitting login request: %s", exc)
            raise TransportError(f"Login request to {url} failed: {exc}", url) from exc

        try:
            self._raise_for_status(r, url)
            body = self._read_body(r, url)
        finally:
            r.close()

        dt = (time.perf_counter() - t0) * 1000.0
        self.logger.debug("POST %s %sms", url, round(dt, 1))
        return body

    # ---------------- public ops ----------------

    def login(
        self,
        username: str,
        password: str,
        security_token: str = "",
        *,
        timeout: Optional[float] = None,
    ) -> SessionState:
        """
        Sign in with username, password and security token.

        Parameters
        ----------
        username : str
            Salesforce username
        password : str
            Account password
        security_token : str
            Security token, appended to the password; may be empty when the
            org trusts the caller's IP range
        timeout : float, optional
            Override the configured timeout for this call

        Returns
        -------
        SessionState
            The new session, also available as ``self.state``

        Raises
        ------
        TransportError
            Connection, DNS, timeout, URL or body read failure
        ProtocolStatusError
            Non-2xx response from the login endpoint
        ParseError
            Response body is not a usable ``loginResponse``
        """
        url = self.soap_url
        envelope = build_login_envelope(self.cfg.client_id, username, password, security_token)
        effective_timeout = self.timeout if timeout is None else float(timeout)

        with self._login_lock:
            body = self._post(url, envelope.encode("utf-8"), effective_timeout)
            try:
                result = parse_login_response(body)
            except ParseError as exc:
                self.logger.warning("error occurred parsing login response: %s", exc)
                raise

            state = SessionState(
                session_id=result.session_id,
                user_id=result.user_id,
                user_name=result.user_name,
                user_full_name=result.user_full_name,
                user_email=result.user_email,
                server_url=result.server_url,
                organization_id=result.organization_id,
            )
            self._state = state

        self.logger.info("user %s logged in.", state.user_name)
        return state

    def login_credentials(
        self,
        credentials: Credentials,
        *,
        timeout: Optional[float] = None,
    ) -> SessionState:
        """Sign in with a ``Credentials`` value."""
        return self.login(
            credentials.username,
            credentials.password,
            credentials.security_token,
            timeout=timeout,
        )

    # ---------------- session state ----------------

    @property
    def state(self) -> Optional[SessionState]:
        """The current session, or None before the first successful login."""
        return self._state

    @property
    def is_authenticated(self) -> bool:
        return self._state is not None

    @property
    def session_id(self) -> Optional[str]:
        state = self._state
        return state.session_id if state else None

    @property
    def user_id(self) -> Optional[str]:
        state = self._state
        return state.user_id if state else None

    @property
    def user_name(self) -> Optional[str]:
        state = self._state
        return state.user_name if state else None

    @property
    def user_full_name(self) -> Optional[str]:
        state = self._state
        return state.user_full_name if state else None

    @property
    def user_email(self) -> Optional[str]:
        state = self._state
        return state.user_email if state else None

    @property
    def instance_url(self) -> Optional[str]:
        """
        Scheme and host of the org instance reported at login.

        Falls back to the configured base URL when the response carried
        no ``serverUrl``.
        """
        state = self._state
        if state is None:
            return None
        if not state.server_url:
            return self.cfg.base_url.rstrip("/")
        parts = urlsplit(state.server_url)
        return f"{parts.scheme}://{parts.netloc}"

    def auth_headers(self) -> Dict[str, str]:
        """Authorization header for follow-up REST calls."""
        state = self._state
        if state is None:
            raise SalesforceError("Not logged in. Call login() first.")
        return {"Authorization": f"Bearer {state.session_id}"}
