"""
simpleforce.core.connection - Environment-driven connection management
======================================================================

Provides a ConnectionContext that resolves configuration and credentials
from arguments or ``SF_*`` environment variables and logs in on first use.
"""

from __future__ import annotations

import os
from typing import Optional

from simpleforce.core.session import (
    DEFAULT_API_VERSION,
    DEFAULT_CLIENT_ID,
    DEFAULT_URL,
    ClientConfig,
    Credentials,
    SalesforceSession,
)


class ConnectionContext:
    """
    High-level connection manager for a Salesforce login session.

    Supports environment variable configuration and context manager usage.
    The login round trip happens lazily, on first access to ``session``.

    Parameters
    ----------
    base_url : str, optional
        Login host. Falls back to SF_URL env var, then production login.
    username : str, optional
        Falls back to SF_USERNAME env var.
    password : str, optional
        Falls back to SF_PASSWORD env var.
    security_token : str, optional
        Falls back to SF_SECURITY_TOKEN env var; may be empty.
    client_id : str, optional
        Falls back to SF_CLIENT_ID env var, then "simpleforce".
    api_version : str, optional
        Falls back to SF_API_VERSION env var, then "43.0".
    verify : bool, optional
        SSL verification. Falls back to SF_VERIFY_TLS env var.
    timeout : float
        Request timeout in seconds.

    Examples
    --------
    >>> with ConnectionContext() as conn:  # reads SF_* env vars
    ...     print(conn.session.session_id)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        security_token: Optional[str] = None,
        client_id: Optional[str] = None,
        api_version: Optional[str] = None,
        verify: Optional[bool] = None,
        timeout: float = 60.0,
    ) -> None:
        self._base_url = (base_url or os.environ.get("SF_URL") or DEFAULT_URL).rstrip("/")
        self._username = username or os.environ.get("SF_USERNAME", "")
        self._password = password or os.environ.get("SF_PASSWORD", "")
        if security_token is not None:
            self._security_token = security_token
        else:
            self._security_token = os.environ.get("SF_SECURITY_TOKEN", "")
        self._client_id = client_id or os.environ.get("SF_CLIENT_ID") or DEFAULT_CLIENT_ID
        self._api_version = api_version or os.environ.get("SF_API_VERSION") or DEFAULT_API_VERSION

        if verify is not None:
            self._verify = verify
        else:
            self._verify = os.environ.get("SF_VERIFY_TLS", "true").lower() != "false"

        self._timeout = timeout

        if not (self._username and self._password):
            raise ValueError(
                "Missing credentials. Set SF_USERNAME/SF_PASSWORD environment "
                "variables, or pass username/password parameters."
            )

        self._session: Optional[SalesforceSession] = None

    @property
    def config(self) -> ClientConfig:
        """The resolved client configuration."""
        return ClientConfig(
            base_url=self._base_url,
            client_id=self._client_id,
            api_version=self._api_version,
            timeout=self._timeout,
            verify=self._verify,
        )

    @property
    def session(self) -> SalesforceSession:
        """Get or create the logged-in session."""
        if self._session is None:
            self._session = self._build_session()
        return self._session

    def _build_session(self) -> SalesforceSession:
        sess = SalesforceSession(self.config)
        creds = Credentials(self._username, self._password, self._security_token)
        try:
            sess.login_credentials(creds)
        except Exception:
            sess.close()
            raise
        return sess

    def close(self) -> None:
        """Close the connection."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> "ConnectionContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def base_url(self) -> str:
        """The configured login host."""
        return self._base_url

    @property
    def api_version(self) -> str:
        return self._api_version
