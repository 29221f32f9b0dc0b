"""
simpleforce.core.errors - Typed login failures
==============================================

Every failure of ``SalesforceSession.login`` is one of the classes below.
None of them is retried internally.
"""

from __future__ import annotations

from typing import Dict, Optional


class SalesforceError(RuntimeError):
    """Base class for all simpleforce errors."""


class TransportError(SalesforceError):
    """
    The request could not be sent or the response could not be read.

    Covers connection refused, DNS failures, timeouts, malformed URLs and
    errors while reading the response body. The ``requests`` exception is
    kept as ``__cause__``.

    Attributes
    ----------
    url : str
        The URL that was called
    """

    def __init__(self, message: str, url: str = "") -> None:
        super().__init__(message)
        self.url = url


class ProtocolStatusError(SalesforceError):
    """
    Exception raised when the login endpoint answers with a non-2xx status.

    Attributes
    ----------
    status : int
        HTTP status code
    body : str
        Response body
    url : str
        The URL that was called
    headers : dict
        Response headers
    fault_code : str, optional
        ``faultcode`` of the SOAP fault, when the body carries one
    fault_string : str, optional
        ``faultstring`` of the SOAP fault, when the body carries one
    """

    def __init__(
        self,
        status: int,
        body: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        *,
        fault_code: Optional[str] = None,
        fault_string: Optional[str] = None,
    ):
        detail = fault_string or (body or "")[:1200]
        super().__init__(f"Login request failed with status {status} for {url}: {detail}")
        self.status = status
        self.body = body or ""
        self.url = url
        self.headers = headers or {}
        self.fault_code = fault_code
        self.fault_string = fault_string


class ParseError(SalesforceError):
    """The login response is not XML or lacks the expected structure."""
