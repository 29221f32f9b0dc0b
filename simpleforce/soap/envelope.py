"""
simpleforce.soap.envelope - Partner API login envelope
======================================================

Builds the SOAP ``login`` request and reads the ``loginResponse`` /
``Fault`` documents sent back by the partner endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union
from xml.sax.saxutils import escape
import logging
import xml.etree.ElementTree as ET

from simpleforce.core.errors import ParseError


logger = logging.getLogger("simpleforce.soap")

SOAP_PATH = "services/Soap/u"

LOGIN_HEADERS = {
    "Content-Type": "text/xml",
    "charset": "UTF-8",
    "SOAPAction": "login",
}

_LOGIN_TEMPLATE = """<?xml version="1.0" encoding="utf-8" ?>
<env:Envelope
        xmlns:xsd="http://www.w3.org/2001/XMLSchema"
        xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
        xmlns:env="http://schemas.xmlsoap.org/soap/envelope/"
        xmlns:urn="urn:partner.soap.sforce.com">
    <env:Header>
        <urn:CallOptions>
            <urn:client>{client_id}</urn:client>
            <urn:defaultNamespace>sf</urn:defaultNamespace>
        </urn:CallOptions>
    </env:Header>
    <env:Body>
        <n1:login xmlns:n1="urn:partner.soap.sforce.com">
            <n1:username>{username}</n1:username>
            <n1:password>{password}{security_token}</n1:password>
        </n1:login>
    </env:Body>
</env:Envelope>"""


@dataclass(frozen=True)
class LoginResult:
    """
    Values read from a ``loginResponse`` document.

    Only ``session_id`` is guaranteed to be non-empty; the other fields
    are empty strings when the response omits them.
    """
    session_id: str
    user_id: str = ""
    user_name: str = ""
    user_full_name: str = ""
    user_email: str = ""
    server_url: str = ""
    organization_id: str = ""


def _strip_ns(tag: str) -> str:
    """Strip XML namespace from a tag name."""
    return tag.split("}", 1)[-1] if "}" in tag else tag


def _child(node: Optional[ET.Element], name: str) -> Optional[ET.Element]:
    if node is None:
        return None
    for el in node:
        if _strip_ns(el.tag) == name:
            return el
    return None


def _find_path(node: Optional[ET.Element], *names: str) -> Optional[ET.Element]:
    for name in names:
        node = _child(node, name)
    return node


def _text(node: Optional[ET.Element]) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.strip()


def login_url(base_url: str, api_version: str) -> str:
    """
    Build the partner login endpoint for ``base_url``.

    Trailing slashes on ``base_url`` are dropped so the result never
    contains a double slash.

    >>> login_url("https://login.salesforce.com/", "43.0")
    'https://login.salesforce.com/services/Soap/u/43.0'
    """
    return f"{base_url.rstrip('/')}/{SOAP_PATH}/{api_version.strip('/')}"


def build_login_envelope(
    client_id: str,
    username: str,
    password: str,
    security_token: str = "",
) -> str:
    """
    Render the SOAP ``login`` request body.

    The security token is appended to the password with no separator,
    which is how the partner API expects it.
    """
    return _LOGIN_TEMPLATE.format(
        client_id=escape(client_id),
        username=escape(username),
        password=escape(password),
        security_token=escape(security_token or ""),
    )


def parse_login_response(body: Union[str, bytes]) -> LoginResult:
    """
    Extract session and user identity from a ``loginResponse`` envelope.

    Raises
    ------
    ParseError
        If the body is not XML, is not a SOAP envelope, or carries no
        ``sessionId``.
    """
    if not body:
        raise ParseError("Empty login response")
    try:
        root = ET.fromstring(body)
    except ET.ParseError as exc:
        raise ParseError(f"Login response is not valid XML: {exc}") from exc

    if _strip_ns(root.tag) != "Envelope":
        raise ParseError(f"Unexpected root element '{_strip_ns(root.tag)}' in login response")

    result = _find_path(root, "Body", "loginResponse", "result")
    if result is None:
        raise ParseError("Login response has no Body/loginResponse/result element")

    session_id = _text(_child(result, "sessionId"))
    if not session_id:
        raise ParseError("Login response carries no sessionId")

    user_info = _child(result, "userInfo")
    return LoginResult(
        session_id=session_id,
        user_id=_text(_child(result, "userId")),
        user_name=_text(_child(user_info, "userName")),
        user_full_name=_text(_child(user_info, "userFullName")),
        user_email=_text(_child(user_info, "userEmail")),
        server_url=_text(_child(result, "serverUrl")),
        organization_id=_text(_child(user_info, "organizationId")),
    )


def parse_fault(body: Union[str, bytes, None]) -> Tuple[Optional[str], Optional[str]]:
    """
    Best-effort read of ``faultcode`` / ``faultstring`` from a SOAP fault.

    Returns ``(None, None)`` when the body is not a fault document.
    """
    if not body:
        return None, None
    try:
        root = ET.fromstring(body)
    except ET.ParseError:
        logger.debug("parse_fault: body is not XML")
        return None, None

    for node in root.iter():
        if _strip_ns(node.tag) == "Fault":
            code = _text(_child(node, "faultcode")) or None
            message = _text(_child(node, "faultstring")) or None
            return code, message
    return None, None
