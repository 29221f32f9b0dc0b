"""
simpleforce.soap - Partner SOAP envelope handling
=================================================
"""

from simpleforce.soap.envelope import (
    LOGIN_HEADERS,
    LoginResult,
    build_login_envelope,
    login_url,
    parse_fault,
    parse_login_response,
)

__all__ = [
    "LOGIN_HEADERS",
    "LoginResult",
    "build_login_envelope",
    "login_url",
    "parse_fault",
    "parse_login_response",
]
