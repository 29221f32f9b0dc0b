"""
simpleforce.core - Login session and configuration
==================================================

This module provides the classes for signing in to Salesforce:

- ClientConfig: Login endpoint configuration
- Credentials: Username, password and security token
- SessionState: Session id and user identity from a successful login
- SalesforceSession: SOAP login client holding the session state
- ConnectionContext: Environment-driven connection manager

"""

from simpleforce.core.errors import (
    SalesforceError,
    TransportError,
    ProtocolStatusError,
    ParseError,
)

from simpleforce.core.session import (
    DEFAULT_API_VERSION,
    DEFAULT_CLIENT_ID,
    DEFAULT_URL,
    ClientConfig,
    Credentials,
    SessionState,
    SalesforceSession,
)

from simpleforce.core.connection import ConnectionContext

__all__ = [
    "SalesforceError",
    "TransportError",
    "ProtocolStatusError",
    "ParseError",
    "DEFAULT_API_VERSION",
    "DEFAULT_CLIENT_ID",
    "DEFAULT_URL",
    "ClientConfig",
    "Credentials",
    "SessionState",
    "SalesforceSession",
    "ConnectionContext",
]
