"""
simpleforce - Salesforce login session client
=============================================

Signs in to Salesforce through the partner SOAP API with username,
password and security token, and keeps the resulting session id and
user identity for follow-up API clients.

Usage
-----
>>> from simpleforce import ClientConfig, SalesforceSession
>>>
>>> with SalesforceSession(ClientConfig()) as sf:
...     sf.login("jane@example.com", "secret", "TOKEN")
...     headers = sf.auth_headers()

Subpackages
-----------
- simpleforce.core: Configuration, login session and errors
- simpleforce.soap: Login envelope construction and response parsing

"""

__version__ = "0.1.0"

# Core exports - available at package root
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
    # Version
    "__version__",
    # Errors
    "SalesforceError",
    "TransportError",
    "ProtocolStatusError",
    "ParseError",
    # Core
    "DEFAULT_API_VERSION",
    "DEFAULT_CLIENT_ID",
    "DEFAULT_URL",
    "ClientConfig",
    "Credentials",
    "SessionState",
    "SalesforceSession",
    "ConnectionContext",
]
