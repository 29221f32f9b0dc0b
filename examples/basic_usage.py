"""
Example: Basic login with simpleforce
=====================================

This example shows how to sign in and hand the session to other clients.
"""

import logging

from simpleforce import ClientConfig, SalesforceSession, ProtocolStatusError


def example_basic_login():
    """Explicit configuration and credentials."""

    cfg = ClientConfig(
        base_url="https://login.salesforce.com",
        api_version="43.0",
        timeout=30.0,
    )

    with SalesforceSession(cfg) as sf:
        try:
            state = sf.login("USER@example.com", "PASSWORD", "SECURITY_TOKEN")
        except ProtocolStatusError as e:
            print(f"Login rejected ({e.status}): {e.fault_string or e.body}")
            return

        print(f"Logged in as {state.user_full_name} <{state.user_email}>")
        print("Instance:", sf.instance_url)
        print("Headers for REST calls:", list(sf.auth_headers()))


def example_connection_context():
    """Using ConnectionContext."""
    from simpleforce import ConnectionContext

    # Reads from environment variables: SF_URL, SF_USERNAME, SF_PASSWORD, SF_SECURITY_TOKEN
    with ConnectionContext() as conn:
        sf = conn.session
        print(f"Session for {sf.user_name}: {sf.session_id[:8]}...")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    # Uncomment the example you want to run
    # example_basic_login()
    # example_connection_context()

    print("Set up your environment variables and uncomment an example to run.")
    print("Required: SF_USERNAME, SF_PASSWORD (and SF_SECURITY_TOKEN unless your IP is trusted)")
