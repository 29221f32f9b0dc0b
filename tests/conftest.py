"""
Pytest configuration and shared fixtures.
"""

import pytest
from unittest.mock import Mock


LOGIN_RESPONSE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/"
                  xmlns="urn:partner.soap.sforce.com"
                  xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
  <soapenv:Body>
    <loginResponse>
      <result>
        <metadataServerUrl>https://na1.salesforce.com/services/Soap/m/43.0/00D000000000001</metadataServerUrl>
        <passwordExpired>false</passwordExpired>
        <sandbox>false</sandbox>
        <serverUrl>https://na1.salesforce.com/services/Soap/u/43.0/00D000000000001</serverUrl>
        <sessionId>{session_id}</sessionId>
        <userId>{user_id}</userId>
        <userInfo>
          <organizationId>00D000000000001</organizationId>
          <userEmail>{user_email}</userEmail>
          <userFullName>{user_full_name}</userFullName>
          <userName>{user_name}</userName>
        </userInfo>
      </result>
    </loginResponse>
  </soapenv:Body>
</soapenv:Envelope>"""


def login_response_xml(
    session_id="ABC123",
    user_id="U1",
    user_email="a@b.com",
    user_full_name="Jane Doe",
    user_name="jane",
):
    return LOGIN_RESPONSE_XML.format(
        session_id=session_id,
        user_id=user_id,
        user_email=user_email,
        user_full_name=user_full_name,
        user_name=user_name,
    )


@pytest.fixture
def sample_login_xml():
    """Successful loginResponse envelope."""
    return login_response_xml()


@pytest.fixture
def sample_fault_xml():
    """SOAP fault returned for bad credentials."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/"
                  xmlns:sf="urn:fault.partner.soap.sforce.com">
  <soapenv:Body>
    <soapenv:Fault>
      <faultcode>sf:INVALID_LOGIN</faultcode>
      <faultstring>INVALID_LOGIN: Invalid username, password, security token; or user locked out.</faultstring>
      <detail>
        <sf:LoginFault>
          <sf:exceptionCode>INVALID_LOGIN</sf:exceptionCode>
        </sf:LoginFault>
      </detail>
    </soapenv:Fault>
  </soapenv:Body>
</soapenv:Envelope>"""


@pytest.fixture
def make_response():
    """Factory for mocked requests responses."""
    def _make(status=200, content=b"", headers=None):
        r = Mock()
        r.status_code = status
        r.content = content.encode("utf-8") if isinstance(content, str) else content
        r.headers = headers or {"Content-Type": "text/xml;charset=UTF-8"}
        return r
    return _make


@pytest.fixture
def login_xml_factory():
    """Factory for loginResponse envelopes with custom field values."""
    return login_response_xml
