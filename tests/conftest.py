#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Pytest configuration and shared fixtures for jirasimple tests.

This module provides reusable fixtures for testing jirasimple components.
"""
import json
from http.client import responses as reason_phrases
from typing import Any, Callable, Dict, Generator
from unittest.mock import Mock

import pytest
import requests
import responses
from requests.cookies import RequestsCookieJar


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def server() -> str:
    """Provide a test server URL."""
    return "https://jira.example.com"


@pytest.fixture
def login() -> str:
    """Provide a test login."""
    return "bot"


@pytest.fixture
def password() -> str:
    """Provide a test password."""
    return "s3cr3t-pass"


@pytest.fixture
def session_url(server: str) -> str:
    """Provide the cookie session endpoint URL."""
    return f"{server}/rest/auth/1/session"


@pytest.fixture
def api_url(server: str) -> str:
    """Provide the default API family base URL."""
    return f"{server}/rest/api/latest"


# =============================================================================
# Mock Response Fixtures
# =============================================================================

@pytest.fixture
def response_factory() -> Callable[..., requests.Response]:
    """Build real requests.Response objects without network traffic."""

    def build(
        status_code: int = 200,
        payload: Any = None,
        reason: str = None,
        body: bytes = None,
    ) -> requests.Response:
        response = requests.Response()
        response.status_code = status_code
        response.reason = reason if reason is not None else reason_phrases.get(status_code, "")
        if body is None:
            body = b"" if payload is None else json.dumps(payload).encode("utf-8")
        response._content = body
        response.url = "https://jira.example.com/"
        return response

    return build


@pytest.fixture
def mocked_responses() -> Generator:
    """Intercept requests made through any requests.Session."""
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def login_ok(mocked_responses, session_url: str):
    """Register a successful session login."""
    mocked_responses.add(
        responses.POST,
        session_url,
        json={"session": {"name": "JSESSIONID", "value": "ABC123"}},
        status=200,
    )
    return mocked_responses


# =============================================================================
# Mock Data Fixtures
# =============================================================================

@pytest.fixture
def sample_server_info(server: str) -> Dict[str, Any]:
    """Provide a sample serverInfo response."""
    return {
        "baseUrl": server,
        "version": "9.4.0",
        "versionNumbers": [9, 4, 0],
        "deploymentType": "Server",
        "buildNumber": 940000,
        "buildDate": "2023-5-1T10:0:0.000+00:00",
        "serverTime": "2024-2-29T23:30:15.250-02:00",
        "scmInfo": "d1c6d0a2b6c1e0f4",
        "serverTitle": "Example Jira",
    }


# =============================================================================
# Session and Connection Fixtures
# =============================================================================

@pytest.fixture
def mock_session() -> Mock:
    """Create a mock requests session."""
    session = Mock(spec=requests.Session)
    session.headers = {}
    session.cookies = RequestsCookieJar()
    session.request = Mock()
    session.close = Mock()
    return session


@pytest.fixture
def connection(login: str, password: str, server: str):
    """Create a JiraConnection for testing."""
    from jirasimple.connection import JiraConnection
    conn = JiraConnection(login, password, server)
    yield conn
    conn.dispose()


@pytest.fixture
def command(connection):
    """Create a JiraCommand bound to the test connection."""
    return connection.command()
