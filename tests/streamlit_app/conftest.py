"""Fixtures for Streamlit app tests."""

from __future__ import annotations

import importlib
from collections.abc import Iterator
from typing import Any
from unittest.mock import MagicMock, patch

import pytest


@pytest.fixture
def api_app():
    """Create a test instance of the backend API with an in-memory DB."""
    from household_profiler.api.app import create_app
    from household_profiler.container import get_member_repository
    from household_profiler.repositories.sqlite import (
        SQLiteDatabase,
        SQLiteMemberRepository,
    )

    app = create_app()
    db = SQLiteDatabase(":memory:", check_same_thread=False)
    db.initialize()
    repo = SQLiteMemberRepository(db)

    app.dependency_overrides[get_member_repository] = lambda: repo
    try:
        yield app
    finally:
        db.close()


@pytest.fixture
def test_client(api_app):
    """Synchronous test client for the API."""
    from starlette.testclient import TestClient

    return TestClient(api_app)


@pytest.fixture
def mock_streamlit() -> Iterator[MagicMock]:
    """Mock streamlit module for import tests."""
    mock_st = MagicMock()
    mock_st.session_state = {}
    mock_st.cache_data = lambda ttl=None: lambda f: f  # No-op decorator

    with patch.dict("sys.modules", {"streamlit": mock_st}):
        yield mock_st


@pytest.fixture
def api_client(mock_streamlit):
    """The api_client module, imported fresh against the mocked streamlit."""
    return importlib.import_module("household_profiler.streamlit_app.api_client")


@pytest.fixture
def mock_httpx_client(test_client, mock_streamlit) -> Iterator[MagicMock]:
    """Mock httpx.Client that routes to test_client."""

    class MockResponse:
        def __init__(self, response):
            self.status_code = response.status_code
            self._response = response

        def json(self) -> Any:
            return self._response.json()

        @property
        def text(self) -> str:
            return self._response.text

    class MockClient:
        def __init__(self, base_url: str, timeout: float = 30.0):
            self.base_url = base_url
            self.timeout = timeout

        def __enter__(self):
            return self

        def __exit__(self, *args):
            pass

        def get(self, url: str, params: dict | None = None) -> MockResponse:
            return MockResponse(test_client.get(url, params=params))

        def post(self, url: str, json: dict | None = None) -> MockResponse:
            return MockResponse(test_client.post(url, json=json))

        def put(self, url: str, json: dict | None = None) -> MockResponse:
            return MockResponse(test_client.put(url, json=json))

        def delete(self, url: str) -> MockResponse:
            return MockResponse(test_client.delete(url))

    with patch(
        "household_profiler.streamlit_app.api_client.httpx.Client", MockClient
    ):
        yield MockClient
