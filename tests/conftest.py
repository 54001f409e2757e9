"""Shared fixtures for Zoho Desk node unit tests."""

import pytest
from unittest.mock import AsyncMock
from types import SimpleNamespace


# ---------------------------------------------------------------------------
# Fake host client: the object the nodes call send() on
# ---------------------------------------------------------------------------

def _make_client(response):
    """Return a lightweight object that mirrors the HostClient shape."""
    client = SimpleNamespace()
    client.org_id = "org_123"
    client.base_url = "https://desk.zoho.com/api/v1"
    client.send = AsyncMock(return_value=response)
    return client


def sent_requests(client):
    """ApiRequest objects passed to client.send(), in order."""
    return [call.args[0] for call in client.send.await_args_list]


@pytest.fixture
def ticket_response():
    return {
        "id": "1234567890123456789",
        "ticketNumber": "101",
        "subject": "Printer on fire",
        "status": "Open",
    }


@pytest.fixture
def departments_response():
    return {
        "data": [
            {"id": "1000000000001", "name": "Support"},
            {"id": "1000000000002", "name": "Sales"},
        ]
    }


@pytest.fixture
def fake_client(ticket_response):
    """Host client answering every request with ticket_response."""
    return _make_client(ticket_response)


@pytest.fixture
def empty_client():
    """Host client answering every request with an empty list."""
    return _make_client({"data": []})


@pytest.fixture
def requests_of():
    return sent_requests
