"""Test fixtures and utilities."""

import threading
from pathlib import Path

import pytest
import requests

from skyclerk.api_client import SkyclerkClient
from skyclerk.session import Session
from skyclerk.state_store import CredentialStore

BASE_URL = "https://skyclerk.test"
TOKEN = "test-token-12345"
USER_ID = 7
WORKSPACE_ID = 42


class RecordingHTTP(requests.Session):
    """requests.Session double that records prepared requests instead of sending them."""

    def __init__(self, status: int = 200, body: bytes = b"[]", headers: dict | None = None):
        super().__init__()
        self.status = status
        self.body = body
        self.response_headers = headers or {}
        self.sent: list[requests.PreparedRequest] = []

    def send(self, request, **kwargs):
        self.sent.append(request)
        response = requests.Response()
        response.status_code = self.status
        response._content = self.body
        response.headers.update(self.response_headers)
        response.url = request.url
        response.request = request
        return response


class BlockingHTTP(RecordingHTTP):
    """RecordingHTTP whose responses are held back until `release` is set."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.in_flight = threading.Event()
        self.release = threading.Event()

    def send(self, request, **kwargs):
        self.in_flight.set()
        self.release.wait(5.0)
        return super().send(request, **kwargs)


@pytest.fixture
def temp_db(tmp_path: Path) -> Path:
    """Temporary database path."""
    return tmp_path / "test_state.db"


@pytest.fixture
def store(temp_db: Path) -> CredentialStore:
    """Credential store in a temporary directory."""
    return CredentialStore(temp_db)


@pytest.fixture
def session() -> Session:
    """Logged-in session with an active workspace."""
    s = Session()
    s.set_credentials(TOKEN, USER_ID, "jane@example.com")
    s.set_active_workspace(WORKSPACE_ID)
    return s


@pytest.fixture
def anonymous_session() -> Session:
    return Session()


@pytest.fixture
def client(session: Session) -> SkyclerkClient:
    return SkyclerkClient(BASE_URL, session)


@pytest.fixture
def anonymous_client(anonymous_session: Session) -> SkyclerkClient:
    return SkyclerkClient(BASE_URL, anonymous_session)


def contact_payload(**overrides) -> dict:
    data = {
        "id": 11,
        "account_id": WORKSPACE_ID,
        "name": "Blue Bottle Coffee",
        "first_name": "",
        "last_name": "",
        "email": "",
    }
    data.update(overrides)
    return data


def category_payload(**overrides) -> dict:
    data = {"id": 3, "account_id": WORKSPACE_ID, "name": "Meals", "type": "2"}
    data.update(overrides)
    return data


def label_payload(**overrides) -> dict:
    data = {"id": 5, "account_id": WORKSPACE_ID, "name": "Travel"}
    data.update(overrides)
    return data


def file_payload(**overrides) -> dict:
    data = {
        "id": 99,
        "account_id": WORKSPACE_ID,
        "name": "sc-mobile-1700000000.jpg",
        "type": "image/jpeg",
        "size": 2048,
        "url": "https://cdn.skyclerk.test/files/99.jpg",
        "thumb_600_by_600_url": "https://cdn.skyclerk.test/files/99-thumb.jpg",
    }
    data.update(overrides)
    return data


def ledger_payload(**overrides) -> dict:
    data = {
        "id": 1001,
        "account_id": WORKSPACE_ID,
        "date": "2024-11-18T00:00:00Z",
        "amount": -4.5,
        "note": "Flat white",
        "lat": 0.0,
        "lon": 0.0,
        "contact": contact_payload(),
        "category": category_payload(),
        "labels": [label_payload()],
        "files": [],
    }
    data.update(overrides)
    return data


def snapclerk_payload(**overrides) -> dict:
    data = {
        "id": 77,
        "account_id": WORKSPACE_ID,
        "status": "Pending",
        "file": file_payload(),
        "ledger_id": 0,
        "amount": 0.0,
        "contact": "",
        "category": "",
        "labels": "",
        "note": "Lunch receipt",
        "lat": "0",
        "lon": "0",
        "created_at": "2024-11-19T08:14:22Z",
        "processed_at": "",
    }
    data.update(overrides)
    return data


def account_payload(**overrides) -> dict:
    data = {
        "id": WORKSPACE_ID,
        "name": "Jane's Bakery",
        "owner_id": USER_ID,
        "locale": "en-US",
        "currency": "USD",
    }
    data.update(overrides)
    return data


def me_payload(**overrides) -> dict:
    """/oauth/me response (snake_case)."""
    data = {
        "id": USER_ID,
        "email": "jane@example.com",
        "first_name": "Jane",
        "last_name": "Doe",
        "accounts": [account_payload(), account_payload(id=43, name="Side Project")],
    }
    data.update(overrides)
    return data


@pytest.fixture
def sample_ledger() -> dict:
    """Sample ledger entry API response."""
    return ledger_payload()


@pytest.fixture
def sample_snapclerk() -> dict:
    return snapclerk_payload()


@pytest.fixture
def sample_me() -> dict:
    return me_payload()
