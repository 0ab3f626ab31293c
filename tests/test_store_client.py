# tests/test_store_client.py

import pytest
import requests

from did_whisper import transport
from did_whisper.errors import StorageTransportError
from did_whisper.models import Envelope
from did_whisper.store_client import MessageStoreClient, whisper_url

ENVELOPE = Envelope(key_id="did:example:alice#key-1", expiration_seconds=300, cipher="3yZe7d")


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text="", content_type="application/json"):
        self.status_code = status_code
        self._payload = payload
        self.text = text
        self.headers = {"Content-Type": content_type}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def _respond(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def put(self, url, **kwargs):
        return self._respond("PUT", url, **kwargs)

    def get(self, url, **kwargs):
        return self._respond("GET", url, **kwargs)


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    monkeypatch.setattr(transport.time, "sleep", lambda s: None)


class TestWhisperUrl:
    @pytest.mark.parametrize(
        "base",
        ["https://s.example", "https://s.example/", "https://s.example/whisper", "https://s.example/whisper/"],
    )
    def test_suffix(self, base):
        assert whisper_url(base) == "https://s.example/whisper"


class TestPut:
    def test_sends_wire_json(self):
        session = FakeSession(FakeResponse(payload={"status": "ok", "id": "abc"}))
        ack = MessageStoreClient(session=session).put(ENVELOPE, "https://s.example")

        assert ack == {"status": "ok", "id": "abc"}
        method, url, kwargs = session.calls[0]
        assert method == "PUT"
        assert url == "https://s.example/whisper"
        assert kwargs["json"] == {"keyId": "did:example:alice#key-1", "expirationSeconds": 300, "cipher": "3yZe7d"}

    def test_text_acknowledgment(self):
        session = FakeSession(FakeResponse(text="stored", content_type="text/plain"))
        assert MessageStoreClient(session=session).put(ENVELOPE, "https://s.example") == "stored"

    def test_http_error(self):
        session = FakeSession(FakeResponse(status_code=500))
        with pytest.raises(StorageTransportError):
            MessageStoreClient(session=session).put(ENVELOPE, "https://s.example")
        assert len(session.calls) == 1

    def test_timeout_retried(self):
        session = FakeSession(error=requests.exceptions.Timeout("slow"))
        with pytest.raises(StorageTransportError):
            MessageStoreClient(max_retries=2, session=session).put(ENVELOPE, "https://s.example")
        assert len(session.calls) == 2


class TestGet:
    def test_parses_envelope(self):
        session = FakeSession(FakeResponse(payload=ENVELOPE.to_json()))
        assert MessageStoreClient(session=session).get("https://s.example/whisper/abc") == ENVELOPE

    def test_malformed_envelope(self):
        session = FakeSession(FakeResponse(payload={"cipher": "abc"}))
        with pytest.raises(StorageTransportError):
            MessageStoreClient(session=session).get("https://s.example/whisper/abc")

    def test_not_found(self):
        session = FakeSession(FakeResponse(status_code=404))
        with pytest.raises(StorageTransportError):
            MessageStoreClient(session=session).get("https://s.example/whisper/abc")
