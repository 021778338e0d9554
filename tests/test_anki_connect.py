from __future__ import annotations

import pytest
import requests

from anki_paste.adapters import AnkiConnectAdapter, AnkiConnectError


class FakeResponse:
    def __init__(self, data, status_code: int = 200):
        self._data = data
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._data


class RecordedCalls(list):
    """Requests sent to the fake server, plus the queue of canned responses."""

    def __init__(self):
        super().__init__()
        self.responses = []


@pytest.fixture()
def calls(monkeypatch):
    recorded = RecordedCalls()

    def fake_post(url, json=None, timeout=None):
        recorded.append({"url": url, "json": json, "timeout": timeout})
        return recorded.responses.pop(0)

    monkeypatch.setattr(requests, "post", fake_post)
    return recorded


def _queue(calls, *responses):
    calls.responses.extend(responses)


def test_version_request_payload(calls):
    _queue(calls, FakeResponse({"result": 6, "error": None}))
    adapter = AnkiConnectAdapter(base_url="http://anki:8765", version=6, timeout=5)

    assert adapter.ping() == "AnkiConnect v6"
    assert calls[0] == {"url": "http://anki:8765", "json": {"action": "version", "version": 6}, "timeout": 5}


def test_model_field_names_sends_params(calls):
    _queue(calls, FakeResponse({"result": ["Frente", "Verso"], "error": None}))

    assert AnkiConnectAdapter().get_model_field_names("Básico") == ["Frente", "Verso"]
    assert calls[0]["json"]["params"] == {"modelName": "Básico"}


def test_add_notes_allow_duplicate_does_not_mutate_input(calls):
    _queue(calls, FakeResponse({"result": [1, None], "error": None}))
    notes = [{"deckName": "D", "modelName": "Básico", "fields": {}, "tags": []}] * 2

    result = AnkiConnectAdapter().add_notes(notes, allow_duplicate=True)

    assert result == [1, None]
    sent = calls[0]["json"]["params"]["notes"]
    assert all(note["options"] == {"allowDuplicate": True} for note in sent)
    assert "options" not in notes[0]


def test_logical_error_raises(calls):
    _queue(calls, FakeResponse({"result": None, "error": "deck was not found"}))

    with pytest.raises(AnkiConnectError, match="deck was not found"):
        AnkiConnectAdapter().get_deck_names()


@pytest.mark.parametrize("body", [{"result": 1}, {"result": 1, "error": None, "extra": 1}, {"a": 1, "b": 2}, [1, 2]])
def test_malformed_response_raises(calls, body):
    _queue(calls, FakeResponse(body))

    with pytest.raises(AnkiConnectError):
        AnkiConnectAdapter().get_model_names()


def test_http_error_raises(calls):
    _queue(calls, FakeResponse({}, status_code=500))

    with pytest.raises(AnkiConnectError, match="HTTP error"):
        AnkiConnectAdapter().get_version()


def test_connection_refused(monkeypatch):
    def refuse(*args, **kwargs):
        raise requests.exceptions.ConnectionError("refused")

    monkeypatch.setattr(requests, "post", refuse)

    with pytest.raises(ConnectionError, match="make sure Anki is running"):
        AnkiConnectAdapter(base_url="http://127.0.0.1:1").get_deck_names()
