import json

import pytest
import requests

import app.providers.openai_api as api
from app.core.errors import ProviderError


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None, content=b""):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else (json.dumps(payload) if payload is not None else "")
        self.content = content

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


@pytest.fixture
def posted(monkeypatch):
    """Replace requests.post; tests set `posted.response` and read `posted.calls`."""

    class Recorder:
        response = FakeResponse(payload={})
        calls = []

        def __call__(self, url, **kwargs):
            files = kwargs.get("files")
            if files:
                name, fh, ctype = files["file"]
                kwargs["file_bytes"] = fh.read()
            self.calls.append((url, kwargs))
            if isinstance(self.response, Exception):
                raise self.response
            return self.response

    rec = Recorder()
    rec.calls = []
    monkeypatch.setattr(api.requests, "post", rec)
    monkeypatch.setattr(api.settings, "openai_api_key", "sk-test")
    monkeypatch.setattr(api.settings, "openai_base_url", "https://provider.test/v1/")
    return rec


def test_chat_completion_payload_and_text(posted):
    posted.response = FakeResponse(payload={"choices": [{"message": {"content": "  Hello!  "}}]})

    msgs = [{"role": "system", "content": "s"}, {"role": "user", "content": "hi"}]
    assert api.create_chat_completion(msgs) == "Hello!"

    url, kwargs = posted.calls[0]
    assert url == "https://provider.test/v1/chat/completions"
    assert kwargs["headers"]["Authorization"] == "Bearer sk-test"
    assert kwargs["json"]["messages"] == msgs
    assert kwargs["json"]["model"] == api.settings.openai_model
    assert kwargs["json"]["temperature"] == 0.8
    assert kwargs["json"]["max_tokens"] == 500


@pytest.mark.parametrize("payload", [
    {"choices": []},
    {"choices": [{"message": {}}]},
    {"choices": [{"message": {"content": None}}]},
    {},
])
def test_chat_completion_without_text_is_empty(posted, payload):
    posted.response = FakeResponse(payload=payload)
    assert api.create_chat_completion([{"role": "user", "content": "hi"}]) == ""


def test_transcription_uploads_file(posted, tmp_path):
    audio = tmp_path / "clip.webm"
    audio.write_bytes(b"webm-bytes")
    posted.response = FakeResponse(payload={"text": "good morning"})

    assert api.create_transcription(audio, "audio/webm") == "good morning"

    url, kwargs = posted.calls[0]
    assert url.endswith("/audio/transcriptions")
    assert kwargs["data"] == {"model": "gpt-4o-transcribe"}
    assert kwargs["file_bytes"] == b"webm-bytes"
    assert kwargs["files"]["file"][0] == "clip.webm"
    assert kwargs["files"]["file"][2] == "audio/webm"


def test_transcription_without_text_is_empty(posted, tmp_path):
    audio = tmp_path / "clip.mp3"
    audio.write_bytes(b"x")
    posted.response = FakeResponse(payload={})
    assert api.create_transcription(audio) == ""


def test_speech_returns_audio_bytes(posted):
    posted.response = FakeResponse(content=b"ID3...")

    assert api.create_speech("Hello", "nova") == b"ID3..."

    url, kwargs = posted.calls[0]
    assert url.endswith("/audio/speech")
    assert kwargs["json"] == {"model": "tts-1", "voice": "nova", "input": "Hello", "response_format": "mp3"}


def test_remote_error_message_and_status(posted):
    posted.response = FakeResponse(
        status_code=429,
        payload={"error": {"message": "Rate limit reached for gpt-4o-mini", "type": "requests"}},
    )
    with pytest.raises(ProviderError) as exc_info:
        api.create_chat_completion([{"role": "user", "content": "hi"}])
    assert exc_info.value.status_code == 429
    assert exc_info.value.message == "Rate limit reached for gpt-4o-mini"


@pytest.mark.parametrize("resp, expected", [
    (FakeResponse(status_code=400, payload={"error": "bad voice"}), "bad voice"),
    (FakeResponse(status_code=502, text="<html>Bad Gateway</html>"), "<html>Bad Gateway</html>"),
    (FakeResponse(status_code=503, text=""), "HTTP 503"),
])
def test_error_message_fallbacks(resp, expected):
    assert api.extract_error_message(resp) == expected


def test_network_error_becomes_500(posted):
    posted.response = requests.ConnectionError("connection refused")
    with pytest.raises(ProviderError) as exc_info:
        api.create_speech("Hi", "alloy")
    assert exc_info.value.status_code == 500
    assert "connection refused" in exc_info.value.message


def test_non_json_success_body_is_an_error(posted):
    posted.response = FakeResponse(status_code=200, payload=None, text="oops")
    with pytest.raises(ProviderError) as exc_info:
        api.create_chat_completion([{"role": "user", "content": "hi"}])
    assert exc_info.value.status_code == 500


def test_missing_key_is_an_error(posted, monkeypatch):
    monkeypatch.setattr(api.settings, "openai_api_key", None)
    with pytest.raises(ProviderError):
        api.create_speech("Hi", "alloy")
    assert posted.calls == []
