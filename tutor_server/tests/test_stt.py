from pathlib import Path

import app.routers.stt as stt_mod
from app.core.errors import ProviderError


def test_unsupported_type_is_rejected_without_provider_call(client, monkeypatch):
    calls = []
    monkeypatch.setattr(stt_mod, "create_transcription", lambda *a, **k: calls.append(a) or "x")

    r = client.post("/stt", files={"audio": ("pic.png", b"\x89PNG....", "image/png")})
    assert r.status_code == 400
    assert r.json() == {"error": "Unsupported file format"}
    assert calls == []


def test_missing_or_empty_file_is_rejected(client, monkeypatch):
    calls = []
    monkeypatch.setattr(stt_mod, "create_transcription", lambda *a, **k: calls.append(a) or "x")

    r = client.post("/stt", data={"other": "field"})
    assert r.status_code == 400
    assert r.json() == {"error": "No audio uploaded"}

    r = client.post("/stt", files={"audio": ("empty.webm", b"", "audio/webm")})
    assert r.status_code == 400
    assert calls == []


def test_transcription_uses_temp_file_and_removes_it(client, monkeypatch, tmp_path):
    seen = {}

    def fake(path, content_type):
        path = Path(path)
        seen["path"] = path
        seen["exists"] = path.exists()
        seen["bytes"] = path.read_bytes()
        seen["content_type"] = content_type
        return "I am fine, thank you"

    monkeypatch.setattr(stt_mod, "create_transcription", fake)
    monkeypatch.setattr(stt_mod.settings, "upload_tmp_dir", tmp_path)

    r = client.post(
        "/stt",
        files={"audio": ("speech", b"OggS-audio", "audio/webm;codecs=opus")},
    )
    assert r.status_code == 200
    assert r.json() == {"text": "I am fine, thank you"}

    assert seen["exists"]
    assert seen["bytes"] == b"OggS-audio"
    assert seen["path"].suffix == ".webm"
    assert seen["path"].parent == tmp_path
    assert seen["content_type"] == "audio/webm"
    assert not seen["path"].exists()


def test_concurrent_uploads_get_distinct_temp_files(client, monkeypatch):
    paths = []

    def fake(path, content_type):
        paths.append(Path(path))
        return ""

    monkeypatch.setattr(stt_mod, "create_transcription", fake)

    for _ in range(3):
        r = client.post("/stt", files={"audio": ("a.mp3", b"ID3", "audio/mpeg")})
        assert r.status_code == 200
        assert r.json() == {"text": ""}

    assert len(set(paths)) == 3
    assert all(p.suffix == ".mp3" for p in paths)


def test_provider_failure_still_removes_temp_file(client, monkeypatch):
    seen = {}

    def failing(path, content_type):
        seen["path"] = Path(path)
        raise ProviderError("Invalid file format.", status_code=400)

    monkeypatch.setattr(stt_mod, "create_transcription", failing)

    r = client.post("/stt", files={"audio": ("a.wav", b"RIFF", "audio/wav")})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid file format."}
    assert not seen["path"].exists()
