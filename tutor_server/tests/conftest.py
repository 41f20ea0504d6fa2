import os
import sys
from pathlib import Path

import pytest

# Ensure tutor_server/ is on sys.path for `import app.*`
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# The app refuses to start without a key; never talk to the real provider.
os.environ.setdefault("OPENAI_API_KEY", "test-key")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("OPENAI_TTS_VOICE", "alloy")


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from app.main import app
    from app.runtime_state import session_store

    session_store.clear()
    yield TestClient(app)
    session_store.clear()
