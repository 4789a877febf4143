import sys
from pathlib import Path
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

import pytest
from fastapi.testclient import TestClient

from main import create_app
from utils.data_store import TableStore
from utils.settings import Settings


@pytest.fixture
def store():
    return TableStore()


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def client(settings, store):
    app = create_app(settings=settings, store=store)
    return TestClient(app)
