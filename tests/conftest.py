import os

os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("APPLICATION_NAME", "testApp")

import pytest
from fastapi.testclient import TestClient

from pessoa_api.config import Config
from pessoa_api.dependencies import get_pessoa_repository, get_pessoa_service
from pessoa_api.main import app
from pessoa_api.services.memory import InMemoryPessoaStore


@pytest.fixture
def store():
    return InMemoryPessoaStore()


@pytest.fixture
def client(store, monkeypatch):
    monkeypatch.setattr(Config, "APPLICATION_NAME", "testApp")
    monkeypatch.setattr(Config, "ENABLE_TRANSLATION", False)
    app.dependency_overrides[get_pessoa_service] = lambda: store
    app.dependency_overrides[get_pessoa_repository] = lambda: store
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def pessoa_payload():
    return {
        "name": "Maria da Silva",
        "email": "maria@example.com",
        "phone": "+55 11 99999-0000",
        "document": "123.456.789-00",
        "birth_date": "1990-04-12",
    }
