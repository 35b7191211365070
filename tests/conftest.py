# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from dealscore.api.http import app, get_narrative_provider  # run tests from repo root
from dealscore.services.narrative import StaticNarrativeProvider


@pytest.fixture(scope="session")
def client():
    # never touch the network from the API tests
    app.dependency_overrides[get_narrative_provider] = StaticNarrativeProvider
    yield TestClient(app)
    app.dependency_overrides.clear()
