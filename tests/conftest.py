"""
Pytest fixtures for CardMax tests. Each test gets a fresh in-memory wallet.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from cardmax.repository.catalog import CardCatalog
from cardmax.repository.memory import InMemoryWalletRepository

PROJECT_ROOT = Path(__file__).resolve().parents[1]
CATALOG_DIR = PROJECT_ROOT / "data" / "cards"


@pytest.fixture
def repository():
    return InMemoryWalletRepository()


@pytest.fixture
def catalog():
    return CardCatalog(str(CATALOG_DIR))


@pytest.fixture
def client(repository, catalog):
    """FastAPI TestClient wired to the per-test repository and the bundled catalog."""
    from fastapi.testclient import TestClient

    from cardmax.api.app import app
    from cardmax.api.deps import get_catalog, get_repository

    app.dependency_overrides[get_repository] = lambda: repository
    app.dependency_overrides[get_catalog] = lambda: catalog
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
