import pytest
from fastapi.testclient import TestClient

from libstore.main import app
from libstore.mocks.mock_data import mock_items
from libstore.src.models.catalogue import Catalogue
from libstore.src.routes.catalogue import get_storage
from libstore.src.storage.codec import CatalogueCodec
from libstore.src.storage.storage import Storage


@pytest.fixture
def codec():
    """Codec with explicit options so local settings cannot leak in"""
    return CatalogueCodec(indent=2, strict_document=False, skip_invalid_items=False)


@pytest.fixture
def catalogue():
    return Catalogue(mock_items)


@pytest.fixture
def storage(tmp_path, codec):
    return Storage(tmp_path / "data" / "catalogue.json", codec)


@pytest.fixture
def client(storage):
    """TestClient whose catalogue routes read and write a temporary file"""
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
