import inspect
import json

from libstore.mocks.mock_data import mock_document
from libstore.src.routes.catalogue import export_catalogue, get_items, import_catalogue


def test_read_root(client):
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "operational"
    assert "timestamp" in data


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_export_empty_catalogue(client):
    response = client.get("/catalogue/")
    assert response.status_code == 200
    assert response.json() == {"audio": [], "book": [], "item": [], "magazine": [], "video": []}


def test_export_saved_catalogue(client, storage, catalogue):
    storage.save(catalogue)

    response = client.get("/catalogue/")
    assert response.status_code == 200
    document = response.json()
    assert list(document.keys()) == ["audio", "book", "item", "magazine", "video"]
    assert [entry["id"] for entry in document["audio"]] == ["A001", "A002"]


def test_get_items_by_kind(client, storage, catalogue):
    storage.save(catalogue)

    response = client.get("/catalogue/books")
    assert response.status_code == 200
    books = response.json()
    assert [book["id"] for book in books] == ["B001", "B002"]
    assert books[0]["due_date"] == "2023-05-01"


def test_get_items_invalid_kind(client):
    response = client.get("/catalogue/invalid_kinds")
    assert response.status_code == 400
    assert "Invalid item kind" in response.json()["detail"]


def test_import_catalogue(client, storage):
    response = client.put("/catalogue/", json=mock_document)
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "saved"
    assert data["item_count"] == 3
    assert data["counts"] == {"audio": 1, "book": 1, "item": 0, "magazine": 1, "video": 0}

    stored = json.loads(storage.path.read_text(encoding="utf-8"))
    assert stored["book"] == mock_document["book"]


def test_import_partial_document(client, storage):
    response = client.put("/catalogue/", json={"book": mock_document["book"], "foo": []})
    assert response.status_code == 200
    assert response.json()["item_count"] == 1

    assert len(storage.load()) == 1


def test_import_invalid_entry(client, storage):
    document = {"video": [{"title": "Broken", "id": "V999"}]}

    response = client.put("/catalogue/", json=document)
    assert response.status_code == 422
    data = response.json()
    assert data["success"] is False
    assert data["error_code"] == "DESERIALIZATION_ERROR"
    assert data["details"]["kind"] == "video"
    assert data["details"]["index"] == 0
    assert {error["field"] for error in data["details"]["errors"]} == {"publisher", "duration"}
    assert not storage.path.exists()


def test_import_non_object_document(client):
    response = client.put("/catalogue/", json=[mock_document])
    assert response.status_code == 422
    assert "must be a JSON object" in response.json()["error"]


def test_export_corrupt_stored_catalogue(client, storage):
    storage.path.parent.mkdir(parents=True)
    storage.path.write_text('{"book": [{"title": "No id"}]}', encoding="utf-8")

    response = client.get("/catalogue/")
    assert response.status_code == 500
    data = response.json()
    assert data["error_code"] == "CORRUPT_CATALOGUE"
    assert data["details"] == {"kind": "book", "index": 0}


def test_get_items_corrupt_stored_catalogue(client, storage):
    storage.path.parent.mkdir(parents=True)
    storage.path.write_text("not json", encoding="utf-8")

    response = client.get("/catalogue/books")
    assert response.status_code == 500
    assert response.json()["error_code"] == "CORRUPT_CATALOGUE"


def test_import_timestamp_date_is_rejected(client, storage):
    entry = dict(mock_document["book"][0], due_date=1682899200)

    response = client.put("/catalogue/", json={"book": [entry]})
    assert response.status_code == 422
    assert response.json()["details"]["errors"][0]["field"] == "due_date"
    assert not storage.path.exists()


def test_file_backed_routes_run_in_threadpool():
    """Routes doing blocking file I/O must not be coroutines on the event loop"""
    for route in (export_catalogue, get_items, import_catalogue):
        assert not inspect.iscoroutinefunction(route)
