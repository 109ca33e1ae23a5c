from libstore.core.error_handling import (
    CatalogueStorageError,
    DeserializationError,
    SerializationError,
    StandardErrorResponse,
)


def test_error_hierarchy():
    assert issubclass(SerializationError, CatalogueStorageError)
    assert issubclass(DeserializationError, CatalogueStorageError)
    assert SerializationError("x").error_code == "SERIALIZATION_ERROR"
    assert DeserializationError("x").error_code == "DESERIALIZATION_ERROR"


def test_deserialization_error_context_drops_empty_entries():
    error = DeserializationError("Invalid book entry at index 0", kind="book", index=0)

    assert error.context() == {"kind": "book", "index": 0}
    assert error.errors == []
    assert str(error) == "Invalid book entry at index 0"


def test_standard_error_response_mirrors_detail():
    response = StandardErrorResponse(error="Catalogue document is missing the 'book' field")

    assert response.detail == response.error
    assert response.success is False
