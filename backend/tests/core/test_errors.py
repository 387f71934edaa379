"""Error hierarchy — status codes and the response envelope."""

from directory_api.core.errors import (
    ClientInputError, ForbiddenError, NotFoundError, ProjectionError,
    StoreError, UnauthorizedError,
)


def test_status_codes():
    assert ClientInputError("bad", "at").http_status == 400
    assert NotFoundError("Enterprise", "x").http_status == 404
    assert UnauthorizedError().http_status == 403
    assert ForbiddenError("no").http_status == 403
    assert StoreError("db", "get").http_status == 500
    assert ProjectionError("shape").http_status == 500


def test_not_found_message_names_id():
    err = NotFoundError("Enterprise", "abc")
    assert err.message == "Enterprise not found for id abc"


def test_response_envelope_has_top_level_message():
    body = StoreError("Error accessing the enterprise directory", "browse").to_response()
    assert body["message"] == "Error accessing the enterprise directory"
    assert body["code"] == "STORE_ERROR"
    assert body["category"] == "database"
    assert body["severity"] == "critical"
    assert "operation" not in body
