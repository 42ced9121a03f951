"""Error Hierarchy — response envelopes and status codes."""

from placeboard.core.errors import (
    AlreadyLikedError,
    ConstraintViolationError,
    DatabaseError,
    FileStorageError,
    INTERNAL_ERROR_MESSAGE,
    OperationFailedError,
    TranslationUpstreamError,
)


def test_domain_error_exposes_message():
    err = AlreadyLikedError(7, "1.2.3.4")
    assert err.http_status == 400
    assert err.to_response() == {
        "error": "You have already liked this place", "code": "ALREADY_LIKED",
    }


def test_infrastructure_errors_hide_details():
    for err in (
        DatabaseError("password authentication failed for user x", "connect"),
        TranslationUpstreamError("ConnectError: 10.1.2.3 refused"),
        FileStorageError("[Errno 28] No space left on device", "a.png"),
    ):
        assert err.http_status == 500
        assert err.to_response()["error"] == INTERNAL_ERROR_MESSAGE
        assert "failed" in err.message or "error" in err.message


def test_constraint_violation_is_a_database_error():
    err = ConstraintViolationError("unique", "insert like")
    assert isinstance(err, DatabaseError)
    assert err.kind == "unique"
    assert err.code == "CONSTRAINT_VIOLATION"
    assert err.operation == "insert like"


def test_operation_failed_uses_fixed_message():
    err = OperationFailedError("Failed to load places")
    assert err.to_response() == {
        "error": "Failed to load places", "code": "INTERNAL_ERROR",
    }
