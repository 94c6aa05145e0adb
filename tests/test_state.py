"""Tests for error message extraction and the request state objects."""

import pytest

from haulbase.core.errors import (
    DEFAULT_ERROR_MESSAGE,
    ApiError,
    extract_error_message,
)
from haulbase.state import ApiRequest, ApiState, Mutation, unwrap_envelope


def _fail(message="Server exploded", payload=None):
    def call(*args, **kwargs):
        raise ApiError(message, status_code=500, payload=payload)

    return call


def test_extract_error_message_prefers_body_error_message():
    error = ApiError("Bad Request", 400, {"error": {"message": "Reference number taken"}, "message": "x"})
    assert extract_error_message(error) == "Reference number taken"


def test_extract_error_message_falls_back_in_order():
    assert extract_error_message(ApiError("Bad Request", 400, {"message": "Top-level"})) == "Top-level"
    assert extract_error_message(ApiError("Bad Request", 400, "<html>")) == "Bad Request"
    assert extract_error_message(ValueError("boom")) == "boom"
    assert extract_error_message(RuntimeError()) == DEFAULT_ERROR_MESSAGE


def test_unwrap_envelope():
    assert unwrap_envelope({"success": True, "data": [1, 2]}) == [1, 2]
    assert unwrap_envelope({"success": True, "data": None}) is None
    assert unwrap_envelope([1, 2]) == [1, 2]
    assert unwrap_envelope({"id": "x"}) == {"id": "x"}


def test_execute_records_error_and_reraises():
    request = ApiRequest()

    with pytest.raises(ApiError):
        request.execute(_fail(payload={"error": {"message": "Load not found"}}))

    assert request.error == "Load not found"
    assert request.loading is False

    assert request.execute(lambda: {"data": "ok"}) == "ok"
    assert request.error is None


def test_detached_request_stops_recording():
    request = ApiRequest()
    request.detach()

    with pytest.raises(ApiError):
        request.execute(_fail())

    assert request.error is None
    assert request.attached is False


def test_fetch_stores_data_and_refetch_repeats_arguments():
    calls = []

    def fetcher(filters=None):
        calls.append(filters)
        return {"success": True, "data": [{"id": len(calls)}]}

    state = ApiState(fetcher, initial_data=[])
    assert state.fetch({"status": "booked"}) == [{"id": 1}]
    assert state.data == [{"id": 1}]

    state.refetch()
    assert calls == [{"status": "booked"}, {"status": "booked"}]
    assert state.data == [{"id": 2}]


def test_fetch_failure_returns_none_and_keeps_data():
    state = ApiState(lambda: [{"id": "a"}], initial_data=[])
    state.fetch()

    state.fetcher = _fail("Gateway timeout")
    assert state.fetch() is None
    assert state.error == "Gateway timeout"
    assert state.data == [{"id": "a"}]


def test_fetch_captures_errors_from_malformed_responses():
    state = ApiState(lambda: {"data": None}["rows"], initial_data=[])

    assert state.fetch() is None
    assert state.error == "'rows'"
    assert state.loading is False
    assert state.data == []


def test_fetch_on_detached_state_keeps_old_data():
    state = ApiState(lambda: ["fresh"], initial_data=["stale"])
    state.detach()

    assert state.fetch() == ["fresh"]
    assert state.data == ["stale"]


def test_set_data_accepts_value_or_updater_and_clear_resets():
    state = ApiState(lambda: None, initial_data=[])
    state.set_data([1])
    state.set_data(lambda current: current + [2])
    assert state.data == [1, 2]

    state.error = "old"
    state.clear()
    assert state.data == []
    assert state.error is None


def test_mutation_callbacks():
    successes, failures = [], []
    mutation = Mutation()

    result = mutation.mutate(lambda: {"data": {"id": "e1"}}, on_success=successes.append)
    assert result == {"id": "e1"}
    assert successes == [{"id": "e1"}]

    with pytest.raises(ApiError):
        mutation.mutate(_fail("Rejected"), on_error=failures.append)
    assert isinstance(failures[0], ApiError)
    assert mutation.error == "Rejected"
