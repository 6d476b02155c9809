from __future__ import annotations

import pytest

from linkedby6.db.neo4j.graph_service import GraphServiceError
from linkedby6.services.connections.graph_view import NO_CONNECTION_MESSAGE, SEARCH_UNAVAILABLE_MESSAGE
from linkedby6.services.connections.tracker import ConnectionPathTracker, get_tracker, reset_trackers

FOUND = {"records": [{"path": {"start": {}, "end": {}, "segments": []}, "degrees": 1}]}


def test_request_stores_found_response() -> None:
    calls: list[tuple[str, str]] = []

    def fetcher(phone: str, business_id: str) -> dict:
        calls.append((phone, business_id))
        return FOUND

    tracker = ConnectionPathTracker(fetcher)
    state = tracker.request("b1", "555-0000")

    assert calls == [("555-0000", "b1")]
    assert state.found is True
    assert state.loading is False
    assert state.response is FOUND
    assert tracker.get("b1") == state


def test_request_without_records_is_no_connection() -> None:
    tracker = ConnectionPathTracker(lambda *_args: {"records": []})

    state = tracker.request("b1", "555-0000")

    assert state.found is False
    assert state.message == NO_CONNECTION_MESSAGE


def test_request_without_phone_is_unavailable_and_skips_fetch() -> None:
    def fetcher(*_args) -> dict:
        raise AssertionError("fetch should not run")

    tracker = ConnectionPathTracker(fetcher)

    state = tracker.request("b1", None)

    assert state.found is False
    assert state.message == SEARCH_UNAVAILABLE_MESSAGE


def test_fetch_failure_becomes_unavailable_state() -> None:
    def fetcher(*_args) -> dict:
        raise GraphServiceError("boom")

    tracker = ConnectionPathTracker(fetcher)

    state = tracker.request("b1", "555-0000")

    assert state.found is False
    assert state.loading is False
    assert state.message == SEARCH_UNAVAILABLE_MESSAGE


def test_unexpected_error_clears_loading_and_propagates() -> None:
    def fetcher(*_args) -> dict:
        raise KeyError("bad")

    tracker = ConnectionPathTracker(fetcher)

    with pytest.raises(KeyError):
        tracker.request("b1", "555-0000")

    assert tracker.is_loading("b1") is False


def test_unexpected_error_leaves_unavailable_state_and_retry_recovers() -> None:
    calls: list[str] = []

    def fetcher(phone: str, business_id: str) -> dict:
        calls.append(business_id)
        if len(calls) == 1:
            raise ValueError("bad graph url")
        return FOUND

    tracker = ConnectionPathTracker(fetcher)

    with pytest.raises(ValueError):
        tracker.ensure("b1", "555-0000")

    stored = tracker.ensure("b1", "555-0000")
    assert calls == ["b1"]
    assert stored.loading is False
    assert stored.found is False
    assert stored.message == SEARCH_UNAVAILABLE_MESSAGE

    retried = tracker.retry("b1", "555-0000")
    assert calls == ["b1", "b1"]
    assert retried.found is True


def test_business_already_loading_is_not_fetched_again() -> None:
    calls: list[str] = []
    nested_states = []

    def fetcher(phone: str, business_id: str) -> dict:
        calls.append(business_id)
        nested_states.append(tracker.request(business_id, phone))
        return FOUND

    tracker = ConnectionPathTracker(fetcher)
    state = tracker.request("b1", "555-0000")

    assert calls == ["b1"]
    assert nested_states[0].loading is True
    assert state.found is True


def test_ensure_fetches_once_and_retry_refetches() -> None:
    responses = iter([{"records": []}, FOUND])
    calls: list[str] = []

    def fetcher(phone: str, business_id: str) -> dict:
        calls.append(business_id)
        return next(responses)

    tracker = ConnectionPathTracker(fetcher)

    first = tracker.ensure("b1", "555-0000")
    second = tracker.ensure("b1", "555-0000")
    retried = tracker.retry("b1", "555-0000")

    assert calls == ["b1", "b1"]
    assert first.found is False
    assert second is first
    assert retried.found is True
    assert tracker.snapshot() == {"b1": retried}


def test_get_tracker_is_per_user() -> None:
    reset_trackers()
    try:
        assert get_tracker("u1") is get_tracker("u1")
        assert get_tracker("u1") is not get_tracker("u2")
    finally:
        reset_trackers()
