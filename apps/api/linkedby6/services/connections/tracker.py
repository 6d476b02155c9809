from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from linkedby6.db.neo4j.graph_service import GraphServiceError, fetch_connection_path
from linkedby6.services.connections.graph_view import (
    NO_CONNECTION_MESSAGE,
    SEARCH_UNAVAILABLE_MESSAGE,
    has_records,
)

logger = logging.getLogger(__name__)

PathFetcher = Callable[[str, str], dict[str, Any]]


@dataclass(frozen=True)
class ConnectionPathState:
    business_id: str
    loading: bool = False
    found: bool = False
    message: str | None = None
    response: dict[str, Any] | None = None


class ConnectionPathTracker:
    """Per-business connection path state for one user.

    A business id that is already loading is never fetched twice; results are
    replaced wholesale on refetch.
    """

    def __init__(self, fetcher: PathFetcher | None = None) -> None:
        self._fetcher = fetcher
        self._states: dict[str, ConnectionPathState] = {}
        self._lock = threading.Lock()

    def get(self, business_id: str) -> ConnectionPathState | None:
        with self._lock:
            return self._states.get(business_id)

    def snapshot(self) -> dict[str, ConnectionPathState]:
        with self._lock:
            return dict(self._states)

    def is_loading(self, business_id: str) -> bool:
        state = self.get(business_id)
        return bool(state and state.loading)

    def _store(self, state: ConnectionPathState) -> ConnectionPathState:
        with self._lock:
            self._states[state.business_id] = state
        return state

    def request(self, business_id: str, phone: str | None) -> ConnectionPathState:
        if not phone or not business_id:
            logger.warning(
                "connection_path_missing_inputs",
                extra={"business_id": business_id, "has_phone": bool(phone)},
            )
            return self._store(
                ConnectionPathState(business_id=business_id, found=False, message=SEARCH_UNAVAILABLE_MESSAGE)
            )

        with self._lock:
            current = self._states.get(business_id)
            if current is not None and current.loading:
                return current
            loading = (
                replace(current, loading=True)
                if current is not None
                else ConnectionPathState(business_id=business_id, loading=True)
            )
            self._states[business_id] = loading

        try:
            fetcher = self._fetcher or fetch_connection_path
            response = fetcher(phone, business_id)
        except GraphServiceError as exc:
            logger.warning(
                "connection_path_fetch_failed",
                extra={"business_id": business_id, "error": str(exc)},
            )
            return self._store(
                ConnectionPathState(business_id=business_id, found=False, message=SEARCH_UNAVAILABLE_MESSAGE)
            )
        except Exception:
            logger.exception("connection_path_fetch_crashed", extra={"business_id": business_id})
            self._store(
                ConnectionPathState(business_id=business_id, found=False, message=SEARCH_UNAVAILABLE_MESSAGE)
            )
            raise

        if has_records(response):
            logger.info("connection_path_found", extra={"business_id": business_id})
            return self._store(ConnectionPathState(business_id=business_id, found=True, response=response))

        logger.info("connection_path_not_found", extra={"business_id": business_id})
        return self._store(ConnectionPathState(business_id=business_id, found=False, message=NO_CONNECTION_MESSAGE))

    def ensure(self, business_id: str, phone: str | None) -> ConnectionPathState:
        """Fetch only if nothing is stored or in flight for this business."""
        existing = self.get(business_id)
        if existing is not None:
            return existing
        return self.request(business_id, phone)

    def retry(self, business_id: str, phone: str | None) -> ConnectionPathState:
        with self._lock:
            current = self._states.get(business_id)
            if current is not None and current.loading:
                return current
            self._states.pop(business_id, None)
        return self.request(business_id, phone)


_trackers: dict[str, ConnectionPathTracker] = {}
_trackers_lock = threading.Lock()


def get_tracker(user_id: str) -> ConnectionPathTracker:
    with _trackers_lock:
        tracker = _trackers.get(user_id)
        if tracker is None:
            tracker = ConnectionPathTracker()
            _trackers[user_id] = tracker
        return tracker


def reset_trackers() -> None:
    with _trackers_lock:
        _trackers.clear()
