from __future__ import annotations

import logging
from typing import Any

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

from linkedby6.core.config import Settings, get_settings
from linkedby6.db.neo4j.queries import build_shortest_path_query, shortest_path_via_bolt

logger = logging.getLogger(__name__)

TransientHttpError = (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError)


class GraphServiceError(RuntimeError):
    """The connection path could not be fetched from the graph backend."""


def transient_retry(max_attempts: int, wait_initial_seconds: float = 0.5):
    return retry(
        reraise=True,
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential_jitter(initial=wait_initial_seconds, max=5.0, jitter=wait_initial_seconds),
        retry=retry_if_exception_type(TransientHttpError),
    )


def _error_message(response: httpx.Response) -> str:
    fallback = f"Failed to fetch connection path: {response.status_code}"
    try:
        payload = response.json()
    except ValueError:
        return fallback
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return fallback


class GraphServiceClient:
    """Client for the hosted graph query service (`POST /execute-cypher`)."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = 20.0,
        max_attempts: int = 3,
        wait_initial_seconds: float = 0.5,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.max_attempts = max_attempts
        self.wait_initial_seconds = wait_initial_seconds
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "GraphServiceClient":
        settings = settings or get_settings()
        return cls(
            settings.graph_service_url,
            timeout_seconds=settings.graph_request_timeout_seconds,
            max_attempts=settings.graph_retry_max_attempts,
        )

    def _post(self, query: str) -> httpx.Response:
        with httpx.Client(timeout=self.timeout_seconds, transport=self._transport) as client:
            return client.post(
                f"{self.base_url}/execute-cypher",
                json={"query": query},
                headers={"Content-Type": "application/json"},
            )

    def execute_cypher(self, query: str) -> dict[str, Any]:
        url = f"{self.base_url}/execute-cypher"
        send = transient_retry(self.max_attempts, self.wait_initial_seconds)(self._post)
        try:
            response = send(query)
        except httpx.HTTPError as exc:
            logger.warning("graph_service_transport_failed", extra={"url": url, "error": str(exc)})
            raise GraphServiceError(f"Graph service unreachable: {exc}") from exc

        if response.is_error:
            message = _error_message(response)
            logger.warning(
                "graph_service_request_failed",
                extra={"url": url, "status_code": response.status_code, "error": message},
            )
            raise GraphServiceError(message)

        try:
            payload = response.json()
        except ValueError as exc:
            raise GraphServiceError("Graph service returned invalid JSON") from exc
        if not isinstance(payload, dict):
            logger.error("graph_service_invalid_result_type", extra={"type": type(payload).__name__})
            raise GraphServiceError("Graph service returned an unexpected payload")
        return payload


def fetch_connection_path(
    phone: str,
    business_id: str,
    *,
    settings: Settings | None = None,
    client: GraphServiceClient | None = None,
) -> dict[str, Any]:
    """
    Fetch the shortest connection path between a person and a business.

    Modes:
    - http: post a literal Cypher query to the graph query service (default)
    - bolt: run a parameterized query directly against Neo4j
    """
    settings = settings or get_settings()
    backend = settings.graph_backend.lower().strip()

    if backend == "bolt":
        try:
            result = shortest_path_via_bolt(
                phone,
                business_id,
                max_degrees=settings.max_degrees,
                relationship_types=settings.relationship_types(),
            )
        except Exception as exc:
            logger.exception("graph_bolt_query_failed", extra={"business_id": business_id})
            raise GraphServiceError(f"Neo4j query failed: {exc}") from exc
        if result is None:
            raise GraphServiceError("Neo4j URI not configured")
        return result

    if backend != "http":
        logger.warning("unknown_graph_backend", extra={"backend": backend})

    query = build_shortest_path_query(
        phone,
        business_id,
        max_degrees=settings.max_degrees,
        relationship_types=settings.relationship_types(),
    )
    client = client or GraphServiceClient.from_settings(settings)
    logger.info("graph_service_query_sent", extra={"business_id": business_id})
    return client.execute_cypher(query)
