from __future__ import annotations

import logging

from linkedby6.services.connections.graph_view import (
    NO_CONNECTION_MESSAGE,
    build_connection_graph,
    coerce_degrees,
    degrees_label,
)


def _example_response(degrees=2) -> dict:
    jane = {
        "identity": {"low": 1, "high": 0},
        "labels": ["Person"],
        "properties": {"phone": "555-0000", "full_name": "Jane"},
    }
    bob = {
        "identity": {"low": 2, "high": 0},
        "labels": ["Person"],
        "properties": {"phone": "555-1111", "full_name": "Bob"},
    }
    acme = {
        "identity": {"low": 3, "high": 0},
        "labels": ["Business"],
        "properties": {"business_id": "b1", "name": "Acme"},
    }
    return {
        "records": [
            {
                "path": {
                    "start": jane,
                    "end": acme,
                    "segments": [{"start": jane, "end": bob}, {"start": bob, "end": acme}],
                },
                "degrees": degrees,
            }
        ]
    }


def test_build_connection_graph_orders_example_path() -> None:
    graph = build_connection_graph(_example_response())

    assert graph.status == "connected"
    assert graph.used_fallback is False
    assert graph.degrees == 2
    assert graph.degrees_label == "2 degrees of connection"
    assert [(node.type, node.name, node.phone) for node in graph.nodes] == [
        ("Business", "Acme", None),
        ("Person", "Bob", "555-1111"),
        ("Person", "Jane", "555-0000"),
    ]


def test_empty_records_is_no_connection_not_fallback() -> None:
    graph = build_connection_graph({"records": []})

    assert graph.status == "no_connection"
    assert graph.message == NO_CONNECTION_MESSAGE
    assert graph.nodes == []
    assert graph.used_fallback is False


def test_absent_response_is_no_connection() -> None:
    assert build_connection_graph(None).status == "no_connection"
    assert build_connection_graph({}).status == "no_connection"
    assert build_connection_graph({"records": None}).status == "no_connection"


def test_malformed_record_is_no_connection_and_logged(caplog) -> None:
    caplog.set_level(logging.WARNING)

    missing_path = build_connection_graph({"records": [{"degrees": 2}]})
    zero_degrees = build_connection_graph(_example_response(degrees=0))

    assert missing_path.status == "no_connection"
    assert zero_degrees.status == "no_connection"
    assert missing_path.message == NO_CONNECTION_MESSAGE
    assert any(record.getMessage() == "connection_path_invalid_record" for record in caplog.records)


def test_person_only_path_without_segments_uses_fallback() -> None:
    jane = {"identity": {"low": 1}, "labels": ["Person"], "properties": {"full_name": "Jane", "phone": "1"}}
    bob = {"identity": {"low": 2}, "labels": ["Person"], "properties": {"full_name": "Bob", "phone": "2"}}
    response = {"records": [{"path": {"start": jane, "end": bob, "segments": []}, "degrees": 2}]}

    graph = build_connection_graph(
        response,
        business_name="Acme",
        current_user_full_name="Jane Smith",
        current_user_phone_number="555-0000",
    )

    assert graph.status == "connected"
    assert graph.used_fallback is True
    assert [node.name for node in graph.nodes] == ["Acme", "Contact", "Jane Smith"]
    assert graph.nodes[-1].phone == "555-0000"


def test_fallback_for_long_paths_is_truncated_to_five_nodes() -> None:
    jane = {"identity": {"low": 1}, "labels": ["Person"], "properties": {"full_name": "Jane"}}
    response = {"records": [{"path": {"start": jane, "end": jane, "segments": []}, "degrees": 10}]}

    graph = build_connection_graph(response)

    assert graph.used_fallback is True
    assert len(graph.nodes) == 5
    assert graph.degrees == 10
    assert graph.degrees_label == "10 degrees of connection"


def test_fallback_output_is_deduplicated() -> None:
    jane = {"identity": {"low": 1}, "labels": ["Person"], "properties": {}}
    response = {"records": [{"path": {"start": jane, "end": jane, "segments": []}, "degrees": 3}]}

    graph = build_connection_graph(response, current_user_full_name="Contact")

    assert [node.name for node in graph.nodes] == ["Business", "Contact", "Connection"]


def test_to_dict_serializes_nodes() -> None:
    payload = build_connection_graph(_example_response()).to_dict()

    assert payload["nodes"][0] == {"id": "business-b1", "type": "Business", "name": "Acme", "phone": None}
    assert payload["status"] == "connected"


def test_degrees_helpers() -> None:
    assert degrees_label(1) == "1 degree of connection"
    assert degrees_label(3) == "3 degrees of connection"
    assert coerce_degrees(3) == 3
    assert coerce_degrees({"low": 4, "high": 0}) == 4
    assert coerce_degrees("2") == 2
    assert coerce_degrees(2.0) == 2
    assert coerce_degrees(True) is None
    assert coerce_degrees(None) is None
    assert coerce_degrees("two") is None
