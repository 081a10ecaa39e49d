from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

from infragraph.domain.model import (
    Registry,
    entity_constraints,
    entity_id,
    format_timestamp,
    index_of_entity,
)
from tests.helpers.registry import FIXED_NOW, base_document, make_entity


def test_document_round_trip_keeps_unknown_keys_and_order() -> None:
    document = base_document()

    registry = Registry.from_document(document)

    assert registry.to_document() == document
    assert list(registry.to_document()) == ["version", "last_updated", "entities", "relationships"]


def test_from_document_copies_input() -> None:
    document = base_document()
    registry = Registry.from_document(document)

    document["entities"][0]["name"] = "mutated"

    stored = registry.find("db-oracle-sws")
    assert stored is not None
    assert stored["name"] == "Oracle SWS/Silver"


def test_evolve_returns_independent_copy() -> None:
    registry = Registry.from_document(base_document())

    evolved = registry.evolve(
        entities=[*registry.entities, make_entity("x1")],
        touched_at=FIXED_NOW,
    )

    assert len(registry) == 2
    assert len(evolved) == 3
    assert evolved.last_updated == "2026-03-01T12:00:00Z"
    assert registry.last_updated == "2026-02-25T00:00:00Z"
    evolved.extra["relationships"].append({"from": "a", "to": "b"})
    assert registry.extra["relationships"] == []


def test_evolve_without_timestamp_keeps_last_updated() -> None:
    registry = Registry.from_document(base_document())

    assert registry.evolve().last_updated == "2026-02-25T00:00:00Z"


def test_lookup_ignores_records_without_id() -> None:
    registry = Registry.from_document(base_document())

    assert registry.ids() == ["db-oracle-sws"]
    assert registry.index_of("db-oracle-sws") == 0
    assert registry.find("dashboard") is None
    assert registry.count() == 2
    assert registry.count("infra") == 1
    assert registry.count("forge-project") == 1


def test_index_of_entity_matches_only_usable_ids() -> None:
    entities = [{"id": 7}, {"name": "no id"}, {"id": ""}, make_entity("7"), make_entity("x1")]

    assert index_of_entity(entities, "7") == 3
    assert index_of_entity(entities, "x1") == 4
    assert index_of_entity(entities, "") is None
    assert index_of_entity([], "x1") is None


def test_entity_accessors() -> None:
    assert entity_id({"id": ""}) is None
    assert entity_id({"id": 7}) is None
    assert entity_id(make_entity("x1")) == "x1"
    assert entity_constraints(make_entity("x1")) == []
    assert entity_constraints(make_entity("x1", constraints=None)) == []


def test_format_timestamp_normalises_to_utc() -> None:
    plus_two = timezone(timedelta(hours=2))

    assert format_timestamp(datetime(2026, 3, 1, 14, 0, 30, 999, tzinfo=plus_two)) == (
        "2026-03-01T12:00:30Z"
    )
    assert format_timestamp(datetime(2026, 3, 1, 12, 0)) == "2026-03-01T12:00:00Z"
    assert format_timestamp(datetime(2026, 3, 1, 12, 0, tzinfo=UTC)) == "2026-03-01T12:00:00Z"
