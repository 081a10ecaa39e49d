from __future__ import annotations

from datetime import timedelta

import pytest

from infragraph.domain.errors import InvalidCandidateError
from infragraph.domain.merge import Appended, merge_candidate
from infragraph.domain.model import Registry
from infragraph.domain.seeding import overlay_seed, seed_registry
from infragraph.domain.seeds import DEFAULT_SEED_ENTITIES
from tests.helpers.registry import (
    FIXED_NOW,
    FIXED_NOW_TEXT,
    READ_ONLY,
    base_document,
    make_entity,
    make_registry,
)

SEED_IDS = [seed["id"] for seed in DEFAULT_SEED_ENTITIES]


def test_seeding_empty_registry_appends_every_seed() -> None:
    result = seed_registry(make_registry(), DEFAULT_SEED_ENTITIES, now=FIXED_NOW)

    assert result.appended == len(DEFAULT_SEED_ENTITIES)
    assert result.updated == 0
    assert result.registry.ids() == SEED_IDS
    assert result.total == 13
    assert result.infra == 13
    assert result.registry.last_updated == FIXED_NOW_TEXT


def test_seed_overwrites_fields_but_keeps_existing_constraints() -> None:
    stored = make_entity("db1", name="Old", host="old-host")
    stored["constraints"] = [{"type": "access", "value": READ_ONLY}]
    seed = make_entity("db1", name="New", port=1521)

    result = seed_registry(make_registry(stored), [seed], now=FIXED_NOW)

    merged = result.registry.find("db1")
    assert merged == {
        "id": "db1",
        "type": "infra",
        "kind": "service",
        "name": "New",
        "port": 1521,
        "constraints": [{"type": "access", "value": READ_ONLY}],
    }
    assert result.updated == 1


def test_seed_constraints_union_with_existing_and_existing_value_wins() -> None:
    stored = make_entity("db1", constraints=[{"type": "access", "value": READ_ONLY}])
    seed = make_entity(
        "db1",
        constraints=[
            {"type": "access", "value": "READ WRITE"},
            {"type": "network", "value": "VPN only"},
        ],
    )

    merged = overlay_seed(stored, seed)

    assert merged["constraints"] == [
        {"type": "access", "value": READ_ONLY},
        {"type": "network", "value": "VPN only"},
    ]


def test_seed_constraints_used_as_is_when_existing_has_none() -> None:
    seed = make_entity("db1", constraints=[{"type": "access", "value": "READ WRITE"}])

    merged = overlay_seed(make_entity("db1"), seed)

    assert merged["constraints"] == [{"type": "access", "value": "READ WRITE"}]


def test_seeding_is_idempotent() -> None:
    registry = Registry.from_document(base_document())

    first = seed_registry(registry, DEFAULT_SEED_ENTITIES, now=FIXED_NOW)
    second = seed_registry(
        first.registry,
        DEFAULT_SEED_ENTITIES,
        now=FIXED_NOW + timedelta(hours=1),
    )

    assert first.total == second.total == 14
    assert first.registry.entities == second.registry.entities
    assert second.appended == 0


def test_seeding_preserves_forge_projects_and_harvested_entities() -> None:
    registry = Registry.from_document(base_document())
    harvested = merge_candidate(registry, make_entity("ext-new-service"), now=FIXED_NOW)
    assert isinstance(harvested, Appended)

    result = seed_registry(harvested.registry, DEFAULT_SEED_ENTITIES, now=FIXED_NOW)

    assert result.registry.find("ext-new-service") == make_entity("ext-new-service")
    assert result.registry.count("forge-project") == 1
    assert result.registry.extra == {"version": "1.0", "relationships": []}


def test_seeding_keeps_existing_positions_and_appends_new_in_order() -> None:
    registry = make_registry(make_entity("b"), make_entity("a"))
    seeds = [make_entity("c"), make_entity("a", name="updated"), make_entity("d")]

    result = seed_registry(registry, seeds, now=FIXED_NOW)

    assert result.registry.ids() == ["b", "a", "c", "d"]
    updated = result.registry.find("a")
    assert updated is not None
    assert updated["name"] == "updated"


def test_later_seed_with_same_id_folds_over_earlier_one() -> None:
    seeds = [
        make_entity("a", constraints=[{"type": "access", "value": READ_ONLY}]),
        make_entity("a", name="second"),
    ]

    result = seed_registry(make_registry(), seeds, now=FIXED_NOW)

    assert result.registry.ids() == ["a"]
    stored = result.registry.find("a")
    assert stored is not None
    assert stored["name"] == "second"
    assert stored["constraints"] == [{"type": "access", "value": READ_ONLY}]


def test_seed_without_id_fails_before_any_change() -> None:
    registry = make_registry(make_entity("a"))

    with pytest.raises(InvalidCandidateError):
        seed_registry(registry, [make_entity("b"), {"name": "nameless"}], now=FIXED_NOW)

    assert registry.ids() == ["a"]


def test_oracle_seed_carries_read_only_constraint() -> None:
    oracle = next(seed for seed in DEFAULT_SEED_ENTITIES if seed["id"] == "db-oracle-sws")

    assert oracle["constraints"][0]["type"] == "access"
    assert "READ ONLY" in oracle["constraints"][0]["value"]
    assert {seed["kind"] for seed in DEFAULT_SEED_ENTITIES} == {
        "database",
        "service",
        "k8s_resource",
        "pipeline_stage",
    }


def test_seed_with_malformed_fields_fails_before_any_change() -> None:
    registry = make_registry(make_entity("a"))
    seeds = [
        make_entity("b"),
        make_entity(
            "c",
            constraints=[{"type": "access", "value": "RO"}, {"type": "access", "value": "RW"}],
        ),
    ]

    with pytest.raises(InvalidCandidateError):
        seed_registry(registry, seeds, now=FIXED_NOW)

    with pytest.raises(InvalidCandidateError):
        seed_registry(registry, [make_entity("b", kind=7)], now=FIXED_NOW)

    assert registry.ids() == ["a"]
