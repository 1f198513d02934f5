"""
Tests for ``CalculationRepository`` against an in-memory collection.
"""

from __future__ import annotations

import asyncio
from datetime import timezone

import pytest
from bson import ObjectId

from calculator_api.app.core.errors import NotFound
from calculator_api.app.services.calculation_service import CalculationRepository


@pytest.fixture
def repo(collection) -> CalculationRepository:
    return CalculationRepository(collection)


def run(coro):
    return asyncio.run(coro)


def test_create_returns_persisted_record(repo, collection):
    created = run(repo.create(1.5, 2.0, 3.5))

    assert ObjectId.is_valid(created.id)
    assert created.sum == 3.5
    assert created.created_at == created.updated_at
    assert created.created_at.tzinfo is not None
    stored = run(collection.find_one({"_id": ObjectId(created.id)}))
    assert stored["number1"] == 1.5
    assert stored["number2"] == 2.0
    assert stored["sum"] == 3.5


def test_create_matches_get(repo):
    created = run(repo.create(4, 5, 9))

    assert run(repo.get_by_id(created.id)) == created


def test_created_at_is_utc(repo):
    created = run(repo.create(0, 0, 0))

    assert created.created_at.utcoffset() == timezone.utc.utcoffset(None)


def test_list_recent_empty(repo):
    assert run(repo.list_recent()) == []


def test_list_recent_orders_newest_first_and_limits(repo):
    created = [run(repo.create(n, n, 2 * n)) for n in range(4)]

    recent = run(repo.list_recent(3))

    assert [c.id for c in recent] == [created[3].id, created[2].id, created[1].id]


def test_list_recent_defaults_to_ten(repo):
    for n in range(11):
        run(repo.create(n, 0, n))

    assert len(run(repo.list_recent())) == 10


def test_list_recent_uses_configured_default(collection):
    repo = CalculationRepository(collection, default_limit=3)
    for n in range(5):
        run(repo.create(n, 0, n))

    assert len(run(repo.list_recent())) == 3
    assert len(run(repo.list_recent(4))) == 4


@pytest.mark.parametrize("calculation_id", [str(ObjectId()), "nope", ""])
def test_get_by_id_not_found(repo, calculation_id):
    with pytest.raises(NotFound) as exc_info:
        run(repo.get_by_id(calculation_id))

    assert exc_info.value.message == "Calculation not found"


def test_delete_by_id_returns_deleted_record(repo):
    created = run(repo.create(2, 2, 4))

    deleted = run(repo.delete_by_id(created.id))

    assert deleted == created
    with pytest.raises(NotFound):
        run(repo.get_by_id(created.id))
    with pytest.raises(NotFound):
        run(repo.delete_by_id(created.id))


def test_delete_by_id_leaves_other_records(repo):
    keep = run(repo.create(1, 1, 2))
    drop = run(repo.create(3, 3, 6))

    run(repo.delete_by_id(drop.id))

    assert [c.id for c in run(repo.list_recent())] == [keep.id]
