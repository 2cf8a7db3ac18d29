from dataclasses import dataclass

import pytest

from specrepo_core.adapters.memory import EnumerableQueryable
from specrepo_core.ports.queryable import IQueryable
from specrepo_core.primitives.exceptions import InvalidArgumentError


@dataclass
class Person:
    name: str
    age: int


PEOPLE = [Person("carol", 41), Person("alice", 30), Person("bob", 30), Person("dan", 17)]


def test_satisfies_protocol() -> None:
    assert isinstance(EnumerableQueryable(lambda: PEOPLE), IQueryable)


def test_where_filters() -> None:
    queryable = EnumerableQueryable(lambda: PEOPLE).where(lambda p: p.age == 30)

    assert [p.name for p in queryable] == ["alice", "bob"]


def test_order_by_and_descending() -> None:
    source = EnumerableQueryable(lambda: PEOPLE)

    assert [p.name for p in source.order_by(lambda p: p.name)] == [
        "alice",
        "bob",
        "carol",
        "dan",
    ]
    assert [p.age for p in source.order_by(lambda p: p.age, descending=True)] == [
        41,
        30,
        30,
        17,
    ]


def test_take_limits_and_keeps_smallest_bound() -> None:
    source = EnumerableQueryable(lambda: PEOPLE)

    assert len(source.take(2).to_list()) == 2
    assert len(source.take(2).take(10).to_list()) == 2
    assert len(source.take(10).take(1).to_list()) == 1
    assert source.take(0).to_list() == []


def test_take_rejects_negative_count() -> None:
    with pytest.raises(InvalidArgumentError):
        EnumerableQueryable(lambda: PEOPLE).take(-1)


def test_narrowing_returns_new_object_and_leaves_original() -> None:
    original = EnumerableQueryable(lambda: PEOPLE)
    narrowed = original.where(lambda p: p.age > 18).take(1)

    assert narrowed is not original
    assert len(original.to_list()) == len(PEOPLE)
    assert len(narrowed.to_list()) == 1


def test_evaluation_is_deferred_and_repeated() -> None:
    calls = 0
    rows: list[Person] = []

    def source() -> list[Person]:
        nonlocal calls
        calls += 1
        return list(rows)

    queryable = EnumerableQueryable(source).where(lambda p: p.age >= 18)
    assert calls == 0

    assert queryable.to_list() == []
    rows.append(Person("erin", 22))
    assert [p.name for p in queryable.to_list()] == ["erin"]
    assert calls == 2


def test_filter_after_take_applies_to_taken_items() -> None:
    queryable = (
        EnumerableQueryable(lambda: PEOPLE)
        .take(2)
        .where(lambda p: p.name.startswith("a"))
    )

    assert [p.name for p in queryable] == ["alice"]
