"""Customer repository scenarios against the in-memory backend."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import pytest

from specrepo_core.adapters.memory import InMemoryUnitOfWorkFactory
from specrepo_core.ports.specification import ISpecification
from specrepo_core.ports.unit_of_work import UnitOfWork
from specrepo_core.primitives.exceptions import (
    MultipleResultsError,
    NoResultError,
    SpecificationNotFoundError,
)
from specrepo_core.repository import GenericRepository
from specrepo_core.specifications import QueryableSpecification, SpecificationLocator

DEFAULT_AGE = 30


@dataclass
class Customer:
    name: str = "Peter"
    age: int = DEFAULT_AGE
    id: int | None = None


class ICustomerSpecification(ISpecification[Customer], Protocol):
    def with_age(self, age: int) -> ICustomerSpecification: ...


class CustomerSpecification(QueryableSpecification[Customer]):
    entity_cls = Customer

    def with_age(self, age: int) -> CustomerSpecification:
        return self.filter(lambda c: c.age == age)


class CustomerRepository(GenericRepository[Customer, int]):
    pass


@pytest.fixture
def locator() -> SpecificationLocator:
    locator = SpecificationLocator()
    locator.register(ICustomerSpecification, Customer, CustomerSpecification)
    return locator


@pytest.fixture
def repository_for(locator):
    def create(uow: UnitOfWork) -> CustomerRepository:
        return CustomerRepository(uow, locator)

    return create


def load_customer(factory: InMemoryUnitOfWorkFactory, customer_id: int | None) -> Customer | None:
    with factory.begin_unit_of_work() as uow:
        return uow.get_by_id(Customer, customer_id)


def assert_same_customer(loaded: Customer | None, original: Customer) -> None:
    assert loaded is not None
    assert loaded is not original
    assert loaded.name == original.name
    assert loaded.age == original.age


def test_insert_with_explicit_flush(factory, repository_for) -> None:
    customer = Customer()

    with factory.begin_unit_of_work() as uow:
        repository_for(uow).insert(customer)
        uow.flush()

    assert_same_customer(load_customer(factory, customer.id), customer)


def test_insert_without_flush(factory, repository_for) -> None:
    customer = Customer()

    with factory.begin_unit_of_work() as uow:
        repository_for(uow).insert(customer)

    assert_same_customer(load_customer(factory, customer.id), customer)


def test_insert_without_flush_survives_exception(factory, repository_for) -> None:
    customer = Customer()
    assert customer.id is None

    with pytest.raises(Exception, match="mocked ex"):
        with factory.begin_unit_of_work() as uow:
            repository_for(uow).insert(customer)
            raise Exception("mocked ex")

    assert_same_customer(load_customer(factory, customer.id), customer)


def test_insert_in_transaction(factory, repository_for) -> None:
    customer = Customer()

    with factory.begin_unit_of_work() as uow:
        repository = repository_for(uow)
        with uow.begin_transaction() as transaction:
            repository.insert(customer)
            transaction.commit()

    assert_same_customer(load_customer(factory, customer.id), customer)


def test_insert_in_transaction_rolls_back_on_exception(factory, repository_for) -> None:
    customer = Customer()

    with pytest.raises(Exception, match="mocked ex"):
        with factory.begin_unit_of_work() as uow:
            repository = repository_for(uow)
            with uow.begin_transaction():
                repository.insert(customer)
                uow.flush()
                raise Exception("mocked ex")

    assert customer.id is not None
    assert load_customer(factory, customer.id) is None


def test_specify_with_age_single(factory, repository_for) -> None:
    customer = Customer()
    with factory.begin_unit_of_work() as uow:
        repository_for(uow).insert(customer)

    with factory.begin_unit_of_work() as uow:
        found = (
            repository_for(uow)
            .specify(ICustomerSpecification)
            .with_age(DEFAULT_AGE)
            .to_result()
            .single()
        )

    assert_same_customer(found, customer)


def test_specify_single_cardinality(factory, repository_for) -> None:
    with factory.begin_unit_of_work() as uow:
        repository = repository_for(uow)
        repository.insert(Customer("Anna", 25))
        repository.insert(Customer("Ben", 25))

    with factory.begin_unit_of_work() as uow:
        repository = repository_for(uow)
        with pytest.raises(NoResultError):
            repository.specify(ICustomerSpecification).with_age(99).to_result().single()
        with pytest.raises(MultipleResultsError):
            repository.specify(ICustomerSpecification).with_age(25).to_result().single()


def test_specify_take(factory, repository_for) -> None:
    with factory.begin_unit_of_work() as uow:
        repository = repository_for(uow)
        for name in ("Anna", "Ben", "Cleo"):
            repository.insert(Customer(name, 40))

    with factory.begin_unit_of_work() as uow:
        result = repository_for(uow).specify(ICustomerSpecification).with_age(40).to_result()

        assert len(result.take(2).to_list()) == 2


def test_specify_unknown_specification(factory) -> None:
    with factory.begin_unit_of_work() as uow:
        repository = CustomerRepository(uow, SpecificationLocator())

        with pytest.raises(SpecificationNotFoundError):
            repository.specify(ICustomerSpecification)


def test_result_reexecutes(factory, repository_for) -> None:
    with factory.begin_unit_of_work() as uow:
        repository_for(uow).insert(Customer("Anna", 50))

    with factory.begin_unit_of_work() as uow:
        repository = repository_for(uow)
        result = repository.specify(ICustomerSpecification).with_age(50).to_result()
        assert len(result.to_list()) == 1

        repository.insert(Customer("Ben", 50))
        uow.flush()

        assert len(result.to_list()) == 2


def test_get_all_excludes_unflushed_insert(factory, repository_for) -> None:
    with factory.begin_unit_of_work() as uow:
        repository = repository_for(uow)
        repository.insert(Customer())

        assert repository.get_all() == []


def test_get_all_includes_insert_with_autoflush(autoflush_factory, repository_for) -> None:
    with autoflush_factory.begin_unit_of_work() as uow:
        repository = repository_for(uow)
        customer = Customer()
        repository.insert(customer)

        assert repository.get_all() == [customer]


def test_update_and_delete_through_repository(factory, repository_for) -> None:
    customer = Customer("Anna", 20)
    with factory.begin_unit_of_work() as uow:
        repository_for(uow).insert(customer)

    with factory.begin_unit_of_work() as uow:
        repository = repository_for(uow)
        loaded = repository.get_by_id(customer.id)
        loaded.age = 21
        repository.update(loaded)

    assert load_customer(factory, customer.id).age == 21

    with factory.begin_unit_of_work() as uow:
        repository = repository_for(uow)
        repository.delete(repository.get_by_id(customer.id))

    assert load_customer(factory, customer.id) is None
