import logging
from typing import Protocol

import pytest

from specrepo_core.primitives.exceptions import (
    SpecificationNotFoundError,
    SpecificationRegistrationError,
)
from specrepo_core.specifications.locator import SpecificationLocator


class Customer:
    pass


class Order:
    pass


class ICustomerSpecification(Protocol):
    def with_age(self, age: int) -> "ICustomerSpecification": ...


class CustomerSpecification:
    def with_age(self, age: int) -> "CustomerSpecification":
        return self


class OtherCustomerSpecification(CustomerSpecification):
    pass


def test_register_and_resolve_returns_fresh_instances() -> None:
    locator = SpecificationLocator()
    locator.register(ICustomerSpecification, Customer, CustomerSpecification)

    first = locator.resolve(ICustomerSpecification, Customer)
    second = locator.resolve(ICustomerSpecification, Customer)

    assert isinstance(first, CustomerSpecification)
    assert first is not second


def test_register_without_factory_uses_specification_type() -> None:
    locator = SpecificationLocator()
    locator.register(CustomerSpecification, Customer)

    assert isinstance(locator.resolve(CustomerSpecification, Customer), CustomerSpecification)


def test_register_with_callable_factory() -> None:
    locator = SpecificationLocator()
    shared = CustomerSpecification()
    locator.register(ICustomerSpecification, Customer, lambda: shared)

    assert locator.resolve(ICustomerSpecification, Customer) is shared


def test_resolution_is_keyed_by_entity_type() -> None:
    locator = SpecificationLocator()
    locator.register(ICustomerSpecification, Customer, CustomerSpecification)

    with pytest.raises(SpecificationNotFoundError) as exc_info:
        locator.resolve(ICustomerSpecification, Order)

    assert exc_info.value.specification_type is ICustomerSpecification
    assert exc_info.value.entity_type is Order


def test_unknown_specification_suggests_registered_names() -> None:
    locator = SpecificationLocator()
    locator.register(CustomerSpecification, Customer)

    with pytest.raises(SpecificationNotFoundError) as exc_info:
        locator.resolve(OtherCustomerSpecification, Customer)

    assert "CustomerSpecification" in exc_info.value.suggestions


def test_duplicate_registration_conflict() -> None:
    locator = SpecificationLocator()
    locator.register(ICustomerSpecification, Customer, CustomerSpecification)

    with pytest.raises(SpecificationRegistrationError, match="Duplicate specification"):
        locator.register(ICustomerSpecification, Customer, OtherCustomerSpecification)


def test_reregistering_same_factory_is_noop() -> None:
    locator = SpecificationLocator()
    locator.register(ICustomerSpecification, Customer, CustomerSpecification)
    locator.register(ICustomerSpecification, Customer, CustomerSpecification)

    assert len(locator) == 1


def test_provides_decorator_registers_class() -> None:
    locator = SpecificationLocator()

    @locator.provides(ICustomerSpecification, Customer)
    class DecoratedSpecification(CustomerSpecification):
        pass

    assert locator.is_registered(ICustomerSpecification, Customer)
    assert isinstance(
        locator.resolve(ICustomerSpecification, Customer), DecoratedSpecification
    )


def test_registrations_snapshot_and_clear() -> None:
    locator = SpecificationLocator()
    locator.register(ICustomerSpecification, Customer, CustomerSpecification)

    assert locator.registrations() == {
        "Customer": {"ICustomerSpecification": "CustomerSpecification"}
    }

    locator.clear()

    assert len(locator) == 0
    assert not locator.is_registered(ICustomerSpecification, Customer)


def test_resolve_logs_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    locator = SpecificationLocator()
    locator.register(ICustomerSpecification, Customer, CustomerSpecification)

    with caplog.at_level(logging.DEBUG, logger="specrepo.locator"):
        locator.resolve(ICustomerSpecification, Customer)

    assert "Resolved ICustomerSpecification[Customer] -> CustomerSpecification" in caplog.text
