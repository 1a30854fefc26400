"""Tests for on_created and on_deleted hooks."""

from unittest.mock import Mock

import pytest

from gizmo.container import Container
from gizmo.providers import Lifetime
from gizmo.tokens import token


@pytest.fixture()
def container() -> Container:
    return Container()


@pytest.mark.parametrize("lifetime", [Lifetime.SINGLETON, Lifetime.SCOPED, Lifetime.TRANSIENT])
def test_on_created_is_called_with_value(container: Container, lifetime: Lifetime) -> None:
    on_created = Mock()
    hooked = token(f"{lifetime.value}Token", lambda: "default")

    container.set(hooked, lambda: f"{lifetime.value}Value", lifetime=lifetime, on_created=on_created)

    assert container.resolve(hooked) == f"{lifetime.value}Value"
    on_created.assert_called_once_with(f"{lifetime.value}Value")


@pytest.mark.parametrize("lifetime", [Lifetime.SINGLETON, Lifetime.SCOPED])
def test_on_deleted_is_called_for_cached_value(container: Container, lifetime: Lifetime) -> None:
    on_deleted = Mock()
    hooked = token(f"{lifetime.value}Token")
    container.set(hooked, lambda: f"{lifetime.value}Value", lifetime=lifetime, on_deleted=on_deleted)

    container.resolve(hooked)
    container.delete(hooked)

    on_deleted.assert_called_once_with(f"{lifetime.value}Value")


def test_on_deleted_is_not_called_for_transient(container: Container) -> None:
    on_deleted = Mock()
    hooked = token("transientToken")
    container.set(hooked, lambda: "transientValue", lifetime=Lifetime.TRANSIENT, on_deleted=on_deleted)

    container.resolve(hooked)
    container.delete(hooked)

    on_deleted.assert_not_called()


def test_on_deleted_is_not_called_without_cached_value(container: Container) -> None:
    on_deleted = Mock()
    hooked = token("neverResolved")
    container.set(hooked, lambda: "value", on_deleted=on_deleted)

    container.delete(hooked)

    on_deleted.assert_not_called()


def test_on_created_for_singleton_in_sub_container(container: Container) -> None:
    on_created = Mock()
    hooked = token("singletonToken")
    container.set(hooked, lambda: "singletonValue", lifetime=Lifetime.SINGLETON, on_created=on_created)

    assert container.sub().resolve(hooked) == "singletonValue"
    on_created.assert_called_once_with("singletonValue")


def test_on_deleted_for_singleton_resolved_in_sub_container(container: Container) -> None:
    on_deleted = Mock()
    hooked = token("singletonToken")
    container.set(hooked, lambda: "singletonValue", lifetime=Lifetime.SINGLETON, on_deleted=on_deleted)

    sub = container.sub()
    sub.resolve(hooked)
    sub.delete(hooked)
    on_deleted.assert_not_called()

    container.delete(hooked)
    on_deleted.assert_called_once_with("singletonValue")


def test_on_created_for_scoped_in_sub_container(container: Container) -> None:
    on_created = Mock()
    hooked = token("scopedToken")
    container.set(hooked, lambda: "scopedValue", lifetime=Lifetime.SCOPED, on_created=on_created)

    assert container.sub().resolve(hooked) == "scopedValue"
    on_created.assert_called_once_with("scopedValue")


def test_on_deleted_for_scoped_in_sub_container(container: Container) -> None:
    on_deleted = Mock()
    hooked = token("scopedToken")
    container.set(hooked, lambda: "scopedValue", lifetime=Lifetime.SCOPED, on_deleted=on_deleted)

    sub = container.sub()
    sub.resolve(hooked)
    sub.delete(hooked)

    on_deleted.assert_called_once_with("scopedValue")
    assert container.has(hooked)


def test_clear_fires_on_deleted_for_every_cached_value(container: Container) -> None:
    on_deleted = Mock()
    first = token("first")
    second = token("second")
    untouched = token("untouched")
    container.set(first, lambda: 1, on_deleted=on_deleted)
    container.set(second, lambda: 2, lifetime=Lifetime.SCOPED, on_deleted=on_deleted)
    container.set(untouched, lambda: 3, on_deleted=on_deleted)
    container.resolve(first)
    container.resolve(second)

    container.clear()

    assert sorted(call.args[0] for call in on_deleted.call_args_list) == [1, 2]
    assert not container.has(first)
    assert not container.has(untouched)


def test_on_created_runs_before_resolve_returns(container: Container) -> None:
    hooked = token("hooked")
    seen: list[object] = []
    container.set(hooked, object, on_created=lambda value: seen.append(container.get(hooked)))

    value = container.resolve(hooked)

    assert seen == [value]
