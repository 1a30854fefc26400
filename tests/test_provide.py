"""Tests for provide() factories and mapped tokens."""

from dataclasses import dataclass

import pytest

from gizmo.container import Container
from gizmo.container_context import ContainerContext
from gizmo.exceptions import GizmoInjectOutsideContainerError, GizmoUnresolvedTokenError
from gizmo.injection import Provision, provide
from gizmo.tokens import Token, token


@dataclass
class Config:
    host: str


def test_provide_outside_container_raises() -> None:
    injection = provide(lambda: "foo")

    with pytest.raises(
        GizmoInjectOutsideContainerError,
        match="Can't provide dependency outside of container",
    ):
        injection()


def test_provide_returns_provision() -> None:
    page: Token[str] = token("Page")

    provision = provide(str.upper, page)

    assert isinstance(provision, Provision)
    assert provision.arguments == (page,)
    assert provision.class_style is False


def test_provide_resolves_tokens_and_maps(global_sub: Container) -> None:
    config_token: Token[Config] = token("Config")
    page_token: Token[str] = token("Page")
    share_url_token: Token[str] = token("ShareUrl")

    global_sub.set(config_token, lambda: Config(host="rubaxa.org"))
    global_sub.set(page_token, lambda: "board")
    global_sub.set(
        share_url_token,
        provide(
            lambda host, page: f"https://{host}/{page}",
            config_token.map(lambda config, _: config.host),
            page_token,
        ),
    )

    assert global_sub.get(share_url_token) == "https://rubaxa.org/board"


def test_map_transform_receives_active_container(root: Container, sub: Container) -> None:
    name_token: Token[str] = token("Name")
    seen_token: Token[tuple[str, Container]] = token("Seen")

    root.set(name_token, lambda: "gizmo")
    sub.set(
        seen_token,
        provide(lambda seen: seen, name_token.map(lambda name, container: (name, container))),
    )

    assert sub.resolve(seen_token) == ("gizmo", sub)


def test_provide_with_class(global_sub: Container) -> None:
    class Foo:
        def __init__(self, fn: object) -> None:
            self.fn = fn

    parse_token: Token[object] = token("Parse")
    foo_token: Token[Foo] = token("Foo")

    global_sub.set(parse_token, lambda: int)
    global_sub.set(foo_token, provide(Foo, parse_token, class_style=True))

    foo = global_sub.get(foo_token)

    assert isinstance(foo, Foo)
    assert foo.fn("123") == 123  # type: ignore[operator]


def test_provide_resolves_arguments_in_order(root: Container) -> None:
    order: list[str] = []
    first: Token[str] = token("First")
    second: Token[str] = token("Second")
    pair: Token[tuple[str, str]] = token("Pair")

    root.set(first, lambda: order.append("first") or "1")
    root.set(second, lambda: order.append("second") or "2")
    root.set(pair, provide(lambda a, b: (a, b), second, first))

    assert root.resolve(pair) == ("2", "1")
    assert order == ["second", "first"]


def test_provide_raises_for_unresolved_argument(root: Container) -> None:
    missing: Token[str] = token("Missing")
    needs_missing: Token[str] = token("NeedsMissing")
    root.set(needs_missing, provide(str, missing))

    with pytest.raises(GizmoUnresolvedTokenError, match='"Missing"'):
        root.resolve(needs_missing)


def test_provide_uses_given_context() -> None:
    context = ContainerContext()
    container = Container(context=context)
    value: Token[int] = token("Value")
    doubled: Token[int] = token("Doubled")

    container.set(value, lambda: 21)
    container.set(doubled, provide(lambda number: number * 2, value, context=context))

    assert container.resolve(doubled) == 42
    with pytest.raises(GizmoInjectOutsideContainerError):
        provide(lambda number: number, value)()
