from __future__ import annotations

import functools
import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeAlias, TypeVar

if TYPE_CHECKING:
    from gizmo.container import Container

T = TypeVar("T")

Factory: TypeAlias = Callable[[], T]
"""A zero-argument callable producing a dependency value."""

CreatedHook: TypeAlias = Callable[[T], Any]
"""Called with a value right after it has been created (and cached)."""

DeletedHook: TypeAlias = Callable[[T], Any]
"""Called with a cached value right after it has been removed."""


class Lifetime(str, Enum):
    """Define where a resolved value is cached."""

    SINGLETON = "singleton"
    """Cached in the most root-ward container of the chain declaring a singleton."""

    SCOPED = "scoped"
    """Cached in the container that requested the value."""

    TRANSIENT = "transient"
    """Never cached; every resolution builds a new value."""


@dataclass(frozen=True, slots=True)
class Descriptor(Generic[T]):
    """Describe how one container produces the value of one token.

    ``lifetime`` is ``None`` when the registrant did not specify one; such
    descriptors behave like singletons.
    """

    factory: Factory[T]
    lifetime: Lifetime | None = None
    on_created: CreatedHook[T] | None = None
    on_deleted: DeletedHook[T] | None = None

    def build(self, owner: Container) -> T:
        """Run the factory with ``owner`` as the active container.

        Plain functions, coroutine functions and bound methods returned by the
        factory are wrapped so that their later calls run with ``owner``
        active as well. Generator functions are returned unchanged.
        """
        context = owner.context
        with context.activate(owner):
            value = self.factory()

        if inspect.isgeneratorfunction(value) or inspect.isasyncgenfunction(value):
            return value
        if inspect.iscoroutinefunction(value):
            return _bind_coroutine_function(value, owner)  # type: ignore[return-value]
        if inspect.isfunction(value) or inspect.ismethod(value):
            return _bind_callable(value, owner)  # type: ignore[return-value]
        return value


def _bind_callable(func: Callable[..., Any], owner: Container) -> Callable[..., Any]:
    @functools.wraps(func)
    def bound(*args: Any, **kwargs: Any) -> Any:
        with owner.context.activate(owner):
            return func(*args, **kwargs)

    return bound


def _bind_coroutine_function(
    func: Callable[..., Awaitable[Any]],
    owner: Container,
) -> Callable[..., Awaitable[Any]]:
    @functools.wraps(func)
    async def bound(*args: Any, **kwargs: Any) -> Any:
        with owner.context.activate(owner):
            return await func(*args, **kwargs)

    return bound
