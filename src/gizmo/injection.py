from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeAlias, TypeVar, overload

from gizmo.container_context import ContainerContext, container_context
from gizmo.exceptions import GizmoInjectOutsideContainerError
from gizmo.tokens import Token, TokenMap

if TYPE_CHECKING:
    from gizmo.container import Container

T = TypeVar("T")
C = TypeVar("C", bound=type[Any])

ProvideArgument: TypeAlias = Token[Any] | TokenMap[Any]
"""A token, or a mapped token, whose value is passed to a provided callable."""

INJECTABLE_BINDING_ATTR = "__gizmo_injectable__"

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Provision(Generic[T]):
    """Zero-argument factory calling ``dependency`` with resolved arguments.

    Arguments are resolved in order against the active container of
    ``context``. ``class_style`` marks ``dependency`` as a class: injectable
    classes are then bound to the active container before construction.
    """

    dependency: Callable[..., T]
    arguments: tuple[ProvideArgument, ...]
    class_style: bool
    context: ContainerContext

    def __call__(self) -> T:
        container = self.context.peek()
        if container is None:
            msg = "Can't provide dependency outside of container"
            raise GizmoInjectOutsideContainerError(msg)

        values = [self._resolve_argument(argument, container) for argument in self.arguments]

        if self.class_style:
            binding = get_injectable_binding(self.dependency)
            if binding is not None:
                return binding.bind(container)(*values)
        return self.dependency(*values)

    @staticmethod
    def _resolve_argument(argument: ProvideArgument, container: Container) -> Any:
        if isinstance(argument, TokenMap):
            return argument.apply(container)
        return container.resolve(argument)


def provide(
    dependency: Callable[..., T],
    *arguments: ProvideArgument,
    class_style: bool = False,
    context: ContainerContext | None = None,
) -> Provision[T]:
    """Build a factory calling ``dependency`` with the values of ``arguments``.

    Examples:
        .. code-block:: python

            container.set(
                SHARE_URL,
                provide(
                    lambda host, page: f"https://{host}/{page}",
                    CONFIG.map(lambda config, _: config.host),
                    PAGE,
                ),
            )
            container.set(CLIENT, provide(HttpClient, SHARE_URL, class_style=True))

    """
    return Provision(
        dependency=dependency,
        arguments=arguments,
        class_style=class_style,
        context=context or container_context,
    )


class InjectableBinding(Generic[T]):
    """Remember the container an injectable class is constructed in.

    The binding is taken once, either explicitly with ``bind`` or by the first
    construction that happens while a container is active. Every construction
    afterwards runs with that container active, including constructions made
    from plain code such as a ``clone()`` method.
    """

    def __init__(self, cls: type[T], context: ContainerContext) -> None:
        self._cls = cls
        self._context = context
        self._container: Container | None = None

    @property
    def container(self) -> Container | None:
        return self._container

    def bind(self, container: Container) -> Callable[..., T]:
        """Bind to ``container`` unless already bound; return the class."""
        if self._container is None:
            self._container = container
            logger.debug("Bound injectable %s to %r", self._cls.__qualname__, container)
        return self._cls

    @contextmanager
    def activated(self) -> Iterator[Container | None]:
        if self._container is None:
            active = self._context.peek()
            if active is None:
                yield None
                return
            self.bind(active)

        with self._context.activate(self._container) as container:  # type: ignore[arg-type]
            yield container


def get_injectable_binding(obj: object) -> InjectableBinding[Any] | None:
    return getattr(obj, INJECTABLE_BINDING_ATTR, None)


@overload
def injectable(cls: C, /) -> C: ...


@overload
def injectable(*, context: ContainerContext | None = None) -> Callable[[C], C]: ...


def injectable(
    cls: C | None = None,
    /,
    *,
    context: ContainerContext | None = None,
) -> C | Callable[[C], C]:
    """Run every ``__init__`` of the class inside the container it is bound to.

    Lets ``Token.inject()`` be called from ``__init__`` even for instances
    created outside of any factory, once the class has been bound.

    Examples:
        .. code-block:: python

            @injectable
            class Board:
                def __init__(self) -> None:
                    self.api = API.inject()

                def clone(self) -> "Board":
                    return Board()

    """

    def decorator(decorated: C) -> C:
        binding: InjectableBinding[Any] = InjectableBinding(
            decorated,
            context or container_context,
        )
        original_init = decorated.__init__

        @functools.wraps(original_init)
        def __init__(self: Any, *args: Any, **kwargs: Any) -> None:
            with binding.activated():
                original_init(self, *args, **kwargs)

        decorated.__init__ = __init__  # type: ignore[misc]
        setattr(decorated, INJECTABLE_BINDING_ATTR, binding)
        return decorated

    if cls is None:
        return decorator
    return decorator(cls)
