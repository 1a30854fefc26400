from __future__ import annotations

import functools
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from gizmo.container_context import ContainerContext, container_context
from gizmo.defaults import DEFAULT_TOKEN_DESCRIPTION
from gizmo.exceptions import GizmoInjectOutsideContainerError

if TYPE_CHECKING:
    from gizmo.container import Container

T = TypeVar("T")
R = TypeVar("R")


class Token(Generic[T]):
    """Opaque identity key of a dependency.

    Two tokens are equal only when they are the same object, whatever their
    descriptions. A token may carry a default factory used by containers when
    no descriptor for it exists anywhere in their chain. The default runs at
    most once per token for the lifetime of the process.

    Examples:
        .. code-block:: python

            CONFIG = token("Config", lambda: {"host": "localhost"})
            PORT = token("Port")

            container = Container()
            container.set(PORT, lambda: 8080)

            container.resolve(CONFIG)["host"]  # "localhost"
            container.resolve(PORT)  # 8080

    """

    def __init__(
        self,
        description: str = DEFAULT_TOKEN_DESCRIPTION,
        default: Callable[[], T] | None = None,
    ) -> None:
        self._description = description
        self._default: Callable[[], T] | None = (
            functools.cache(default) if default is not None else None
        )

    @property
    def description(self) -> str:
        return self._description

    @property
    def has_default(self) -> bool:
        return self._default is not None

    def get_default(self) -> T | None:
        """Return the memoized default value, or ``None`` without a default."""
        if self._default is None:
            return None
        return self._default()

    def inject(self, context: ContainerContext | None = None) -> T:
        """Resolve the token against the active container.

        Raises:
            GizmoInjectOutsideContainerError: No container is active.
            GizmoUnresolvedTokenError: The active container cannot resolve it.

        """
        container = (context or container_context).peek()
        if container is None:
            msg = f'Can\'t inject "{self}" token outside of Container.set or provide'
            raise GizmoInjectOutsideContainerError(msg)
        return container.resolve(self)

    def map(self, transform: Callable[[T, Container], R]) -> TokenMap[R]:
        """Derive a reference usable as a ``provide`` argument."""
        return TokenMap(owner=self, transform=transform)

    def __str__(self) -> str:
        return self._description

    def __repr__(self) -> str:
        return f"Token({self._description!r})"


@dataclass(frozen=True, eq=False)
class TokenMap(Generic[T]):
    """Subordinate reference: the owner token's value passed through ``transform``.

    Only ``provide`` arguments accept it; containers refuse it as a key.
    """

    owner: Token[Any]
    transform: Callable[[Any, Container], T]

    def apply(self, container: Container) -> T:
        return self.transform(container.resolve(self.owner), container)

    def __str__(self) -> str:
        return f"map({self.owner})"


def token(
    description: str = DEFAULT_TOKEN_DESCRIPTION,
    default: Callable[[], T] | None = None,
) -> Token[T]:
    """Create a new token."""
    return Token(description, default)
