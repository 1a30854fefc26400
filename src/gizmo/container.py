from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from typing_extensions import Self

from gizmo.container_context import ContainerContext, container_context
from gizmo.defaults import DEFAULT_LIFETIME
from gizmo.exceptions import GizmoUnresolvedTokenError
from gizmo.providers import (
    CreatedHook,
    DeletedHook,
    Descriptor,
    Factory,
    Lifetime,
)
from gizmo.tokens import Token

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _CachedValue(Generic[T]):
    """Cached value together with the descriptor that produced it."""

    value: T
    descriptor: Descriptor[T]


class Container:
    """Bind tokens to factories and resolve them across a tree of containers.

    A container owns only its local descriptors and cached values. Everything
    else is inherited lazily from the parent chain at resolution time:

    * singleton (or unspecified) descriptors are owned by the most root-ward
      container of the chain that declares one, and their value is cached
      there, so every descendant shares it;
    * a scoped descriptor, found on the requester or on any ancestor before a
      singleton one, builds a value per requesting container;
    * a transient descriptor builds a new value on every resolution.

    Factories run with their owning container active in the shared
    ``ContainerContext``, so ``Token.inject()`` calls made inside them resolve
    against that container.

    Examples:
        .. code-block:: python

            REQUEST_ID = token("RequestId")
            SETTINGS = token("Settings")

            root = Container()
            root.set(SETTINGS, load_settings)
            root.set(REQUEST_ID, lambda: uuid.uuid4(), lifetime=Lifetime.SCOPED)

            request = root.sub()
            request.resolve(SETTINGS) is root.resolve(SETTINGS)  # True
            request.resolve(REQUEST_ID) is root.resolve(REQUEST_ID)  # False

    """

    def __init__(
        self,
        parent: Container | None = None,
        *,
        name: str | None = None,
        context: ContainerContext | None = None,
    ) -> None:
        """Initialize a root container, or a child of ``parent``.

        Args:
            parent: Container to inherit descriptors and singletons from.
                The child does not own it.
            name: Optional name used in diagnostics.
            context: Ambient context to run factories in. Children always
                share their parent's context; roots default to the
                process-wide ``container_context``.

        """
        self._parent = parent
        self._name = name
        if parent is not None:
            self._context = parent.context
        else:
            self._context = context or container_context
        self._descriptors: dict[Token[Any], Descriptor[Any]] = {}
        self._values: dict[Token[Any], _CachedValue[Any]] = {}

    @property
    def parent(self) -> Container | None:
        return self._parent

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def context(self) -> ContainerContext:
        return self._context

    def sub(self, *, name: str | None = None) -> Self:
        """Create a child container. Nothing is copied into it."""
        return type(self)(self, name=name)

    # region Registration Methods
    def set(
        self,
        token: Token[T],
        factory: Factory[T],
        *,
        lifetime: Lifetime | str | None = None,
        on_created: CreatedHook[T] | None = None,
        on_deleted: DeletedHook[T] | None = None,
    ) -> Callable[[], T]:
        """Register ``factory`` for ``token`` on this container.

        Re-registering a token replaces its local descriptor. A value already
        cached locally is kept until ``delete`` or ``clear``.

        Args:
            token: Token to bind.
            factory: Zero-argument callable building the value. It runs with
                the owning container active, so it may call ``inject()``.
            lifetime: Caching policy. ``None`` behaves like
                ``Lifetime.SINGLETON``.
            on_created: Called with every value built from this descriptor.
            on_deleted: Called with a value built from this descriptor when
                it is removed from a cache by ``delete`` or ``clear``.

        Returns:
            A zero-argument callable resolving ``token`` on this container.

        """
        _ensure_token(token)
        descriptor = Descriptor(
            factory=factory,
            lifetime=Lifetime(lifetime) if lifetime is not None else None,
            on_created=on_created,
            on_deleted=on_deleted,
        )
        self._descriptors[token] = descriptor
        logger.debug(
            "Registered token %s on %r (lifetime=%s)",
            token,
            self,
            _lifetime_of(descriptor),
        )
        return lambda: self.resolve(token)

    def delete(self, token: Token[Any]) -> None:
        """Remove the local descriptor and cached value of ``token``.

        Ancestors, and values cached by other containers, are left untouched.
        The producing descriptor's ``on_deleted`` hook fires when a cached
        value is removed.
        """
        _ensure_token(token)
        self._descriptors.pop(token, None)
        cached = self._values.pop(token, None)
        logger.debug("Deleted token %s from %r", token, self)
        if cached is not None and cached.descriptor.on_deleted is not None:
            cached.descriptor.on_deleted(cached.value)

    def clear(self) -> None:
        """Delete every token registered or cached on this container."""
        tokens = list(dict.fromkeys([*self._descriptors, *self._values]))
        for token in tokens:
            self.delete(token)

    # endregion Registration Methods

    # region Resolution Methods
    def has(self, token: Token[Any]) -> bool:
        """Return whether this container or an ancestor declares ``token``.

        Default factories are not taken into account.
        """
        _ensure_token(token)
        container: Container | None = self
        while container is not None:
            if token in container._descriptors:
                return True
            container = container._parent
        return False

    def get(self, token: Token[T]) -> T | None:
        """Return the value of ``token``, or ``None`` when it cannot be built."""
        _ensure_token(token)
        cached = self._values.get(token)
        if cached is not None:
            return cached.value

        descriptor = self._descriptors.get(token)
        lifetime = descriptor.lifetime if descriptor is not None else None
        owner: Container = self
        cursor: Container | None = self

        while cursor is not None:
            cursor = cursor._parent
            next_descriptor = cursor._descriptors.get(token) if cursor is not None else None

            if descriptor is None and next_descriptor is not None:
                descriptor = next_descriptor
                lifetime = next_descriptor.lifetime

            if descriptor is not None and lifetime in (Lifetime.SCOPED, Lifetime.TRANSIENT):
                # A non-singleton lifetime found before any root-ward singleton
                # is always built for the requester.
                return self._create(
                    token,
                    descriptor,
                    owner=self,
                    cache=lifetime is Lifetime.SCOPED,
                )

            if next_descriptor is not None and _lifetime_of(next_descriptor) is Lifetime.SINGLETON:
                descriptor = next_descriptor
                owner = cursor  # type: ignore[assignment]

        if descriptor is not None:
            cached = owner._values.get(token)
            if cached is not None:
                return cached.value
            return self._create(token, descriptor, owner=owner, cache=True)

        with self._context.track(token):
            return token.get_default()

    def resolve(self, token: Token[T]) -> T:
        """Return the value of ``token``.

        Raises:
            GizmoUnresolvedTokenError: No descriptor for ``token`` exists in
                the chain and the token has no default factory.
            GizmoCyclicDependencyError: Building ``token`` requires ``token``.

        """
        if not self.has(token) and not token.has_default:
            raise GizmoUnresolvedTokenError(token)
        return self.get(token)  # type: ignore[return-value]

    # endregion Resolution Methods

    def _create(
        self,
        token: Token[T],
        descriptor: Descriptor[T],
        *,
        owner: Container,
        cache: bool,
    ) -> T:
        with self._context.track(token):
            value = descriptor.build(owner)
            if cache:
                owner._values[token] = _CachedValue(value=value, descriptor=descriptor)
            logger.debug(
                "Created value for token %s in %r (lifetime=%s, requested by %r)",
                token,
                owner,
                _lifetime_of(descriptor),
                self,
            )
            if descriptor.on_created is not None:
                descriptor.on_created(value)
            return value

    def __repr__(self) -> str:
        if self._name is not None:
            return f"Container({self._name!r})"
        return f"Container(at {id(self):#x})"


def _lifetime_of(descriptor: Descriptor[Any]) -> Lifetime:
    return descriptor.lifetime or DEFAULT_LIFETIME


def _ensure_token(token: object) -> None:
    if not isinstance(token, Token):
        msg = f"Expected a Token, got {token!r}. Mapped tokens are only accepted by provide()."
        raise TypeError(msg)


global_container = Container(name="global")
"""Process-wide root container."""
