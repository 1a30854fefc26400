from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from contextvars import Token as ContextToken
from typing import TYPE_CHECKING, Any

from gizmo.container_resolution_stack import ResolutionStack
from gizmo.exceptions import GizmoInjectOutsideContainerError

if TYPE_CHECKING:
    from gizmo.container import Container
    from gizmo.tokens import Token


class ContainerContext:
    """Task/thread-safe ambient state shared by every container of one tree.

    Holds the active container (the one whose factory or injectable
    constructor is currently running) and the resolution stack of the
    outermost ``get``/``resolve`` call in progress. Both live in context
    variables, so every thread and every asyncio task sees only the
    activations it made itself.
    """

    __slots__ = (
        "_current_container_var",
        "_resolution_var",
        "_token_stack_var",
    )

    def __init__(self) -> None:
        self._current_container_var: ContextVar[Container | None] = ContextVar(
            "gizmo_container_context_container",
            default=None,
        )
        self._token_stack_var: ContextVar[tuple[ContextToken[Container | None], ...]] = ContextVar(
            "gizmo_container_context_tokens",
            default=(),
        )
        self._resolution_var: ContextVar[ResolutionStack | None] = ContextVar(
            "gizmo_container_context_resolution",
            default=None,
        )

    def peek(self) -> Container | None:
        """Return the active container, or ``None`` outside of any factory."""
        return self._current_container_var.get()

    def get_current(self) -> Container:
        """Return the active container or raise when none is active."""
        container = self.peek()
        if container is None:
            msg = (
                "No container is active. "
                "Resolve dependencies from a factory registered with Container.set or provide."
            )
            raise GizmoInjectOutsideContainerError(msg)
        return container

    @property
    def resolution(self) -> ResolutionStack | None:
        """Return the resolution stack of the call tree in progress, if any."""
        return self._resolution_var.get()

    @contextmanager
    def activate(self, container: Container) -> Iterator[Container]:
        """Make ``container`` the active one until the block exits."""
        self._push(container)
        try:
            yield container
        finally:
            self._pop()

    @contextmanager
    def track(self, token: Token[Any]) -> Iterator[ResolutionStack]:
        """Record ``token`` as being resolved until the block exits.

        The first frame entered with no resolution in progress owns a fresh
        ``ResolutionStack`` and discards it on exit, success or failure.
        """
        stack = self._resolution_var.get()
        reset_token: ContextToken[ResolutionStack | None] | None = None
        if stack is None:
            stack = ResolutionStack()
            reset_token = self._resolution_var.set(stack)

        try:
            stack.push(token)
            try:
                yield stack
            finally:
                stack.pop(token)
        finally:
            if reset_token is not None:
                self._resolution_var.reset(reset_token)

    def _push(self, container: Container) -> None:
        token = self._current_container_var.set(container)
        tokens = self._token_stack_var.get()
        self._token_stack_var.set((*tokens, token))

    def _pop(self) -> None:
        tokens = self._token_stack_var.get()
        if not tokens:
            return
        token = tokens[-1]
        self._token_stack_var.set(tokens[:-1])
        self._current_container_var.reset(token)


container_context = ContainerContext()
"""Default context shared by containers and tokens that are not given one."""
