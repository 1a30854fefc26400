from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from gizmo.tokens import Token

CHAIN_SEPARATOR = " → "


class GizmoError(Exception):
    """Represent a base class for all gizmo-specific failures.

    Catch this type when you want to handle any gizmo error path without
    matching each concrete exception class individually.
    """


class GizmoInjectOutsideContainerError(GizmoError):
    """Signal a dependency lookup made while no container is active.

    Raised by ``Token.inject``, by factories built with ``provide`` and by
    ``ContainerContext.get_current`` when they run outside of a factory
    invocation.

    Typical fix is moving the call into a factory registered with
    ``Container.set`` (or into a ``provide`` factory), or decorating the class
    that calls ``inject()`` from its ``__init__`` with ``@injectable``.
    """


class GizmoUnresolvedTokenError(GizmoError):
    """Signal that a token has no descriptor in the chain and no default.

    Raised by ``Container.resolve`` and ``Token.inject``. ``Container.get``
    returns ``None`` for the same situation instead.

    Typical fixes include registering the token on the container or one of its
    ancestors, or giving the token a default factory.
    """

    def __init__(self, token: Token[Any]) -> None:
        self.token = token
        super().__init__(f'Resolve "{token}" token failed')


class GizmoCyclicDependencyError(GizmoError):
    """Signal that resolution re-entered a token that is still being built.

    The ``chain`` attribute holds the cyclic segment, from the first
    occurrence of the re-entered token up to the frame that re-entered it.

    Typical fix is breaking the cycle, for example by resolving one side
    lazily from inside a returned function instead of inside the factory.
    """

    def __init__(self, chain: Sequence[Token[Any]]) -> None:
        self.chain = tuple(chain)
        description = CHAIN_SEPARATOR.join(str(token) for token in self.chain)
        super().__init__(f'Cyclic dependency "{description}" detected')
