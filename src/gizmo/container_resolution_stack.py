from __future__ import annotations

from typing import TYPE_CHECKING, Any

from gizmo.exceptions import GizmoCyclicDependencyError

if TYPE_CHECKING:
    from gizmo.tokens import Token


class ResolutionStack:
    """Tokens whose factories are running within one outermost resolution call.

    A new stack is created by the outermost ``get``/``resolve`` frame and
    shared by every nested frame through the ``ContainerContext``.
    """

    def __init__(self) -> None:
        self._tokens: list[Token[Any]] = []

    def __len__(self) -> int:
        return len(self._tokens)

    def __contains__(self, token: object) -> bool:
        return any(tracked is token for tracked in self._tokens)

    @property
    def tokens(self) -> tuple[Token[Any], ...]:
        return tuple(self._tokens)

    def push(self, token: Token[Any]) -> None:
        """Push ``token`` or raise when it is already being resolved.

        The stack is emptied before raising, so a failed call tree never
        leaks tokens into the next one.
        """
        for index, tracked in enumerate(self._tokens):
            if tracked is token:
                chain = self._tokens[index:]
                self._tokens.clear()
                raise GizmoCyclicDependencyError(chain)
        self._tokens.append(token)

    def pop(self, token: Token[Any]) -> None:
        # The stack may already be emptied by a cycle reported deeper down.
        if self._tokens and self._tokens[-1] is token:
            self._tokens.pop()
