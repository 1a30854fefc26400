"""Errors raised by the container.

This module covers:

1. ``GizmoUnresolvedTokenError`` for tokens without registration or default.
2. ``GizmoInjectOutsideContainerError`` for ``inject()`` outside factories.
3. ``GizmoCyclicDependencyError`` naming the cycle.
"""

from __future__ import annotations

from gizmo import (
    Container,
    GizmoCyclicDependencyError,
    GizmoInjectOutsideContainerError,
    GizmoUnresolvedTokenError,
    token,
)

USER = token("User")
SESSION = token("Session")


def main() -> None:
    container = Container()

    try:
        container.resolve(USER)
    except GizmoUnresolvedTokenError as error:
        print(f"unresolved={error}")  # => unresolved=Resolve "User" token failed

    try:
        USER.inject()
    except GizmoInjectOutsideContainerError as error:
        print(f"outside={error}")  # => outside=Can't inject "User" token outside of Container.set or provide

    container.set(USER, lambda: {"session": SESSION.inject()})
    container.set(SESSION, lambda: {"user": USER.inject()})

    try:
        container.resolve(USER)
    except GizmoCyclicDependencyError as error:
        print(f"cycle={error}")  # => cycle=Cyclic dependency "User → Session" detected


if __name__ == "__main__":
    main()
