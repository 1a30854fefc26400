from gizmo.builtin_tokens import GLOBAL_TIME_TOKEN, LOGGER_TOKEN, STORAGES_TOKEN
from gizmo.container import Container, global_container
from gizmo.container_context import ContainerContext, container_context
from gizmo.exceptions import (
    GizmoCyclicDependencyError,
    GizmoError,
    GizmoInjectOutsideContainerError,
    GizmoUnresolvedTokenError,
)
from gizmo.injection import InjectableBinding, Provision, injectable, provide
from gizmo.providers import Lifetime
from gizmo.tokens import Token, TokenMap, token

__all__ = [
    "GLOBAL_TIME_TOKEN",
    "LOGGER_TOKEN",
    "STORAGES_TOKEN",
    "Container",
    "ContainerContext",
    "GizmoCyclicDependencyError",
    "GizmoError",
    "GizmoInjectOutsideContainerError",
    "GizmoUnresolvedTokenError",
    "InjectableBinding",
    "Lifetime",
    "Provision",
    "Token",
    "TokenMap",
    "container_context",
    "global_container",
    "injectable",
    "provide",
    "token",
]
