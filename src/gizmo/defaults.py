from gizmo.providers import Lifetime

DEFAULT_LIFETIME = Lifetime.SINGLETON
"""Lifetime applied to descriptors registered without an explicit one."""

DEFAULT_TOKEN_DESCRIPTION = "unknown"
"""Description given to tokens created without one."""
