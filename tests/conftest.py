"""Shared pytest fixtures for gizmo tests."""

import pytest

from gizmo.container import Container, global_container
from gizmo.tokens import Token, token

pytest_plugins = ["gizmo.integrations.pytest_plugin"]


@pytest.fixture()
def root() -> Container:
    """Fresh root container."""
    return Container(name="root")


@pytest.fixture()
def sub(root: Container) -> Container:
    """Child of ``root``."""
    return root.sub(name="sub")


@pytest.fixture()
def global_sub() -> Container:
    """Child of the process-wide container, dropped after the test."""
    return global_container.sub(name="global.sub")


@pytest.fixture()
def test_token() -> Token[object]:
    return token("TestToken")
