from __future__ import annotations

import pytest

from gizmo.container import Container


@pytest.fixture()
def gizmo_container() -> Container:
    """Create a per-test root container.

    The fixture is function-scoped, so registrations and cached values are
    isolated between tests unless users override fixture scope explicitly.

    Returns:
        A new root ``Container``.

    """
    return Container(name="test")


@pytest.fixture()
def gizmo_sub(gizmo_container: Container) -> Container:
    """Create a child of ``gizmo_container``."""
    return gizmo_container.sub(name="test.sub")
