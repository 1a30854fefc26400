"""Quickstart: tokens, registrations and child containers.

This module covers:

1. Creating tokens, with and without a default factory.
2. ``set``/``resolve``/``get`` on a root container.
3. Child containers inheriting registrations lazily.
4. ``inject()`` inside a factory.
"""

from __future__ import annotations

from dataclasses import dataclass

from gizmo import Container, token


@dataclass
class Settings:
    host: str
    port: int


SETTINGS = token("Settings", lambda: Settings(host="localhost", port=8000))
BASE_URL = token("BaseUrl")
MISSING = token("Missing")


def build_base_url() -> str:
    settings = SETTINGS.inject()
    return f"http://{settings.host}:{settings.port}"


def main() -> None:
    root = Container(name="root")
    root.set(BASE_URL, build_base_url)

    print(f"base_url={root.resolve(BASE_URL)}")  # => base_url=http://localhost:8000
    print(f"missing={root.get(MISSING)}")  # => missing=None

    child = root.sub(name="child")
    root.set(SETTINGS, lambda: Settings(host="example.org", port=443))
    print(f"child_has_base_url={child.has(BASE_URL)}")  # => child_has_base_url=True
    print(f"shared={child.resolve(BASE_URL) is root.resolve(BASE_URL)}")  # => shared=True


if __name__ == "__main__":
    main()
