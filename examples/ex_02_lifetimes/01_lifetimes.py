"""Lifetimes across a container tree.

This module covers:

1. Singletons owned by the most root-ward declaring container.
2. Scoped values built once per requesting container.
3. Transient values built on every resolution.
4. ``on_created``/``on_deleted`` hooks.
"""

from __future__ import annotations

import itertools

from gizmo import Container, Lifetime, token

_counter = itertools.count(1)

CONNECTION = token("Connection")
REQUEST_ID = token("RequestId")
NONCE = token("Nonce")


def main() -> None:
    events: list[str] = []
    root = Container(name="app")
    request = root.sub(name="request")

    root.set(
        CONNECTION,
        lambda: f"connection-{next(_counter)}",
        on_created=lambda value: events.append(f"created:{value}"),
        on_deleted=lambda value: events.append(f"deleted:{value}"),
    )
    request.set(CONNECTION, lambda: "request-connection")
    root.set(REQUEST_ID, lambda: f"request-{next(_counter)}", lifetime=Lifetime.SCOPED)
    root.set(NONCE, lambda: next(_counter), lifetime=Lifetime.TRANSIENT)

    print(f"request_connection={request.resolve(CONNECTION)}")  # => request_connection=connection-1
    print(f"root_request_id={root.resolve(REQUEST_ID)}")  # => root_request_id=request-2
    print(f"sub_request_id={request.resolve(REQUEST_ID)}")  # => sub_request_id=request-3
    print(f"nonces={[request.resolve(NONCE) for _ in range(2)]}")  # => nonces=[4, 5]

    request.delete(CONNECTION)
    root.delete(CONNECTION)
    print(f"events={events}")  # => events=['created:connection-1', 'deleted:connection-1']


if __name__ == "__main__":
    main()
