"""Composing factories with ``provide`` and binding classes with ``injectable``.

This module covers:

1. ``provide`` with tokens and mapped tokens as arguments.
2. ``class_style=True`` provisions binding an ``@injectable`` class.
3. Constructing an injectable class later, outside of any factory.
"""

from __future__ import annotations

from gizmo import Container, injectable, provide, token

CONFIG = token("Config")
PAGE = token("Page")
SHARE_URL = token("ShareUrl")
BOARD = token("Board")


@injectable
class Board:
    def __init__(self, title: str) -> None:
        self.title = title
        self.share_url = SHARE_URL.inject()

    def clone(self) -> Board:
        return Board(f"{self.title} (copy)")


def main() -> None:
    container = Container()
    container.set(CONFIG, lambda: {"host": "rubaxa.org"})
    container.set(PAGE, lambda: "board")
    container.set(
        SHARE_URL,
        provide(
            lambda host, page: f"https://{host}/{page}",
            CONFIG.map(lambda config, _container: config["host"]),
            PAGE,
        ),
    )
    container.set(BOARD, provide(Board, PAGE, class_style=True))

    board = container.resolve(BOARD)
    print(f"board={board.title} {board.share_url}")  # => board=board https://rubaxa.org/board

    copy = board.clone()
    print(f"copy={copy.title} {copy.share_url}")  # => copy=board (copy) https://rubaxa.org/board


if __name__ == "__main__":
    main()
