"""
Coletor de ações de uma passada de dispatch.
"""

from typing import Iterable, Iterator, List

from .models import Action, Command, Wait


class ActionCollector:
    """Lista ordenada de ações produzidas pelos primitivos do sandbox."""

    def __init__(self):
        self._actions: List[Action] = []

    def add_command(self, content: str) -> None:
        self._actions.append(Command(content=str(content)))

    def add_commands(self, contents: Iterable[str]) -> None:
        for content in contents:
            self.add_command(content)

    def add_wait(self, ms: int) -> None:
        self._actions.append(Wait(wait_time=ms))

    @property
    def actions(self) -> List[Action]:
        return list(self._actions)

    def __len__(self) -> int:
        return len(self._actions)

    def __iter__(self) -> Iterator[Action]:
        return iter(self._actions)
