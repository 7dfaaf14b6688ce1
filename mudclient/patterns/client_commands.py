"""
Comandos locais do cliente (não vão para o servidor).
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from ..logger import get_logger

logger = get_logger(__name__)


@dataclass
class ClientCommand:
    name: str
    description: str
    execute: Callable[[], None]
    aliases: List[str] = field(default_factory=list)


class ClientCommandManager:
    """Registro de comandos locais (ex: 'cls')."""

    def __init__(self):
        self._commands: Dict[str, ClientCommand] = {}
        self._on_clear_screen: Optional[Callable[[], None]] = None

        self.register_command(ClientCommand(
            name="cls",
            aliases=["clear", "clear screen"],
            description="Clear the screen",
            execute=self._clear_screen,
        ))

    def set_clear_screen_handler(self, handler: Callable[[], None]) -> None:
        self._on_clear_screen = handler

    def _clear_screen(self) -> None:
        if self._on_clear_screen is not None:
            self._on_clear_screen()

    def register_command(self, command: ClientCommand) -> None:
        self._commands[command.name.lower()] = command
        for alias in command.aliases:
            self._commands[alias.lower()] = command

    def execute_command(self, text: str) -> bool:
        """Executa o comando local se existir; retorna False caso contrário."""
        command = self._commands.get(text.strip().lower())
        if command is None:
            return False
        logger.debug(f"Comando local: {command.name}")
        command.execute()
        return True

    def get_command_help(self) -> List[str]:
        help_lines: List[str] = []
        seen = set()
        for command in self._commands.values():
            if command.name in seen:
                continue
            seen.add(command.name)
            aliases = f" (aliases: {', '.join(command.aliases)})" if command.aliases else ""
            help_lines.append(f"{command.name}{aliases}: {command.description}")
        return help_lines
