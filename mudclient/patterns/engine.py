"""
CommandEngine - fachada usada pelo host (sessão/UI).

Guarda aliases, triggers, variáveis e scripts atuais e liga dispatch + replay
ao transporte do host.
"""

import inspect
from typing import Any, Callable, List, Optional

from .client_commands import ClientCommandManager
from .dispatch import process_aliases, process_triggers
from .models import Action, Command, Rule, Script, Variable
from .player import play
from .sandbox import Notifier, VariableSetter
from ..config import MAX_COMMAND_LENGTH
from ..logger import get_logger

logger = get_logger(__name__)


class CommandEngine:
    """Processa entrada do usuário (aliases) e linhas do servidor (triggers)."""

    def __init__(
        self,
        on_command_send: Callable[[str], Any],
        aliases: Optional[List[Rule]] = None,
        triggers: Optional[List[Rule]] = None,
        variables: Optional[List[Variable]] = None,
        scripts: Optional[List[Script]] = None,
        on_variable_set: Optional[VariableSetter] = None,
        notifier: Optional[Notifier] = None,
        client_commands: Optional[ClientCommandManager] = None,
    ):
        """
        Args:
            on_command_send: Transporte (linha -> servidor); pode ser async
            on_variable_set: Chamado depois que o engine atualiza a própria lista
            notifier: Chamado por alert() nos scripts
        """
        self._on_command_send = on_command_send
        self.aliases: List[Rule] = list(aliases or [])
        self.triggers: List[Rule] = list(triggers or [])
        self.variables: List[Variable] = list(variables or [])
        self.scripts: List[Script] = list(scripts or [])
        self._on_variable_set = on_variable_set
        self._notifier = notifier
        self.client_commands = client_commands or ClientCommandManager()

    def set_aliases(self, aliases: List[Rule]) -> None:
        self.aliases = list(aliases)

    def set_triggers(self, triggers: List[Rule]) -> None:
        self.triggers = list(triggers)

    def set_variables(self, variables: List[Variable]) -> None:
        self.variables = list(variables)

    def set_scripts(self, scripts: List[Script]) -> None:
        self.scripts = list(scripts)

    def set_variable(self, name: str, value: str) -> None:
        """Atualiza (ou cria) a variável para o próximo dispatch e avisa o host."""
        for idx, variable in enumerate(self.variables):
            if variable.name == name:
                self.variables[idx] = Variable(name=name, value=value, description=variable.description)
                break
        else:
            self.variables.append(Variable(name=name, value=value))
        logger.debug(f"Variável atualizada: {name}")

        if self._on_variable_set is not None:
            self._on_variable_set(name, value)

    def expand_command(self, text: str) -> List[Action]:
        """Ações para o que o usuário digitou (entrada crua se nenhum alias casar)."""
        actions = process_aliases(
            text,
            self.aliases,
            self.variables,
            on_variable_set=self.set_variable,
            scripts=self.scripts,
            notifier=self._notifier,
        )
        return actions if actions is not None else [Command(content=text)]

    async def process_command(self, text: str) -> None:
        """Processa uma linha digitada: comando local, alias ou envio direto."""
        if not text.strip():
            return
        if self.client_commands.execute_command(text):
            return
        await play(self.expand_command(text), self._send)

    async def process_line(self, line: str) -> None:
        """Processa uma linha recebida do servidor contra os triggers."""
        if not line.strip():
            return
        actions = process_triggers(
            line,
            self.triggers,
            self.variables,
            on_variable_set=self.set_variable,
            scripts=self.scripts,
            notifier=self._notifier,
        )
        if actions:
            await play(actions, self._send)

    async def _send(self, command: str) -> None:
        # Evita estourar o buffer de entrada do servidor MUD
        if len(command) > MAX_COMMAND_LENGTH:
            logger.warning(f"Command too long ({len(command)} chars), truncated")
            command = command[:MAX_COMMAND_LENGTH]

        result = self._on_command_send(command)
        if inspect.isawaitable(result):
            await result
