"""
Modelos de dados do engine de padrões (aliases, triggers, variáveis, scripts e ações).
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union


@dataclass
class Rule:
    """Regra ordenada (padrão regex + script). Aliases e triggers têm o mesmo formato."""
    name: str
    pattern: str
    command: str
    enabled: bool = True


Alias = Rule
Trigger = Rule


@dataclass
class Variable:
    """Variável do usuário, exposta como somente leitura dentro dos scripts."""
    name: str
    value: str
    description: Optional[str] = None


@dataclass
class Script:
    """Automação nomeada disparada por sendEvent(event)."""
    name: str
    event: str
    command: str
    enabled: bool = True


@dataclass
class Command:
    """Linha a ser enviada ao MUD."""
    content: str
    type: str = "command"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "content": self.content}


@dataclass
class Wait:
    """Pausa (em ms) antes da próxima ação."""
    wait_time: int
    content: str = ""
    type: str = "wait"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "content": self.content, "waitTime": self.wait_time}


Action = Union[Command, Wait]

# (grupo 0, grupo 1, ...); grupos que não participaram do match são None
MatchResult = Tuple[Optional[str], ...]

