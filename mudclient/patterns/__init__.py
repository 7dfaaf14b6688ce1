"""
Engine de padrões (aliases, triggers e scripts) do cliente MUD.

Exemplo:
    from mudclient.patterns import Rule, process_aliases

    aliases = [Rule(name="give", pattern=r"^g (.+)$", command='send(f"give tianji {matches[1]}")')]
    actions = process_aliases("g wineskin", aliases, [])
    # Retorna: [Command(content="give tianji wineskin")]
"""

from .dispatch import DispatchPolicy, dispatch, process_aliases, process_triggers
from .engine import CommandEngine
from .models import Alias, Command, Rule, Script, Trigger, Variable, Wait
from .player import play
from .speedwalk import expand as expand_speedwalk

__all__ = [
    "DispatchPolicy",
    "dispatch",
    "process_aliases",
    "process_triggers",
    "CommandEngine",
    "Alias",
    "Command",
    "Rule",
    "Script",
    "Trigger",
    "Variable",
    "Wait",
    "play",
    "expand_speedwalk",
]
