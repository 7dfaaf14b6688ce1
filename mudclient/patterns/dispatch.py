"""
Dispatch de regras: encontra as regras que casam com o texto e coleta as ações dos scripts.
"""

from enum import Enum
from typing import List, Optional, Sequence

from .collector import ActionCollector
from .errors import PatternCompileError
from .evaluator import run_script
from .matcher import match_rule, normalize_line
from .models import Action, Rule, Script, Variable
from .sandbox import Notifier, VariableSetter, build_sandbox
from ..logger import get_logger

logger = get_logger(__name__)


class DispatchPolicy(Enum):
    FIRST_MATCH = "first_match"   # aliases: para na primeira regra que casa
    ACCUMULATE = "accumulate"     # triggers: todas as regras que casam contribuem


def dispatch(
    text: str,
    rules: Sequence[Rule],
    variables: Sequence[Variable] = (),
    on_variable_set: Optional[VariableSetter] = None,
    scripts: Optional[Sequence[Script]] = None,
    policy: DispatchPolicy = DispatchPolicy.FIRST_MATCH,
    notifier: Optional[Notifier] = None,
    kind: str = "alias",
) -> Optional[List[Action]]:
    """
    Processa o texto contra a lista ordenada de regras.

    Args:
        text: Linha digitada pelo usuário ou recebida do servidor
        rules: Regras em ordem de prioridade
        variables: Snapshot das variáveis do usuário
        on_variable_set: Callback chamado por setVariable(name, value)
        scripts: Scripts disponíveis para sendEvent()
        policy: FIRST_MATCH ou ACCUMULATE
        notifier: Callback chamado por alert()
        kind: Rótulo usado nos logs ("alias", "trigger")

    Returns:
        Lista de ações, ou None se nenhuma ação foi produzida
    """
    actions: List[Action] = []
    matched_rules = 0

    for rule in rules:
        if not rule.enabled:
            continue

        try:
            matches = match_rule(rule, text)
        except PatternCompileError as e:
            logger.warning(str(e), extra={"rule": rule.name, "kind": kind})
            continue

        if matches is None:
            continue

        matched_rules += 1
        collector = ActionCollector()
        sandbox = build_sandbox(
            matches=matches,
            variables=variables,
            collector=collector,
            on_variable_set=on_variable_set,
            scripts=list(scripts or []),
            notifier=notifier,
        )
        ok = run_script(rule.name, rule.command, sandbox.scope(), kind=kind)

        if policy is DispatchPolicy.FIRST_MATCH:
            if not ok:
                return None
            actions = collector.actions
            break

        if ok:
            actions.extend(collector)

    logger.debug(f"{kind}: {matched_rules} regras combinadas, {len(actions)} ações geradas")
    return actions or None


def process_aliases(
    text: str,
    aliases: Sequence[Rule],
    variables: Sequence[Variable] = (),
    on_variable_set: Optional[VariableSetter] = None,
    scripts: Optional[Sequence[Script]] = None,
    notifier: Optional[Notifier] = None,
) -> Optional[List[Action]]:
    """Expande o que o usuário digitou (primeiro alias que casa)."""
    return dispatch(
        text,
        aliases,
        variables,
        on_variable_set=on_variable_set,
        scripts=scripts,
        policy=DispatchPolicy.FIRST_MATCH,
        notifier=notifier,
        kind="alias",
    )


def process_triggers(
    line: str,
    triggers: Sequence[Rule],
    variables: Sequence[Variable] = (),
    on_variable_set: Optional[VariableSetter] = None,
    scripts: Optional[Sequence[Script]] = None,
    notifier: Optional[Notifier] = None,
) -> Optional[List[Action]]:
    """Reage a uma linha do servidor (todos os triggers que casam)."""
    return dispatch(
        normalize_line(line),
        triggers,
        variables,
        on_variable_set=on_variable_set,
        scripts=scripts,
        policy=DispatchPolicy.ACCUMULATE,
        notifier=notifier,
        kind="trigger",
    )
