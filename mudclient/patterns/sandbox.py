"""
Sandbox de capacidades dos scripts.

Cada regra que casa ganha um Sandbox novo: o script só enxerga `matches`,
as variáveis do usuário e os primitivos abaixo. Tudo que os primitivos fazem
vira ação no ActionCollector; nada é enviado durante a avaliação.
"""

import keyword
import math
from concurrent.futures import Future
from typing import Any, Callable, Dict, List, Optional, Sequence

from .collector import ActionCollector
from .errors import MissingEventScriptError
from .evaluator import run_script
from .models import MatchResult, Script, Variable
from .speedwalk import expand
from ..config import MAX_EVENT_DEPTH
from ..logger import get_logger

logger = get_logger(__name__)

VariableSetter = Callable[[str, str], None]
Notifier = Callable[[], Any]

PRIMITIVE_NAMES = frozenset({
    "matches",
    "send",
    "sendAll",
    "send_all",
    "wait",
    "speedwalk",
    "setVariable",
    "set_variable",
    "sendEvent",
    "send_event",
    "alert",
})


def is_bindable(name: str) -> bool:
    """Nome pode virar variável no escopo do script?"""
    return bool(name) and name.isidentifier() and not keyword.iskeyword(name) and name not in PRIMITIVE_NAMES


def snapshot_variables(variables: Sequence[Variable]) -> Dict[str, str]:
    """Monta o snapshot nome -> valor (o último com o mesmo nome vence)."""
    values: Dict[str, str] = {}
    for variable in variables:
        if not is_bindable(variable.name):
            if variable.name:
                logger.warning(f"Variável ignorada (nome inválido ou reservado): {variable.name}")
            continue
        values[variable.name] = variable.value
    return values


def _resolved() -> Future:
    future: Future = Future()
    future.set_result(None)
    return future


class Sandbox:
    """Escopo de execução de um script de regra."""

    def __init__(
        self,
        matches: MatchResult,
        values: Dict[str, str],
        collector: ActionCollector,
        on_variable_set: Optional[VariableSetter] = None,
        scripts: Optional[Sequence[Script]] = None,
        notifier: Optional[Notifier] = None,
        depth: int = 0,
        parent: Optional["Sandbox"] = None,
    ):
        self._matches = tuple(matches)
        self._values = values
        self._collector = collector
        self._on_variable_set = on_variable_set
        self._scripts = scripts or []
        self._notifier = notifier
        self._depth = depth
        self._parent = parent
        self._namespace: Optional[Dict[str, Any]] = None

    def scope(self) -> Dict[str, Any]:
        """Namespace entregue ao avaliador (criado uma vez por sandbox)."""
        if self._namespace is None:
            namespace: Dict[str, Any] = dict(self._values)
            namespace.update(self._primitives())
            namespace["matches"] = self._matches
            self._namespace = namespace
        return self._namespace

    def _primitives(self) -> Dict[str, Any]:
        """Funções soltas (não métodos): o script não chega ao Sandbox por elas."""
        sandbox = self

        def send(text):
            sandbox.send(text)

        def send_all(*texts):
            sandbox.send_all(*texts)

        def wait(ms):
            return sandbox.wait(ms)

        def speedwalk(shorthand, backwards=False, delay_seconds=0):
            sandbox.speedwalk(shorthand, backwards, delay_seconds)

        def set_variable(name, value):
            sandbox.set_variable(name, value)

        def send_event(event):
            sandbox.send_event(event)

        def alert():
            sandbox.alert()

        return {
            "send": send,
            "sendAll": send_all,
            "send_all": send_all,
            "wait": wait,
            "speedwalk": speedwalk,
            "setVariable": set_variable,
            "set_variable": set_variable,
            "sendEvent": send_event,
            "send_event": send_event,
            "alert": alert,
        }

    def send(self, text: Any) -> None:
        self._collector.add_command(text)

    def send_all(self, *texts: Any) -> None:
        self._collector.add_commands(texts)

    def wait(self, ms: Any) -> Future:
        """Registra a pausa; o script não espera de verdade (a pausa acontece no replay).

        Valor inválido falha aqui, durante a avaliação, e não no meio do replay.
        """
        value = float(ms)
        if not math.isfinite(value):
            raise ValueError(f"wait() inválido: {ms}")
        self._collector.add_wait(int(value) if value.is_integer() else value)
        return _resolved()

    def speedwalk(self, shorthand: str, backwards: bool = False, delay_seconds: float = 0) -> None:
        steps = expand(shorthand, backwards)
        delay_ms = int(round(float(delay_seconds or 0) * 1000))
        for idx, step in enumerate(steps):
            if idx > 0 and delay_ms > 0:
                self._collector.add_wait(delay_ms)
            self._collector.add_command(step)

    def set_variable(self, name: str, value: Any) -> None:
        """Repassa a mudança ao host e atualiza o snapshot desta avaliação."""
        name = str(name)
        value = str(value)
        if self._on_variable_set is not None:
            self._on_variable_set(name, value)
        else:
            logger.debug(f"setVariable sem callback: {name}")
        if is_bindable(name):
            self._values[name] = value
            self._rebind(name, value)

    def _rebind(self, name: str, value: str) -> None:
        if self._namespace is not None:
            self._namespace[name] = value
        if self._parent is not None:
            self._parent._rebind(name, value)

    def send_event(self, event: str) -> None:
        """Executa o primeiro script habilitado do evento, no mesmo coletor."""
        try:
            script = find_event_script(self._scripts, event)
        except MissingEventScriptError as e:
            logger.warning(str(e), extra={"event": event})
            return

        if self._depth >= MAX_EVENT_DEPTH:
            logger.warning(f"sendEvent '{event}' ignorado: profundidade máxima ({MAX_EVENT_DEPTH}) atingida", extra={"event": event})
            return

        child = Sandbox(
            matches=self._matches,
            values=self._values,
            collector=self._collector,
            on_variable_set=self._on_variable_set,
            scripts=self._scripts,
            notifier=self._notifier,
            depth=self._depth + 1,
            parent=self,
        )
        logger.debug(f"sendEvent '{event}' -> script '{script.name}' (profundidade {self._depth + 1})")
        run_script(script.name, script.command, child.scope(), kind="script")

    def alert(self) -> None:
        """Pede uma notificação ao host; falhas são ignoradas."""
        if self._notifier is None:
            logger.info("Alerta solicitado (sem notificador configurado)")
            return
        try:
            self._notifier()
        except Exception as e:
            logger.warning(f"Falha ao emitir alerta: {e}")


def find_event_script(scripts: Sequence[Script], event: str) -> Script:
    """
    Primeiro script habilitado do evento (busca pela chave, não pela posição).

    Raises:
        MissingEventScriptError: nenhum script habilitado para o evento
    """
    for script in scripts:
        if script.enabled and script.event == event:
            return script
    raise MissingEventScriptError(event)


def build_sandbox(
    matches: MatchResult,
    variables: Sequence[Variable],
    collector: ActionCollector,
    on_variable_set: Optional[VariableSetter] = None,
    scripts: Optional[List[Script]] = None,
    notifier: Optional[Notifier] = None,
) -> Sandbox:
    """Cria o sandbox de topo de uma regra a partir do snapshot de variáveis."""
    return Sandbox(
        matches=matches,
        values=snapshot_variables(variables),
        collector=collector,
        on_variable_set=on_variable_set,
        scripts=scripts,
        notifier=notifier,
    )
