"""
Replay assíncrono das ações coletadas.
"""

import asyncio
import inspect
from typing import Any, Callable, Iterable

from .models import Action, Wait
from ..logger import get_logger

logger = get_logger(__name__)

Sink = Callable[[str], Any]


async def play(actions: Iterable[Action], sink: Sink) -> None:
    """
    Envia as ações em ordem, respeitando as pausas.

    Só este loop fica suspenso durante um Wait; o resto do event loop
    (UI, leitura do servidor) continua rodando.

    Args:
        actions: Ações de uma passada de dispatch
        sink: Função (síncrona ou async) que entrega uma linha ao transporte
    """
    for action in actions:
        if isinstance(action, Wait):
            delay = max(float(action.wait_time or 0), 0.0) / 1000
            logger.debug(f"Replay: aguardando {action.wait_time}ms")
            await asyncio.sleep(delay)
            continue

        result = sink(action.content)
        if inspect.isawaitable(result):
            await result
