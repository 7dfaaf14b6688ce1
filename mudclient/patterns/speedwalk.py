"""
Expansão de speedwalk: "2e,w,climb up" -> ["east", "east", "west", "climb up"].
"""

import re
from typing import List, Tuple

from .directions import DIRECTIONS, opposite_of, resolve_direction
from ..config import MAX_SPEEDWALK_STEPS
from ..logger import get_logger

logger = get_logger(__name__)

_STEP_RE = re.compile(r"^(\d+)?(.+)$", re.DOTALL)


def parse_step(token: str) -> Tuple[int, str]:
    """Separa contador opcional e direção (ex: '2e' -> (2, 'e'))."""
    match = _STEP_RE.match(token)
    if not match:
        return 1, token

    count_str, direction = match.groups()
    count = int(count_str) if count_str else 1
    return count, direction.strip()


def expand(shorthand: str, backwards: bool = False) -> List[str]:
    """
    Expande um speedwalk em lista de comandos de movimento.

    Args:
        shorthand: Passos separados por vírgula, com contador opcional ("2ne,3e,climb up")
        backwards: Inverte a ordem dos passos e troca cada direção pela oposta

    Returns:
        Lista ordenada de comandos (no máximo MAX_SPEEDWALK_STEPS); passos que
        não são código de direção passam sem alteração, inclusive no modo inverso
    """
    tokens = [token.strip() for token in shorthand.split(",")]
    if backwards:
        tokens.reverse()

    steps: List[str] = []
    for token in tokens:
        count, direction = parse_step(token)
        name = resolve_direction(direction)
        if backwards and direction.lower() in DIRECTIONS:
            name = opposite_of(name)

        remaining = MAX_SPEEDWALK_STEPS - len(steps)
        if count > remaining:
            logger.warning(f"Speedwalk truncado em {MAX_SPEEDWALK_STEPS} passos: {shorthand[:30]}")
            steps.extend([name] * remaining)
            break
        steps.extend([name] * count)
    return steps
