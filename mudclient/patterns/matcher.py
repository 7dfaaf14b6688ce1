"""
Compilação de padrões e normalização de linhas.
"""

import re
from functools import lru_cache
from typing import Optional

from .models import Rule, MatchResult
from .errors import PatternCompileError
from ..logger import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=512)
def _compile(pattern: str) -> re.Pattern:
    return re.compile(pattern)


def compile_rule_pattern(rule: Rule) -> re.Pattern:
    """Compila o padrão de uma regra (com cache por texto do padrão)."""
    try:
        return _compile(rule.pattern)
    except re.error as e:
        raise PatternCompileError(rule.name, rule.pattern, str(e)) from e


def match_rule(rule: Rule, text: str) -> Optional[MatchResult]:
    """
    Testa a regra contra o texto (busca, sem âncora implícita).

    Returns:
        Tupla (match completo, grupo 1, ...) ou None se não casou
    """
    match = compile_rule_pattern(rule).search(text)
    if match is None:
        return None
    return (match.group(0),) + match.groups()


def normalize_line(line: str) -> str:
    """Normaliza linha do servidor removendo ANSI codes, newlines e prompt final."""
    text = str(line or "")
    text = text.replace("\r", "").replace("\n", "")
    text = re.sub(r"\x1b\[[0-9;]*m", "", text)
    text = re.sub(r"\x1b\][^\x07]*\x07", "", text)
    if text.endswith("> "):
        text = text[:-2]
    return text.strip()
