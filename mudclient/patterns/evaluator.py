"""
Execução dos scripts das regras (Python restrito).

O corpo do script roda com exec() num namespace montado pelo sandbox, sem
builtins além de uma lista fixa: nada de import, open, eval, etc.
"""

import ast
import textwrap
from functools import lru_cache
from types import CodeType
from typing import Any, Dict

from .errors import ScriptEvaluationError
from ..logger import get_logger

logger = get_logger(__name__)

SAFE_BUILTINS: Dict[str, Any] = {
    "abs": abs,
    "all": all,
    "any": any,
    "bool": bool,
    "dict": dict,
    "enumerate": enumerate,
    "float": float,
    "int": int,
    "isinstance": isinstance,
    "len": len,
    "list": list,
    "max": max,
    "min": min,
    "range": range,
    "reversed": reversed,
    "round": round,
    "set": set,
    "sorted": sorted,
    "str": str,
    "sum": sum,
    "tuple": tuple,
    "zip": zip,
    "Exception": Exception,
    "ValueError": ValueError,
}


def prepare_source(source: str) -> str:
    """Remove indentação comum e linhas vazias das pontas."""
    return textwrap.dedent(source or "").strip("\n")


def check_names(tree: ast.AST) -> None:
    """Recusa nomes e atributos iniciados com "_" (dunders dão acesso ao interpretador)."""
    for node in ast.walk(tree):
        if isinstance(node, ast.Name) and node.id.startswith("_"):
            raise NameError(f"nome não permitido: {node.id}")
        if isinstance(node, ast.Attribute) and node.attr.startswith("_"):
            raise NameError(f"atributo não permitido: {node.attr}")
        if isinstance(node, ast.arg) and node.arg.startswith("_"):
            raise NameError(f"nome não permitido: {node.arg}")


@lru_cache(maxsize=256)
def _compile_script(source: str, filename: str) -> CodeType:
    tree = ast.parse(source, filename, "exec")
    check_names(tree)
    return compile(tree, filename, "exec")


def evaluate(rule_name: str, source: str, scope: Dict[str, Any], kind: str = "alias") -> None:
    """
    Executa o script até o fim contra o escopo do sandbox.

    O escopo vira o globals do script, então o sandbox continua enxergando
    o que o script grava nele.

    Raises:
        ScriptEvaluationError: script não compila ou lança erro durante a execução
    """
    prepared = prepare_source(source)
    if not prepared.strip():
        return

    # cópia por execução: um script não altera os builtins dos próximos
    scope["__builtins__"] = dict(SAFE_BUILTINS)
    try:
        code = _compile_script(prepared, f"<{kind}:{rule_name}>")
        exec(code, scope)
    except Exception as e:
        raise ScriptEvaluationError(rule_name, f"{type(e).__name__}: {e}") from e


def run_script(rule_name: str, source: str, scope: Dict[str, Any], kind: str = "alias") -> bool:
    """Executa o script registrando falhas no log; retorna False se falhou."""
    try:
        evaluate(rule_name, source, scope, kind)
    except ScriptEvaluationError as e:
        logger.error(f"Erro ao executar {kind} '{rule_name}': {e.reason}", extra={"rule": rule_name, "kind": kind})
        return False
    return True
