"""
Erros do engine de padrões.

Nenhum deles escapa de dispatch(): todos viram "essa regra não produziu nada"
e aparecem apenas nos logs.
"""


class PatternEngineError(Exception):
    """Base para erros do engine de padrões."""


class PatternCompileError(PatternEngineError):
    """Padrão de uma regra habilitada não é uma regex válida."""

    def __init__(self, rule_name: str, pattern: str, reason: str):
        self.rule_name = rule_name
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Regex inválida na regra '{rule_name}' ({pattern[:30]}): {reason}")


class ScriptEvaluationError(PatternEngineError):
    """O script de uma regra lançou erro durante a execução."""

    def __init__(self, rule_name: str, reason: str):
        self.rule_name = rule_name
        self.reason = reason
        super().__init__(f"{rule_name}: {reason}")


class MissingEventScriptError(PatternEngineError):
    """sendEvent() para um evento sem script habilitado."""

    def __init__(self, event: str):
        self.event = event
        super().__init__(f"Nenhum script encontrado para o evento: {event}")
