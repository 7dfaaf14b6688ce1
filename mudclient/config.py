import os
from pathlib import Path
from typing import Final

# Engine de padrões
# Profundidade máxima de sendEvent() encadeado (script -> evento -> script ...)
MAX_EVENT_DEPTH: Final[int] = int(os.environ.get("MAX_EVENT_DEPTH", 8))
# Comandos maiores que isso são truncados antes de chegar ao transporte
MAX_COMMAND_LENGTH: Final[int] = int(os.environ.get("MAX_COMMAND_LENGTH", 512))
# Total de passos que um speedwalk pode gerar (contadores somados)
MAX_SPEEDWALK_STEPS: Final[int] = int(os.environ.get("MAX_SPEEDWALK_STEPS", 200))

# Logs
LOG_DIR: Final[str] = os.environ.get(
    "MUD_LOG_DIR",
    str(Path(__file__).resolve().parent.parent / "logs"),
)
LOG_LEVEL: Final[str] = os.environ.get("MUD_LOG_LEVEL", "DEBUG").upper()
