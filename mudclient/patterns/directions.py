"""
Tabela de direções para speedwalk.
"""

from typing import Dict

DIRECTIONS: Dict[str, str] = {
    "n": "north",
    "s": "south",
    "e": "east",
    "w": "west",
    "ne": "northeast",
    "nw": "northwest",
    "se": "southeast",
    "sw": "southwest",
    "u": "up",
    "d": "down",
    "nu": "northup",
    "su": "southup",
    "eu": "eastup",
    "wu": "westup",
    "nd": "northdown",
    "sd": "southdown",
    "ed": "eastdown",
    "wd": "westdown",
}

OPPOSITES: Dict[str, str] = {
    "north": "south",
    "south": "north",
    "east": "west",
    "west": "east",
    "northeast": "southwest",
    "southwest": "northeast",
    "northwest": "southeast",
    "southeast": "northwest",
    "up": "down",
    "down": "up",
    "northup": "southdown",
    "southdown": "northup",
    "southup": "northdown",
    "northdown": "southup",
    "eastup": "westdown",
    "westdown": "eastup",
    "westup": "eastdown",
    "eastdown": "westup",
}


def resolve_direction(code: str) -> str:
    """Converte código curto (ex: 'ne') no nome completo; desconhecidos passam direto."""
    return DIRECTIONS.get(code.lower(), code)


def opposite_of(name: str) -> str:
    return OPPOSITES.get(name, name)
