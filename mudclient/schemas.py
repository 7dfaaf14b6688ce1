"""
Corpos de resposta da API HTTP.
"""

from typing import List

from pydantic import BaseModel


class SpeedwalkResponse(BaseModel):
    steps: List[str]
