"""Modelos de domínio da avaliação de risco e carreira.

Responsabilidades:
- Declarar os níveis de risco
- Declarar o vocabulário fechado de carreiras
- Representar o resultado devolvido ao chamador
"""

from enum import Enum

from pydantic import BaseModel


CARREIRA_DESCONHECIDA = "Unknown"
EXPLICACAO_FALLBACK = "No AI available; local fallback used."

CARREIRAS_PERMITIDAS = [
    "Computer Science",
    "Electronics / ECE",
    "Civil / Civil Eng",
    "Management",
    "Arts / Humanities",
    "Research / Academia",
    "Vocational / Trade",
]


class NivelRisco(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class OrigemAvaliacao(str, Enum):
    SERVICE = "service"
    FALLBACK = "fallback"


class ResultadoAvaliacao(BaseModel):
    """Resultado de uma avaliação; produzido sob demanda e nunca persistido."""

    risk: NivelRisco
    career: str = CARREIRA_DESCONHECIDA
    explanation: str = ""
    source: OrigemAvaliacao = OrigemAvaliacao.SERVICE
