"""Modelos de domínio para representar dados do aluno.

Responsabilidades:
- Representar o registro persistido do aluno
- Validar entradas de cadastro e atualização
- Fornecer cálculos simples sobre notas
"""

import json
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.config.settings import Configuracoes


INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

Nota = Annotated[float, Field(ge=0, le=100)]
ListaNotas = Annotated[
    List[Nota], Field(min_length=Configuracoes.NUM_SUBJECTS, max_length=Configuracoes.NUM_SUBJECTS)
]


def truncar_nome(nome: str) -> str:
    """Trunca o nome para caber no campo fixo do arquivo binário.

    Parâmetros:
    - nome (str): nome informado

    Retorno:
    - str: nome até o primeiro NUL, com no máximo NAME_LEN - 1 bytes em UTF-8
    """
    # O campo do arquivo termina no primeiro NUL; o resto não seria relido.
    nome = nome.split("\x00", 1)[0]
    limite = Configuracoes.NAME_LEN - 1
    codificado = nome.encode("utf-8")
    if len(codificado) <= limite:
        return nome
    # Descarta o caractere multibyte que ficaria partido no corte.
    return codificado[:limite].decode("utf-8", errors="ignore")


def validar_notas_e_frequencia(notas, frequencia) -> bool:
    """Verifica se notas e frequência estão em [0, 100].

    Parâmetros:
    - notas (list[float]): cinco notas por disciplina
    - frequencia (float): percentual de frequência

    Retorno:
    - bool: True quando todos os valores são válidos
    """
    if len(notas) != Configuracoes.NUM_SUBJECTS:
        return False
    if not 0.0 <= frequencia <= 100.0:
        return False
    return all(0.0 <= nota <= 100.0 for nota in notas)


def _numero_compacto(valor: float):
    """Representa 95.0 como 95, no estilo %g."""
    if float(valor).is_integer():
        return int(valor)
    return valor


class Estudante(BaseModel):
    """Registro de aluno mantido pelo repositório.

    Responsabilidades:
    - Garantir o limite de tamanho do nome
    - Manter exatamente cinco notas
    - Aceitar valores fora da faixa vindos do arquivo sem rejeitar
    """

    name: str = Field("", description="Nome do aluno, truncado em NAME_LEN - 1 bytes")
    roll: int = Field(..., ge=INT32_MIN, le=INT32_MAX, description="Matrícula única do aluno")
    marks: List[float] = Field(
        ...,
        min_length=Configuracoes.NUM_SUBJECTS,
        max_length=Configuracoes.NUM_SUBJECTS,
        description="Notas em Mathematics, Physics, Chemistry, ComputerScience, English",
    )
    attendance: float = Field(..., description="Percentual de frequência")

    model_config = ConfigDict(validate_assignment=True)

    @field_validator("name")
    @classmethod
    def _limitar_nome(cls, valor: str) -> str:
        return truncar_nome(valor)

    def media(self) -> float:
        """Calcula a média das notas."""
        return sum(self.marks) / Configuracoes.NUM_SUBJECTS

    def contar_abaixo(self, limite: float) -> int:
        """Conta disciplinas com nota estritamente abaixo do limite."""
        return sum(1 for nota in self.marks if nota < limite)

    def para_json_avaliacao(self) -> str:
        """Serializa o aluno no JSON compacto enviado ao serviço de avaliação.

        Retorno:
        - str: objeto com roll, name, marks e attendance
        """
        return json.dumps(
            {
                "roll": self.roll,
                "name": self.name,
                "marks": [_numero_compacto(nota) for nota in self.marks],
                "attendance": _numero_compacto(self.attendance),
            },
            separators=(",", ":"),
            ensure_ascii=False,
        )


class EntradaEstudante(BaseModel):
    """Dados de cadastro enviados pelo cliente.

    Responsabilidades:
    - Validar faixas de notas e frequência antes da inserção
    """

    name: str = Field("", description="Nome do aluno")
    roll: int = Field(..., ge=INT32_MIN, le=INT32_MAX)
    marks: ListaNotas
    attendance: float = Field(..., ge=0, le=100)

    def para_estudante(self) -> Estudante:
        """Converte a entrada validada no registro de domínio."""
        return Estudante(**self.model_dump())


class AtualizacaoEstudante(BaseModel):
    """Campos opcionais de atualização; None mantém o valor atual."""

    name: Optional[str] = None
    marks: Optional[ListaNotas] = None
    attendance: Optional[float] = Field(None, ge=0, le=100)
