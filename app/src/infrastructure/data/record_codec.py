"""Codec do formato binário de registros de alunos.

Responsabilidades:
- Definir o layout fixo de cada registro
- Converter Estudante em bytes e vice-versa

Layout (little-endian, sem cabeçalho nem checksum):
- name: 100 bytes, UTF-8 completado com NUL
- roll: int32
- marks: 5 x float64
- attendance: float64
"""

import struct

from src.config.settings import Configuracoes
from src.domain.student import Estudante


FORMATO_REGISTRO = struct.Struct(
    f"<{Configuracoes.NAME_LEN}si{Configuracoes.NUM_SUBJECTS}dd"
)
TAMANHO_REGISTRO = FORMATO_REGISTRO.size


def codificar_registro(estudante: Estudante) -> bytes:
    """Codifica um aluno em um registro de tamanho fixo.

    Parâmetros:
    - estudante (Estudante): aluno a codificar

    Retorno:
    - bytes: registro com TAMANHO_REGISTRO bytes
    """
    # struct completa com NUL; o nome já vem truncado pelo modelo.
    nome = estudante.name.encode("utf-8")
    return FORMATO_REGISTRO.pack(
        nome,
        estudante.roll,
        *estudante.marks,
        estudante.attendance,
    )


def decodificar_registro(dados: bytes) -> Estudante:
    """Decodifica um registro completo.

    Parâmetros:
    - dados (bytes): exatamente TAMANHO_REGISTRO bytes

    Retorno:
    - Estudante: aluno lido, sem validação de faixas

    Exceções:
    - struct.error: quando o tamanho não corresponde ao layout
    """
    nome_bruto, matricula, *valores = FORMATO_REGISTRO.unpack(dados)
    nome = nome_bruto.split(b"\x00", 1)[0].decode("utf-8", errors="replace")
    return Estudante(
        name=nome,
        roll=matricula,
        marks=list(valores[: Configuracoes.NUM_SUBJECTS]),
        attendance=valores[Configuracoes.NUM_SUBJECTS],
    )
