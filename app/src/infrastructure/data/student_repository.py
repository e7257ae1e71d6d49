"""Repositório em memória dos registros de alunos.

Responsabilidades:
- Manter os alunos indexados por matrícula
- Garantir unicidade da matrícula
- Carregar e salvar o arquivo binário de registros
"""

import os
from typing import Dict, Iterator, List, Optional

from src.domain.errors import ErroMatriculaDuplicada, ErroPersistencia, ErroRegistroNaoEncontrado
from src.domain.student import Estudante
from src.infrastructure.data.record_codec import (
    TAMANHO_REGISTRO,
    codificar_registro,
    decodificar_registro,
)
from src.util.logger import logger


class RepositorioEstudantes:
    """Coleção de alunos com chave única por matrícula.

    Responsabilidades:
    - Inserir, atualizar, remover e buscar alunos
    - Preservar a ordem de inserção como ordem interna
    - Persistir a ordem interna no arquivo
    """

    def __init__(self):
        """Inicializa o repositório vazio."""
        self._registros: Dict[int, Estudante] = {}

    def __len__(self) -> int:
        return len(self._registros)

    def __contains__(self, matricula: int) -> bool:
        return matricula in self._registros

    def __iter__(self) -> Iterator[Estudante]:
        return iter(list(self._registros.values()))

    def carregar(self, caminho: str) -> int:
        """Substitui o conteúdo em memória pelo conteúdo do arquivo.

        Parâmetros:
        - caminho (str): arquivo de registros

        Retorno:
        - int: quantidade de registros carregados

        Exceções:
        - ErroPersistencia: quando o arquivo existe mas não pode ser lido
        """
        try:
            with open(caminho, "rb") as arquivo:
                conteudo = arquivo.read()
        except FileNotFoundError:
            logger.info(f"Arquivo de registros inexistente em {caminho}. Iniciando base vazia.")
            self._registros = {}
            return 0
        except OSError as erro:
            logger.error(f"Falha ao ler arquivo de registros {caminho}: {erro}")
            raise ErroPersistencia(f"Falha ao ler {caminho}: {erro}") from erro

        completos = len(conteudo) // TAMANHO_REGISTRO
        sobra = len(conteudo) % TAMANHO_REGISTRO
        if sobra:
            logger.warning(
                f"Arquivo {caminho} termina com registro incompleto ({sobra} bytes). Ignorando sobra."
            )

        registros: Dict[int, Estudante] = {}
        for indice in range(completos):
            inicio = indice * TAMANHO_REGISTRO
            estudante = decodificar_registro(conteudo[inicio : inicio + TAMANHO_REGISTRO])
            # Matrícula repetida no arquivo: vale a última ocorrência.
            registros.pop(estudante.roll, None)
            registros[estudante.roll] = estudante

        self._registros = registros
        logger.info(f"Base carregada com {len(registros)} registros de {caminho}.")
        return len(registros)

    def salvar(self, caminho: str) -> None:
        """Sobrescreve o arquivo com todos os registros na ordem interna.

        Parâmetros:
        - caminho (str): arquivo de registros

        Exceções:
        - ErroPersistencia: quando a escrita falha
        """
        try:
            diretorio = os.path.dirname(caminho)
            if diretorio:
                os.makedirs(diretorio, exist_ok=True)
            with open(caminho, "wb") as arquivo:
                for estudante in self._registros.values():
                    arquivo.write(codificar_registro(estudante))
        except OSError as erro:
            logger.error(f"Falha ao salvar arquivo de registros {caminho}: {erro}")
            raise ErroPersistencia(f"Falha ao salvar {caminho}: {erro}") from erro

        logger.info(f"Base salva com {len(self._registros)} registros em {caminho}.")

    def adicionar(self, estudante: Estudante) -> None:
        """Insere um aluno novo.

        Exceções:
        - ErroMatriculaDuplicada: quando a matrícula já existe
        """
        if estudante.roll in self._registros:
            raise ErroMatriculaDuplicada(f"Matrícula {estudante.roll} já cadastrada.")
        self._registros[estudante.roll] = estudante

    def remover(self, matricula: int) -> bool:
        """Remove o aluno da matrícula; retorna se havia correspondência."""
        return self._registros.pop(matricula, None) is not None

    def atualizar(
        self,
        matricula: int,
        nome: Optional[str] = None,
        notas: Optional[List[float]] = None,
        frequencia: Optional[float] = None,
    ) -> Estudante:
        """Atualiza campos de um aluno existente; None mantém o valor atual.

        Não valida faixas de notas e frequência.

        Parâmetros:
        - matricula (int): matrícula do aluno
        - nome (str | None): novo nome
        - notas (list[float] | None): novas notas
        - frequencia (float | None): nova frequência

        Retorno:
        - Estudante: registro atualizado

        Exceções:
        - ErroRegistroNaoEncontrado: quando a matrícula não existe
        """
        estudante = self._registros.get(matricula)
        if estudante is None:
            raise ErroRegistroNaoEncontrado(f"Matrícula {matricula} não encontrada.")

        if nome is not None:
            estudante.name = nome
        if notas is not None:
            estudante.marks = list(notas)
        if frequencia is not None:
            estudante.attendance = frequencia
        return estudante

    def buscar_por_matricula(self, matricula: int) -> Optional[Estudante]:
        return self._registros.get(matricula)

    def buscar_por_nome(self, nome: str) -> Optional[Estudante]:
        """Busca por nome exato, sensível a maiúsculas.

        Com nomes repetidos, vence o aluno inserido mais recentemente.
        """
        for estudante in reversed(list(self._registros.values())):
            if estudante.name == nome:
                return estudante
        return None

    def listar_ordenado_por_matricula(self) -> Optional[List[Estudante]]:
        """Retorna uma cópia ordenada por matrícula, ou None se não houver registros."""
        if not self._registros:
            return None
        return sorted(self._registros.values(), key=lambda estudante: estudante.roll)

    def limpar(self) -> None:
        """Libera todos os registros em memória sem salvar."""
        self._registros = {}
