"""Serviço de cadastro de alunos.

Responsabilidades:
- Validar notas e frequência antes de alterar a base
- Persistir a base após cada alteração
- Serializar alterações concorrentes com um lock
"""

from dataclasses import dataclass
from threading import RLock
from typing import List, Optional

from src.config.settings import Configuracoes
from src.domain.errors import ErroPersistencia, ErroRegistroNaoEncontrado, ErroValidacao
from src.domain.student import Estudante, validar_notas_e_frequencia
from src.infrastructure.data.student_repository import RepositorioEstudantes
from src.util.logger import logger


@dataclass
class ResultadoOperacao:
    """Resultado de uma alteração: o registro afetado e o estado da gravação."""

    estudante: Estudante
    persistido: bool = True
    aviso: Optional[str] = None


class ServicoEstudantes:
    """Sessão dona de um repositório e do arquivo onde ele é salvo.

    Responsabilidades:
    - Carregar a base no início e salvá-la no encerramento
    - Executar alteração e gravação como uma única seção crítica
    - Manter a alteração em memória quando a gravação falha
    """

    def __init__(self, caminho: str | None = None, repositorio: RepositorioEstudantes | None = None):
        """Inicializa a sessão.

        Parâmetros:
        - caminho (str | None): arquivo de registros; usa DATA_PATH quando omitido
        - repositorio (RepositorioEstudantes | None): repositório em memória
        """
        self.caminho = caminho or Configuracoes.DATA_PATH
        self.repositorio = repositorio if repositorio is not None else RepositorioEstudantes()
        self._lock = RLock()

    def iniciar(self) -> int:
        """Carrega a base do arquivo.

        Retorno:
        - int: quantidade de registros carregados

        Exceções:
        - ErroPersistencia: quando o arquivo existe mas não pode ser lido
        """
        with self._lock:
            return self.repositorio.carregar(self.caminho)

    def encerrar(self) -> bool:
        """Salva a base e libera a memória.

        Retorno:
        - bool: True quando a gravação final teve sucesso
        """
        with self._lock:
            try:
                self.repositorio.salvar(self.caminho)
                sucesso = True
            except ErroPersistencia as erro:
                logger.warning(f"Falha ao salvar base no encerramento: {erro}")
                sucesso = False
            self.repositorio.limpar()
            return sucesso

    def total(self) -> int:
        return len(self.repositorio)

    def adicionar(self, estudante: Estudante) -> ResultadoOperacao:
        """Valida, insere e salva um aluno.

        Exceções:
        - ErroValidacao: notas ou frequência fora da faixa
        - ErroMatriculaDuplicada: matrícula já cadastrada
        """
        self._validar(estudante.marks, estudante.attendance)
        with self._lock:
            self.repositorio.adicionar(estudante)
            logger.info(f"Aluno adicionado: matrícula {estudante.roll}.")
            return self._salvar_apos_alteracao(estudante)

    def atualizar(
        self,
        matricula: int,
        nome: Optional[str] = None,
        notas: Optional[List[float]] = None,
        frequencia: Optional[float] = None,
    ) -> ResultadoOperacao:
        """Atualiza um aluno; campos None mantêm o valor atual.

        A validação considera os valores finais, já combinados com os atuais.

        Exceções:
        - ErroRegistroNaoEncontrado: matrícula inexistente
        - ErroValidacao: valores finais fora da faixa
        """
        with self._lock:
            atual = self.obter_por_matricula(matricula)
            notas_finais = list(notas) if notas is not None else atual.marks
            frequencia_final = frequencia if frequencia is not None else atual.attendance
            self._validar(notas_finais, frequencia_final)

            estudante = self.repositorio.atualizar(matricula, nome, notas, frequencia)
            logger.info(f"Aluno atualizado: matrícula {matricula}.")
            return self._salvar_apos_alteracao(estudante)

    def remover(self, matricula: int) -> ResultadoOperacao:
        """Remove um aluno e salva a base.

        Exceções:
        - ErroRegistroNaoEncontrado: matrícula inexistente
        """
        with self._lock:
            estudante = self.obter_por_matricula(matricula)
            self.repositorio.remover(matricula)
            logger.info(f"Aluno removido: matrícula {matricula}.")
            return self._salvar_apos_alteracao(estudante)

    def obter_por_matricula(self, matricula: int) -> Estudante:
        with self._lock:
            estudante = self.repositorio.buscar_por_matricula(matricula)
        if estudante is None:
            raise ErroRegistroNaoEncontrado(f"Aluno com matrícula {matricula} não encontrado.")
        return estudante

    def obter_por_nome(self, nome: str) -> Estudante:
        with self._lock:
            estudante = self.repositorio.buscar_por_nome(nome)
        if estudante is None:
            raise ErroRegistroNaoEncontrado(f"Aluno com nome '{nome}' não encontrado.")
        return estudante

    def listar(self) -> Optional[List[Estudante]]:
        """Lista ordenada por matrícula, ou None quando não há registros."""
        with self._lock:
            return self.repositorio.listar_ordenado_por_matricula()

    @staticmethod
    def _validar(notas, frequencia) -> None:
        if not validar_notas_e_frequencia(notas, frequencia):
            raise ErroValidacao("Notas e frequência devem estar entre 0 e 100.")

    def _salvar_apos_alteracao(self, estudante: Estudante) -> ResultadoOperacao:
        try:
            self.repositorio.salvar(self.caminho)
        except ErroPersistencia as erro:
            aviso = f"Alteração mantida em memória, mas a base não foi salva: {erro}"
            logger.warning(aviso)
            return ResultadoOperacao(estudante=estudante, persistido=False, aviso=aviso)
        return ResultadoOperacao(estudante=estudante)
