"""Controlador de alunos da API.

Responsabilidades:
- Definir rotas de cadastro, consulta e avaliação
- Resolver dependências dos serviços
- Traduzir erros de domínio em respostas HTTP
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from src.application.assessment_service import ServicoAvaliacao
from src.application.student_service import ResultadoOperacao, ServicoEstudantes
from src.domain.errors import ErroMatriculaDuplicada, ErroRegistroNaoEncontrado, ErroValidacao
from src.domain.student import AtualizacaoEstudante, EntradaEstudante


MENSAGEM_SEM_REGISTROS = "Nenhum registro de aluno disponível."


def obter_servico_estudantes(request: Request) -> ServicoEstudantes:
    """Dependência para obter a sessão de cadastro criada no startup.

    Retorno:
    - ServicoEstudantes: sessão ativa

    Exceções:
    - HTTPException: quando a base não foi inicializada
    """
    servico = getattr(request.app.state, "servico_estudantes", None)
    if servico is None:
        raise HTTPException(status_code=503, detail="Base de alunos não inicializada.")
    return servico


def obter_servico_avaliacao() -> ServicoAvaliacao:
    """Dependência para obter uma instância do serviço de avaliação."""
    return ServicoAvaliacao()


def _resposta_operacao(resultado: ResultadoOperacao) -> dict:
    return {
        "student": resultado.estudante.model_dump(),
        "persisted": resultado.persistido,
        "warning": resultado.aviso,
    }


class ControladorEstudantes:
    """Controlador de alunos.

    Responsabilidades:
    - Registrar rotas CRUD
    - Expor endpoint de avaliação por matrícula
    """

    def __init__(self):
        """Inicializa o controlador.

        Responsabilidades:
        - Instanciar o roteador
        - Registrar as rotas disponíveis
        """
        self.roteador = APIRouter()
        self._registrar_rotas()

    def _registrar_rotas(self):
        """Registra as rotas; a busca por nome vem antes da rota com matrícula."""
        self.roteador.add_api_route(
            path="/students",
            endpoint=self._adicionar,
            methods=["POST"],
            response_model=dict,
            status_code=201,
        )
        self.roteador.add_api_route(
            path="/students",
            endpoint=self._listar,
            methods=["GET"],
            response_model=dict,
            summary="Lista alunos ordenados por matrícula",
        )
        self.roteador.add_api_route(
            path="/students/search",
            endpoint=self._buscar_por_nome,
            methods=["GET"],
            response_model=dict,
            summary="Busca por nome exato",
        )
        self.roteador.add_api_route(
            path="/students/{roll}",
            endpoint=self._buscar_por_matricula,
            methods=["GET"],
            response_model=dict,
        )
        self.roteador.add_api_route(
            path="/students/{roll}",
            endpoint=self._atualizar,
            methods=["PUT"],
            response_model=dict,
        )
        self.roteador.add_api_route(
            path="/students/{roll}",
            endpoint=self._remover,
            methods=["DELETE"],
            response_model=dict,
        )
        self.roteador.add_api_route(
            path="/students/{roll}/assessment",
            endpoint=self._avaliar,
            methods=["GET"],
            response_model=dict,
            summary="Avaliação de risco e carreira com fallback local",
        )

    @staticmethod
    def _adicionar(
        entrada: EntradaEstudante, servico: ServicoEstudantes = Depends(obter_servico_estudantes)
    ):
        """Cadastra um aluno.

        Parâmetros:
        - entrada (EntradaEstudante): dados validados do aluno
        - servico (ServicoEstudantes): sessão injetada

        Retorno:
        - dict: aluno cadastrado e estado da gravação

        Exceções:
        - HTTPException: matrícula duplicada ou valores inválidos
        """
        try:
            return _resposta_operacao(servico.adicionar(entrada.para_estudante()))
        except ErroMatriculaDuplicada as erro:
            raise HTTPException(status_code=409, detail=str(erro))
        except ErroValidacao as erro:
            raise HTTPException(status_code=400, detail=str(erro))

    @staticmethod
    def _listar(servico: ServicoEstudantes = Depends(obter_servico_estudantes)):
        estudantes = servico.listar()
        if estudantes is None:
            return {"total": 0, "students": [], "message": MENSAGEM_SEM_REGISTROS}
        return {
            "total": len(estudantes),
            "students": [estudante.model_dump() for estudante in estudantes],
            "message": None,
        }

    @staticmethod
    def _buscar_por_nome(
        name: str = Query(..., description="Nome exato, sensível a maiúsculas"),
        servico: ServicoEstudantes = Depends(obter_servico_estudantes),
    ):
        try:
            return servico.obter_por_nome(name).model_dump()
        except ErroRegistroNaoEncontrado as erro:
            raise HTTPException(status_code=404, detail=str(erro))

    @staticmethod
    def _buscar_por_matricula(roll: int, servico: ServicoEstudantes = Depends(obter_servico_estudantes)):
        try:
            return servico.obter_por_matricula(roll).model_dump()
        except ErroRegistroNaoEncontrado as erro:
            raise HTTPException(status_code=404, detail=str(erro))

    @staticmethod
    def _atualizar(
        roll: int,
        atualizacao: AtualizacaoEstudante,
        servico: ServicoEstudantes = Depends(obter_servico_estudantes),
    ):
        """Atualiza campos informados; campos omitidos mantêm o valor atual.

        Exceções:
        - HTTPException: aluno inexistente ou valores finais inválidos
        """
        try:
            resultado = servico.atualizar(
                roll,
                nome=atualizacao.name,
                notas=atualizacao.marks,
                frequencia=atualizacao.attendance,
            )
            return _resposta_operacao(resultado)
        except ErroRegistroNaoEncontrado as erro:
            raise HTTPException(status_code=404, detail=str(erro))
        except ErroValidacao as erro:
            raise HTTPException(status_code=400, detail=str(erro))

    @staticmethod
    def _remover(roll: int, servico: ServicoEstudantes = Depends(obter_servico_estudantes)):
        try:
            return _resposta_operacao(servico.remover(roll))
        except ErroRegistroNaoEncontrado as erro:
            raise HTTPException(status_code=404, detail=str(erro))

    @staticmethod
    def _avaliar(
        roll: int,
        servico: ServicoEstudantes = Depends(obter_servico_estudantes),
        avaliador: ServicoAvaliacao = Depends(obter_servico_avaliacao),
    ):
        """Avalia o aluno; falhas do serviço externo viram resultado local.

        Retorno:
        - dict: matrícula, nome e resultado da avaliação

        Exceções:
        - HTTPException: aluno inexistente
        """
        try:
            estudante = servico.obter_por_matricula(roll)
        except ErroRegistroNaoEncontrado as erro:
            raise HTTPException(status_code=404, detail=str(erro))

        resultado = avaliador.avaliar(estudante)
        return {"roll": estudante.roll, "name": estudante.name, **resultado.model_dump(mode="json")}
