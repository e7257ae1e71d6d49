"""Serviço de avaliação de risco e carreira.

Responsabilidades:
- Consultar o serviço externo uma única vez por avaliação
- Interpretar o JSON do assistente de forma defensiva
- Aplicar a heurística local quando o serviço não produz resultado utilizável
"""

import json

from src.config.settings import Configuracoes
from src.domain.assessment import (
    CARREIRA_DESCONHECIDA,
    EXPLICACAO_FALLBACK,
    NivelRisco,
    OrigemAvaliacao,
    ResultadoAvaliacao,
)
from src.domain.errors import AvaliacaoIndisponivel
from src.domain.student import Estudante
from src.infrastructure.assessment.openai_client import ClienteOpenAI
from src.util.logger import logger


def calcular_risco_local(estudante: Estudante) -> NivelRisco:
    """Calcula o risco só com média e frequência, sem rede.

    Parâmetros:
    - estudante (Estudante): aluno avaliado

    Retorno:
    - NivelRisco: HIGH, MEDIUM ou LOW
    """
    media = estudante.media()
    media_alto, frequencia_alto = Configuracoes.LIMIAR_RISCO_ALTO
    media_medio, frequencia_medio = Configuracoes.LIMIAR_RISCO_MEDIO

    if media < media_alto or estudante.attendance < frequencia_alto:
        return NivelRisco.HIGH
    if media < media_medio or estudante.attendance < frequencia_medio:
        return NivelRisco.MEDIUM
    return NivelRisco.LOW


def normalizar_risco(texto: str) -> NivelRisco:
    """Converte o texto de risco do assistente; qualquer valor não reconhecido vira LOW."""
    valor = (texto or "").strip().upper()
    if valor == NivelRisco.HIGH.value:
        return NivelRisco.HIGH
    if valor == NivelRisco.MEDIUM.value:
        return NivelRisco.MEDIUM
    return NivelRisco.LOW


def interpretar_resposta_assistente(texto: str) -> dict:
    """Lê o objeto JSON do assistente.

    Parâmetros:
    - texto (str): conteúdo da mensagem do assistente

    Retorno:
    - dict: risk, career e explanation; campos ausentes ficam vazios

    Exceções:
    - AvaliacaoIndisponivel: quando o texto não é um objeto JSON
    """
    try:
        objeto = json.loads(texto)
    except (TypeError, ValueError) as erro:
        raise AvaliacaoIndisponivel(f"JSON do assistente inválido: {erro}") from erro
    if not isinstance(objeto, dict):
        raise AvaliacaoIndisponivel("JSON do assistente não é um objeto.")

    campos = {}
    for chave in ("risk", "career", "explanation"):
        valor = objeto.get(chave)
        campos[chave] = valor if isinstance(valor, str) else ""
    return campos


class ServicoAvaliacao:
    """Ponto único de avaliação de um aluno.

    Responsabilidades:
    - Produzir sempre um ResultadoAvaliacao, nunca uma exceção
    - Descartar campos parciais quando a resposta do assistente é inválida
    """

    def __init__(self, cliente: ClienteOpenAI | None = None):
        """Inicializa o serviço.

        Parâmetros:
        - cliente (ClienteOpenAI | None): cliente do serviço externo
        """
        self.cliente = cliente or ClienteOpenAI()

    def avaliar(self, estudante: Estudante) -> ResultadoAvaliacao:
        """Avalia risco, carreira e explicação para o aluno.

        Parâmetros:
        - estudante (Estudante): aluno avaliado

        Retorno:
        - ResultadoAvaliacao: resultado completo ou somente risco local

        Quando a resposta do serviço é válida mas não traz carreira, o campo
        recebe "Unknown" em vez de ficar vazio, igual ao resultado degradado.
        A explicação ausente continua vazia.
        """
        try:
            texto = self.cliente.solicitar_avaliacao(estudante)
            campos = interpretar_resposta_assistente(texto)
        except AvaliacaoIndisponivel as erro:
            logger.warning(
                f"Avaliação externa indisponível para matrícula {estudante.roll}: {erro}. "
                "Usando heurística local."
            )
            return self.avaliar_localmente(estudante)

        return ResultadoAvaliacao(
            risk=normalizar_risco(campos["risk"]),
            career=campos["career"] or CARREIRA_DESCONHECIDA,
            explanation=campos["explanation"],
            source=OrigemAvaliacao.SERVICE,
        )

    @staticmethod
    def avaliar_localmente(estudante: Estudante) -> ResultadoAvaliacao:
        """Resultado degradado: só o risco é calculado."""
        return ResultadoAvaliacao(
            risk=calcular_risco_local(estudante),
            career=CARREIRA_DESCONHECIDA,
            explanation=EXPLICACAO_FALLBACK,
            source=OrigemAvaliacao.FALLBACK,
        )
