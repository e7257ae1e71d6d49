"""Testes do serviço de avaliação."""

from unittest.mock import Mock

import pytest

from src.application.assessment_service import (
    ServicoAvaliacao,
    calcular_risco_local,
    interpretar_resposta_assistente,
    normalizar_risco,
)
from src.domain.assessment import (
    CARREIRA_DESCONHECIDA,
    EXPLICACAO_FALLBACK,
    NivelRisco,
    OrigemAvaliacao,
)
from src.domain.errors import AvaliacaoIndisponivel
from src.domain.student import Estudante
from src.infrastructure.assessment.openai_client import ClienteOpenAI


def criar_estudante(media, frequencia):
    return Estudante(name="Teste", roll=1, marks=[media] * 5, attendance=frequencia)


def criar_servico(texto=None, erro=None):
    cliente = Mock()
    if erro is not None:
        cliente.solicitar_avaliacao.side_effect = erro
    else:
        cliente.solicitar_avaliacao.return_value = texto
    return ServicoAvaliacao(cliente=cliente), cliente


def test_heuristica_local_casos_de_referencia():
    assert calcular_risco_local(criar_estudante(30, 40)) == NivelRisco.HIGH
    assert calcular_risco_local(criar_estudante(55, 70)) == NivelRisco.MEDIUM
    assert calcular_risco_local(criar_estudante(90, 90)) == NivelRisco.LOW


def test_heuristica_local_limites():
    assert calcular_risco_local(criar_estudante(45, 50)) == NivelRisco.MEDIUM
    assert calcular_risco_local(criar_estudante(44.99, 99)) == NivelRisco.HIGH
    assert calcular_risco_local(criar_estudante(99, 49.99)) == NivelRisco.HIGH
    assert calcular_risco_local(criar_estudante(60, 65)) == NivelRisco.LOW
    assert calcular_risco_local(criar_estudante(99, 64.9)) == NivelRisco.MEDIUM


def test_normalizar_risco():
    assert normalizar_risco("high") == NivelRisco.HIGH
    assert normalizar_risco(" Medium ") == NivelRisco.MEDIUM
    assert normalizar_risco("LOW") == NivelRisco.LOW
    assert normalizar_risco("CRITICAL") == NivelRisco.LOW
    assert normalizar_risco("") == NivelRisco.LOW


def test_interpretar_resposta_campos_ausentes_ficam_vazios():
    campos = interpretar_resposta_assistente('{"risk":"HIGH","career":42}')

    assert campos == {"risk": "HIGH", "career": "", "explanation": ""}


def test_interpretar_resposta_invalida():
    with pytest.raises(AvaliacaoIndisponivel):
        interpretar_resposta_assistente("Sure! Here is the JSON: {")
    with pytest.raises(AvaliacaoIndisponivel):
        interpretar_resposta_assistente('["HIGH"]')


def test_avaliar_resultado_completo():
    servico, cliente = criar_servico(
        '{"risk":"medium","career":"Arts / Humanities","explanation":"Inglês forte."}'
    )
    estudante = criar_estudante(90, 90)

    resultado = servico.avaliar(estudante)

    assert resultado.risk == NivelRisco.MEDIUM
    assert resultado.career == "Arts / Humanities"
    assert resultado.explanation == "Inglês forte."
    assert resultado.source == OrigemAvaliacao.SERVICE
    cliente.solicitar_avaliacao.assert_called_once_with(estudante)


def test_avaliar_servico_sem_carreira_vira_desconhecida():
    servico, _ = criar_servico('{"risk":"HIGH"}')

    resultado = servico.avaliar(criar_estudante(90, 90))

    assert resultado.risk == NivelRisco.HIGH
    assert resultado.career == CARREIRA_DESCONHECIDA
    assert resultado.explanation == ""


def test_avaliar_indisponivel_usa_heuristica_local():
    servico, _ = criar_servico(erro=AvaliacaoIndisponivel("sem credencial"))

    resultado = servico.avaliar(criar_estudante(30, 40))

    assert resultado.risk == NivelRisco.HIGH
    assert resultado.career == CARREIRA_DESCONHECIDA
    assert resultado.explanation == EXPLICACAO_FALLBACK
    assert resultado.source == OrigemAvaliacao.FALLBACK


def test_avaliar_json_do_assistente_invalido_descarta_campos_parciais():
    servico, _ = criar_servico('{"risk":"LOW","career":"Management"')

    resultado = servico.avaliar(criar_estudante(55, 70))

    assert resultado.risk == NivelRisco.MEDIUM
    assert resultado.career == CARREIRA_DESCONHECIDA
    assert resultado.source == OrigemAvaliacao.FALLBACK


def test_avaliar_sem_credencial_sem_rede(estudante_exemplo):
    sessao = Mock()
    servico = ServicoAvaliacao(cliente=ClienteOpenAI(sessao=sessao))

    resultado = servico.avaliar(Estudante(**estudante_exemplo))

    assert resultado.risk == NivelRisco.LOW
    assert resultado.source == OrigemAvaliacao.FALLBACK
    sessao.post.assert_not_called()


def test_cada_avaliacao_refaz_a_chamada():
    servico, cliente = criar_servico('{"risk":"LOW","career":"Management","explanation":"ok"}')
    estudante = criar_estudante(80, 80)

    servico.avaliar(estudante)
    servico.avaliar(estudante)

    assert cliente.solicitar_avaliacao.call_count == 2
