"""Cliente HTTP do serviço externo de avaliação.

Responsabilidades:
- Montar o corpo da requisição de chat
- Enviar uma única requisição com timeout limitado
- Extrair o texto da resposta do assistente
"""

import os

import requests

from src.config.settings import Configuracoes
from src.domain.errors import AvaliacaoIndisponivel
from src.domain.student import Estudante
from src.infrastructure.assessment.prompts import EXEMPLOS_FIXOS, PROMPT_SISTEMA, TEMPLATE_PEDIDO
from src.util.logger import logger


class ClienteOpenAI:
    """Cliente de chat completions sem retentativas.

    Responsabilidades:
    - Ler a credencial do ambiente a cada chamada
    - Converter qualquer falha em AvaliacaoIndisponivel
    """

    def __init__(self, sessao=None, url: str | None = None, modelo: str | None = None):
        """Inicializa o cliente.

        Parâmetros:
        - sessao (requests.Session | None): sessão HTTP; usa requests diretamente quando omitida
        - url (str | None): endpoint de chat completions
        - modelo (str | None): identificador do modelo
        """
        self.sessao = sessao or requests
        self.url = url or Configuracoes.OPENAI_URL
        self.modelo = modelo or Configuracoes.OPENAI_MODEL

    @staticmethod
    def obter_credencial() -> str | None:
        """Lê a chave da API do ambiente; vazio conta como ausente."""
        chave = os.getenv(Configuracoes.OPENAI_API_KEY_ENV)
        return chave.strip() if chave and chave.strip() else None

    def montar_payload(self, estudante_json: str) -> dict:
        """Monta o corpo com instrução de sistema, exemplos fixos e o pedido real.

        Parâmetros:
        - estudante_json (str): aluno serializado em JSON compacto

        Retorno:
        - dict: corpo da requisição
        """
        mensagens = [{"role": "system", "content": PROMPT_SISTEMA}]
        for pergunta, resposta in EXEMPLOS_FIXOS:
            mensagens.append({"role": "user", "content": pergunta})
            mensagens.append({"role": "assistant", "content": resposta})
        mensagens.append(
            {"role": "user", "content": TEMPLATE_PEDIDO.format(estudante_json=estudante_json)}
        )

        return {
            "model": self.modelo,
            "temperature": Configuracoes.OPENAI_TEMPERATURE,
            "max_tokens": Configuracoes.OPENAI_MAX_TOKENS,
            "messages": mensagens,
        }

    def solicitar_avaliacao(self, estudante: Estudante) -> str:
        """Envia o aluno ao serviço e devolve o texto do assistente.

        Parâmetros:
        - estudante (Estudante): aluno a avaliar

        Retorno:
        - str: conteúdo da primeira escolha

        Exceções:
        - AvaliacaoIndisponivel: sem credencial, falha de rede ou resposta ilegível
        """
        chave = self.obter_credencial()
        if not chave:
            raise AvaliacaoIndisponivel(
                f"Credencial ausente na variável {Configuracoes.OPENAI_API_KEY_ENV}."
            )

        cabecalhos = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {chave}",
        }
        payload = self.montar_payload(estudante.para_json_avaliacao())

        try:
            resposta = self.sessao.post(
                self.url,
                headers=cabecalhos,
                json=payload,
                timeout=Configuracoes.OPENAI_TIMEOUT_SECONDS,
            )
            resposta.raise_for_status()
        except requests.RequestException as erro:
            raise AvaliacaoIndisponivel(f"Falha na chamada ao serviço de avaliação: {erro}") from erro

        try:
            corpo = resposta.json()
        except ValueError as erro:
            raise AvaliacaoIndisponivel("Resposta do serviço não é JSON válido.") from erro

        texto = self.extrair_conteudo(corpo)
        if texto is None:
            raise AvaliacaoIndisponivel("Resposta do serviço sem conteúdo do assistente.")

        logger.info(f"Resposta do serviço de avaliação recebida para matrícula {estudante.roll}.")
        return texto

    @staticmethod
    def extrair_conteudo(corpo) -> str | None:
        """Extrai message.content da primeira escolha, ou o campo legado text.

        Parâmetros:
        - corpo (Any): JSON decodificado da resposta

        Retorno:
        - str | None: texto do assistente ou None quando ausente
        """
        if not isinstance(corpo, dict):
            return None
        escolhas = corpo.get("choices")
        if not isinstance(escolhas, list) or not escolhas:
            return None
        primeira = escolhas[0]
        if not isinstance(primeira, dict):
            return None

        mensagem = primeira.get("message")
        if mensagem is not None:
            conteudo = mensagem.get("content") if isinstance(mensagem, dict) else None
        else:
            conteudo = primeira.get("text")
        return conteudo if isinstance(conteudo, str) else None
