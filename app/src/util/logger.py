"""Logger único do cadastro de alunos.

Usado pelo repositório, pelos serviços, pela API e pelo menu. Tudo vai para
stdout, inclusive avisos de gravação e de avaliação degradada.
"""

import logging
import sys

from src.config.settings import Configuracoes


class FabricaLogger:
    """Cria o logger da aplicação uma única vez por nome."""

    @classmethod
    def configurar(cls, nome: str = "REGISTRO_ALUNOS_APP", nivel: str | None = None):
        """Devolve o logger nomeado, adicionando o handler de stdout na primeira chamada.

        Parâmetros:
        - nome (str): nome do logger
        - nivel (str | None): nível de log; usa LOG_LEVEL quando omitido

        Retorno:
        - logging.Logger: logger pronto, sem propagar para o logger raiz
        """
        logger_instancia = logging.getLogger(nome)
        if logger_instancia.handlers:
            return logger_instancia

        logger_instancia.setLevel(nivel or Configuracoes.LOG_LEVEL)
        handler_console = logging.StreamHandler(sys.stdout)
        handler_console.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger_instancia.addHandler(handler_console)
        logger_instancia.propagate = False
        return logger_instancia


logger = FabricaLogger.configurar()
