"""Ponto de entrada da API FastAPI.

Responsabilidades:
- Configurar a aplicação FastAPI
- Registrar rotas e eventos
- Carregar a base no startup e salvá-la no shutdown
"""

import uvicorn
from fastapi import FastAPI, HTTPException

from src.api.controller import ControladorEstudantes
from src.application.student_service import ServicoEstudantes
from src.config.settings import Configuracoes
from src.domain.errors import ErroPersistencia
from src.util.logger import logger

app = FastAPI(
    title="Registro de Alunos",
    description="API de cadastro de alunos com avaliação de risco e sugestão de carreira",
    version="1.0.0",
)


@app.on_event("startup")
async def evento_inicializacao():
    """Cria a sessão de cadastro e carrega a base do disco.

    Retorno:
    - None: não retorna valor
    """
    logger.info("Inicializando base de alunos...")
    servico = ServicoEstudantes(caminho=Configuracoes.DATA_PATH)
    try:
        servico.iniciar()
    except ErroPersistencia as erro:
        logger.warning(f"Falha ao carregar base. Iniciando vazia: {erro}")
    app.state.servico_estudantes = servico


@app.on_event("shutdown")
async def evento_encerramento():
    """Salva a base e libera a sessão."""
    servico = getattr(app.state, "servico_estudantes", None)
    if servico is None:
        return
    logger.info("Encerrando base de alunos...")
    servico.encerrar()
    app.state.servico_estudantes = None


controlador_estudantes = ControladorEstudantes()
app.include_router(controlador_estudantes.roteador, prefix="/api/v1", tags=["Alunos"])


@app.get("/health", tags=["Infraestrutura"])
def checar_saude():
    """Endpoint de health check.

    Retorno:
    - dict: status da aplicação e total de registros
    """
    servico = getattr(app.state, "servico_estudantes", None)
    if servico is None:
        raise HTTPException(status_code=503, detail="Base de alunos não inicializada.")
    return {"status": "ok", "records": servico.total()}


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=Configuracoes.PORT)
