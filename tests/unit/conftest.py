"""Fixtures compartilhadas para os testes."""

import sys
from pathlib import Path

import pytest


RAIZ = Path(__file__).resolve().parents[2]
DIRETORIO_APP = RAIZ / "app"
if str(DIRETORIO_APP) not in sys.path:
    sys.path.insert(0, str(DIRETORIO_APP))


@pytest.fixture(autouse=True)
def sem_credencial(monkeypatch):
    """Garante que nenhum teste chame o serviço externo real."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)


@pytest.fixture()
def estudante_exemplo():
    """Retorna um dicionário com dados completos de aluno."""
    return {
        "name": "Alice",
        "roll": 101,
        "marks": [95.0, 90.0, 88.0, 96.0, 80.0],
        "attendance": 92.0,
    }


@pytest.fixture()
def caminho_base(tmp_path):
    """Caminho de arquivo de registros ainda inexistente."""
    return str(tmp_path / "data" / "students.dat")


@pytest.fixture()
def servico_estudantes(caminho_base):
    """Sessão de cadastro já iniciada sobre um arquivo vazio."""
    from src.application.student_service import ServicoEstudantes

    servico = ServicoEstudantes(caminho=caminho_base)
    servico.iniciar()
    return servico
