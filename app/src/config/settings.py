"""Configurações centrais do projeto.

Responsabilidades:
- Definir caminho do arquivo de registros
- Definir parâmetros do serviço de avaliação
- Definir limites do registro de aluno
"""

import os
from pathlib import Path


class Configuracoes:
    """Centraliza configurações da aplicação.

    Responsabilidades:
    - Fornecer caminhos de diretórios
    - Declarar parâmetros da chamada ao serviço externo
    - Declarar limites do formato binário
    """

    BASE_DIR = Path(__file__).resolve().parents[2]
    DEFAULT_DATA_DIR = os.path.join(BASE_DIR, "data")
    DATA_DIR = os.path.abspath(os.getenv("DATA_DIR", DEFAULT_DATA_DIR))
    DATA_PATH = os.getenv("DATA_PATH", os.path.join(DATA_DIR, "students.dat"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    NAME_LEN = 100
    NUM_SUBJECTS = 5
    DISCIPLINAS = ["Mathematics", "Physics", "Chemistry", "ComputerScience", "English"]
    NOTA_MINIMA_APROVACAO = float(os.getenv("NOTA_MINIMA_APROVACAO", "40.0"))

    OPENAI_URL = os.getenv("OPENAI_URL", "https://api.openai.com/v1/chat/completions")
    OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    OPENAI_API_KEY_ENV = "OPENAI_API_KEY"
    OPENAI_TEMPERATURE = float(os.getenv("OPENAI_TEMPERATURE", "0.0"))
    OPENAI_MAX_TOKENS = int(os.getenv("OPENAI_MAX_TOKENS", "300"))
    OPENAI_TIMEOUT_SECONDS = float(os.getenv("OPENAI_TIMEOUT_SECONDS", "10.0"))

    # Limiares da heurística local (média, frequência).
    LIMIAR_RISCO_ALTO = (45.0, 50.0)
    LIMIAR_RISCO_MEDIO = (60.0, 65.0)

    PORT = int(os.getenv("PORT", "8000"))
