"""Erros de domínio do cadastro de alunos.

Responsabilidades:
- Nomear as falhas esperadas do repositório e dos serviços
- Permitir que controladores traduzam falhas em respostas
"""


class ErroRegistroNaoEncontrado(LookupError):
    """Nenhum aluno corresponde à matrícula ou ao nome informado."""


class ErroMatriculaDuplicada(ValueError):
    """Já existe um aluno com a matrícula informada."""


class ErroValidacao(ValueError):
    """Notas ou frequência fora do intervalo [0, 100]."""


class ErroPersistencia(RuntimeError):
    """Falha de leitura ou escrita no arquivo de registros.

    Arquivo inexistente na carga não é erro e nunca gera esta exceção.
    """


class AvaliacaoIndisponivel(RuntimeError):
    """Serviço de avaliação sem credencial, inacessível ou com resposta ilegível.

    Nunca chega ao chamador de ``ServicoAvaliacao.avaliar``: é sempre convertida
    na heurística local.
    """
