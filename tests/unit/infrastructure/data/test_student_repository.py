"""Testes do repositório de alunos."""

import os

import pytest

from src.domain.errors import ErroMatriculaDuplicada, ErroPersistencia, ErroRegistroNaoEncontrado
from src.domain.student import Estudante
from src.infrastructure.data.record_codec import TAMANHO_REGISTRO
from src.infrastructure.data.student_repository import RepositorioEstudantes


def criar_estudante(matricula, nome="A", notas=None, frequencia=90.0):
    return Estudante(
        name=nome,
        roll=matricula,
        marks=notas if notas is not None else [80.0] * 5,
        attendance=frequencia,
    )


def test_carregar_arquivo_inexistente_gera_base_vazia(caminho_base):
    repo = RepositorioEstudantes()

    total = repo.carregar(caminho_base)

    assert total == 0
    assert len(repo) == 0
    assert repo.listar_ordenado_por_matricula() is None


def test_cenario_duplicata_e_remocao(caminho_base):
    repo = RepositorioEstudantes()
    repo.carregar(caminho_base)

    repo.adicionar(criar_estudante(1))
    with pytest.raises(ErroMatriculaDuplicada):
        repo.adicionar(criar_estudante(1, nome="Outro"))

    assert len(repo) == 1
    assert repo.buscar_por_matricula(1).name == "A"
    assert repo.remover(1) is True
    assert repo.remover(1) is False


def test_matriculas_sempre_unicas():
    repo = RepositorioEstudantes()
    for matricula in [5, 3, 5, 9, 3, 1]:
        try:
            repo.adicionar(criar_estudante(matricula))
        except ErroMatriculaDuplicada:
            pass

    matriculas = [estudante.roll for estudante in repo]
    assert len(matriculas) == len(set(matriculas)) == 4


def test_salvar_e_carregar_reproduz_registros(caminho_base):
    repo = RepositorioEstudantes()
    repo.adicionar(criar_estudante(30, nome="Carol", notas=[72, 68, 65, 70, 85], frequencia=90))
    repo.adicionar(criar_estudante(10, nome="Bob", notas=[48, 50, 45, 30, 92], frequencia=88.5))
    repo.adicionar(criar_estudante(20, nome="João", notas=[0, 100, 33.3, 66.6, 1], frequencia=0))
    repo.salvar(caminho_base)

    novo = RepositorioEstudantes()
    novo.carregar(caminho_base)

    assert os.path.getsize(caminho_base) == 3 * TAMANHO_REGISTRO
    assert {e.roll: e for e in novo} == {e.roll: e for e in repo}


def test_nome_com_nul_sobrevive_a_salvar_e_carregar(caminho_base):
    repo = RepositorioEstudantes()
    repo.adicionar(criar_estudante(7, nome="A\x00B"))
    repo.salvar(caminho_base)

    novo = RepositorioEstudantes()
    novo.carregar(caminho_base)

    assert novo.buscar_por_matricula(7) == repo.buscar_por_matricula(7)
    assert novo.buscar_por_matricula(7).name == "A"


def test_carregar_substitui_conteudo_em_memoria(caminho_base):
    repo = RepositorioEstudantes()
    repo.adicionar(criar_estudante(1))
    repo.salvar(caminho_base)

    repo.adicionar(criar_estudante(2))
    repo.carregar(caminho_base)

    assert 2 not in repo
    assert 1 in repo


def test_carregar_ignora_registro_final_incompleto(caminho_base):
    repo = RepositorioEstudantes()
    repo.adicionar(criar_estudante(1))
    repo.adicionar(criar_estudante(2))
    repo.salvar(caminho_base)

    with open(caminho_base, "r+b") as arquivo:
        arquivo.truncate(2 * TAMANHO_REGISTRO - 10)

    novo = RepositorioEstudantes()
    total = novo.carregar(caminho_base)

    assert total == 1
    assert 1 in novo


def test_carregar_aceita_registro_corrompido_completo(caminho_base):
    repo = RepositorioEstudantes()
    repo.adicionar(criar_estudante(1, notas=[500, -20, 0, 0, 0], frequencia=1000))
    repo.salvar(caminho_base)

    novo = RepositorioEstudantes()
    novo.carregar(caminho_base)

    assert novo.buscar_por_matricula(1).marks[0] == 500


def test_carregar_falha_de_leitura_preserva_memoria(monkeypatch, caminho_base):
    repo = RepositorioEstudantes()
    repo.adicionar(criar_estudante(7))

    def levantar_erro(*args, **kwargs):
        raise PermissionError("negado")

    monkeypatch.setattr("builtins.open", levantar_erro)

    with pytest.raises(ErroPersistencia):
        repo.carregar(caminho_base)
    assert 7 in repo


def test_salvar_falha_de_escrita(monkeypatch, caminho_base):
    repo = RepositorioEstudantes()
    repo.adicionar(criar_estudante(1))

    def levantar_erro(*args, **kwargs):
        raise OSError("disco cheio")

    monkeypatch.setattr("builtins.open", levantar_erro)

    with pytest.raises(ErroPersistencia):
        repo.salvar(caminho_base)


def test_remover_inexistente_nao_altera_arquivo(caminho_base):
    repo = RepositorioEstudantes()
    repo.adicionar(criar_estudante(1))
    repo.salvar(caminho_base)
    with open(caminho_base, "rb") as arquivo:
        antes = arquivo.read()

    assert repo.remover(99) is False
    assert repo.remover(1) is True

    with open(caminho_base, "rb") as arquivo:
        assert arquivo.read() == antes


def test_atualizar_campos_opcionais():
    repo = RepositorioEstudantes()
    repo.adicionar(criar_estudante(1, nome="Ana", notas=[10, 20, 30, 40, 50], frequencia=60))

    repo.atualizar(1, frequencia=75)
    estudante = repo.buscar_por_matricula(1)
    assert estudante.name == "Ana"
    assert estudante.marks == [10, 20, 30, 40, 50]
    assert estudante.attendance == 75

    repo.atualizar(1, nome="Ana Maria", notas=[1, 2, 3, 4, 5])
    assert estudante.name == "Ana Maria"
    assert estudante.marks == [1, 2, 3, 4, 5]
    assert estudante.attendance == 75


def test_atualizar_nao_valida_faixas():
    repo = RepositorioEstudantes()
    repo.adicionar(criar_estudante(1))

    repo.atualizar(1, frequencia=180)

    assert repo.buscar_por_matricula(1).attendance == 180


def test_atualizar_inexistente_nao_altera_registros():
    repo = RepositorioEstudantes()
    repo.adicionar(criar_estudante(1, frequencia=90))

    with pytest.raises(ErroRegistroNaoEncontrado):
        repo.atualizar(2, None, None, 40)

    assert repo.buscar_por_matricula(1).attendance == 90
    assert len(repo) == 1


def test_buscar_por_nome_exato_e_sensivel_a_maiusculas():
    repo = RepositorioEstudantes()
    repo.adicionar(criar_estudante(1, nome="Alice"))

    assert repo.buscar_por_nome("Alice").roll == 1
    assert repo.buscar_por_nome("alice") is None
    assert repo.buscar_por_nome("Ali") is None


def test_buscar_por_nome_repetido_retorna_mais_recente(caminho_base):
    repo = RepositorioEstudantes()
    repo.adicionar(criar_estudante(5, nome="Sam"))
    repo.adicionar(criar_estudante(2, nome="Sam"))

    assert repo.buscar_por_nome("Sam").roll == 2

    repo.salvar(caminho_base)
    novo = RepositorioEstudantes()
    novo.carregar(caminho_base)
    assert novo.buscar_por_nome("Sam").roll == 2


def test_listar_ordenado_nao_altera_ordem_interna():
    repo = RepositorioEstudantes()
    for matricula in [42, -1, 7, 100, 0]:
        repo.adicionar(criar_estudante(matricula))

    ordenados = repo.listar_ordenado_por_matricula()

    assert [e.roll for e in ordenados] == [-1, 0, 7, 42, 100]
    assert len(ordenados) == len(repo)
    assert [e.roll for e in repo] == [42, -1, 7, 100, 0]


def test_limpar_libera_registros():
    repo = RepositorioEstudantes()
    repo.adicionar(criar_estudante(1))

    repo.limpar()

    assert len(repo) == 0
